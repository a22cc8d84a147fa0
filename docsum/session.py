"""Session controller — owns the active document, last summary, and preferences.

``SummarizerSession`` is the only holder of mutable state.  Library errors
raised by ``ingest`` and ``llm`` are caught here, logged, and turned into a
single user-visible ``Status``; the public methods report success through
their return value instead of raising.
"""

import logging
from pathlib import Path
from typing import Callable, get_args

from docsum import llm
from docsum.ingest import check_file, load_document
from docsum.models import (
    Config,
    Document,
    EmptyContent,
    IngestError,
    LengthClass,
    Preferences,
    Status,
    StatusKind,
    SummarizeError,
    SummaryRequest,
    SummaryResult,
    TooLarge,
    UnsupportedType,
)
from docsum.preferences import PreferenceStore
from docsum.renderer import summary_filename

logger = logging.getLogger(__name__)

MSG_UNSUPPORTED_TYPE = "Please select a PDF or DOCX file."
MSG_TOO_LARGE = "File size must be less than 10MB."
MSG_EXTRACTING = "Extracting text from document..."
MSG_LOADED = "Document loaded successfully!"
MSG_EMPTY = "Could not extract text from document. Please try another file."
MSG_EXTRACTION_FAILED = "Error processing file. Please try again."
MSG_MISSING_INPUT = "Please upload a document and enter your API key."
MSG_GENERATING = "Generating summary with AI..."
MSG_GENERATED = "Summary generated successfully!"
MSG_COPIED = "Summary copied to clipboard!"
MSG_COPY_FAILED = "Failed to copy to clipboard."
MSG_DOWNLOADED = "Summary downloaded successfully!"
MSG_DOWNLOAD_FAILED = "Failed to download summary."
MSG_NO_SUMMARY = "No summary to save yet."


class SummarizerSession:
    """State for one user working on one document at a time.

    Attributes:
        config:      Runtime configuration passed to the provider clients.
        store:       Where preferences are persisted.
        preferences: Current provider, API key, and length class.
        document:    The active document, or ``None``.
        summary:     The last generated summary, or ``None``.
        status:      The current status line, or ``None`` when hidden.
        busy:        True while a summarization request is in flight.
    """

    def __init__(self, config: Config, store: PreferenceStore | None = None) -> None:
        self.config = config
        self.store = store or PreferenceStore(config.preferences_path)
        self.preferences: Preferences = self.store.load()
        self.document: Document | None = None
        self.summary: SummaryResult | None = None
        self.status: Status | None = None
        self.busy = False

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    def set_provider(self, provider: str) -> None:
        self._update_preferences(provider=provider)

    def set_api_key(self, api_key: str) -> None:
        self._update_preferences(api_key=api_key)

    def set_length(self, length: LengthClass) -> bool:
        """Store a new length class; unknown values are ignored with a warning."""
        if length not in get_args(LengthClass):
            logger.warning("Ignoring unknown summary length: %r", length)
            return False
        self._update_preferences(length=length)
        return True

    def _update_preferences(self, **changes) -> None:
        self.preferences = Preferences.model_validate(
            {**self.preferences.model_dump(), **changes}
        )
        self.store.save(self.preferences)

    # ------------------------------------------------------------------
    # Document selection
    # ------------------------------------------------------------------

    def select_file(self, path: Path, mime_type: str | None = None) -> bool:
        """Make *path* the active document.

        Type and size are checked first; a file that fails those checks
        leaves the current document in place.  Once the checks pass, the
        previous document and summary are discarded before extraction
        starts, so an extraction failure leaves the session empty.

        Returns:
            True if the document was loaded.
        """
        try:
            kind, size = check_file(path, mime_type)
        except UnsupportedType as exc:
            logger.warning("%s", exc)
            self._set_status(MSG_UNSUPPORTED_TYPE, "error")
            return False
        except TooLarge as exc:
            logger.warning("%s", exc)
            self._set_status(MSG_TOO_LARGE, "error")
            return False
        except IngestError as exc:
            logger.error("%s", exc)
            self._set_status(MSG_EXTRACTION_FAILED, "error")
            return False

        self.remove_file()
        self._set_status(MSG_EXTRACTING, "info")
        try:
            document = load_document(path, kind, size)
        except EmptyContent as exc:
            logger.warning("%s", exc)
            self._set_status(MSG_EMPTY, "error")
            return False
        except IngestError as exc:
            logger.error("Error processing file: %s", exc)
            self._set_status(MSG_EXTRACTION_FAILED, "error")
            return False

        self.document = document
        self._set_status(MSG_LOADED, "success")
        return True

    def remove_file(self) -> None:
        """Forget the active document, its summary, and the status line."""
        self.document = None
        self.summary = None
        self.status = None

    # ------------------------------------------------------------------
    # Summarization
    # ------------------------------------------------------------------

    @property
    def can_summarize(self) -> bool:
        """True when a document is loaded, a key is set, and nothing is in flight."""
        has_text = self.document is not None and self.document.extracted_text is not None
        has_key = bool(self.preferences.api_key.strip())
        return has_text and has_key and not self.busy

    def summarize(self) -> SummaryResult | None:
        """Summarize the active document with the stored preferences.

        Returns:
            The new ``SummaryResult``, or ``None`` on failure (see ``status``).
        """
        if self.busy:
            logger.warning("Summarization already in progress")
            return None

        api_key = self.preferences.api_key.strip()
        if self.document is None or not self.document.extracted_text or not api_key:
            logger.warning("Cannot summarize: no document text or no API key")
            self._set_status(MSG_MISSING_INPUT, "error")
            return None

        request = SummaryRequest(
            source_text=self.document.extracted_text,
            provider_id=self.preferences.provider,
            length_class=self.preferences.length,
            api_key=api_key,
        )

        self.busy = True
        self._set_status(MSG_GENERATING, "info")
        try:
            result = llm.summarize(request, self.config)
        except SummarizeError as exc:
            logger.error("Summarization error: %s", exc)
            self._set_status(f"Error: {exc}", "error")
            return None
        finally:
            self.busy = False

        self.summary = result
        self._set_status(MSG_GENERATED, "success")
        return result

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def copy_summary(self, writer: Callable[[str], None]) -> bool:
        """Hand the summary text to a clipboard *writer*."""
        if self.summary is None:
            self._set_status(MSG_NO_SUMMARY, "error")
            return False
        try:
            writer(self.summary.text)
        except Exception as exc:
            logger.error("Copy failed: %s", exc)
            self._set_status(MSG_COPY_FAILED, "error")
            return False
        self._set_status(MSG_COPIED, "success")
        return True

    def download_summary(self, output_dir: Path | None = None) -> Path | None:
        """Write the summary to ``<basename>_summary.txt`` in *output_dir*.

        Returns:
            The written path, or ``None`` if there is no summary or the file
            could not be written.
        """
        if self.summary is None:
            self._set_status(MSG_NO_SUMMARY, "error")
            return None
        target_dir = output_dir or self.config.output_dir
        name = self.document.name if self.document is not None else None
        path = target_dir / summary_filename(name)
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(self.summary.text, encoding="utf-8")
        except OSError as exc:
            logger.error("Download failed: %s", exc)
            self._set_status(MSG_DOWNLOAD_FAILED, "error")
            return None
        logger.info("Written: %s", path)
        self._set_status(MSG_DOWNLOADED, "success")
        return path

    def _set_status(self, message: str, kind: StatusKind) -> None:
        self.status = Status(message=message, kind=kind)
