"""File validation and text extraction — thin wrappers around pypdf and python-docx.

``ingest`` turns a file on disk into a ``Document``.  Validation (type, size)
runs before the file is read, and ``check_file`` exposes it on its own so the
session can reject a file without disturbing the active document.
"""

import io
import logging
import mimetypes
from pathlib import Path

import docx
from docx.table import Table
from pypdf import PdfReader

from docsum.models import (
    MIN_TEXT_CHARS,
    Document,
    EmptyContent,
    ExtractionFailed,
    MimeKind,
    TooLarge,
    UnsupportedType,
)

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

MAX_FILE_BYTES = 10 * 1024 * 1024

_MIME_KINDS: dict[str, MimeKind] = {
    PDF_MIME: "pdf",
    DOCX_MIME: "docx",
}

# mimetypes does not know .docx on every platform.
_SUFFIX_MIMES = {
    ".pdf": PDF_MIME,
    ".docx": DOCX_MIME,
}


def guess_mime_type(path: Path) -> str | None:
    """Return the MIME type implied by the filename, or None if unknown."""
    known = _SUFFIX_MIMES.get(path.suffix.lower())
    if known:
        return known
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type


def check_file(path: Path, mime_type: str | None = None) -> tuple[MimeKind, int]:
    """Validate type and size without reading the file contents.

    Returns:
        ``(mime_kind, size_bytes)``.

    Raises:
        UnsupportedType: MIME type is not PDF or DOCX.
        TooLarge:        file is bigger than ``MAX_FILE_BYTES``.
        ExtractionFailed: the file cannot be stat'ed.
    """
    mime_type = mime_type or guess_mime_type(path)
    kind = _MIME_KINDS.get(mime_type or "")
    if kind is None:
        raise UnsupportedType(f"Unsupported file type for {path.name}: {mime_type}")

    try:
        size = path.stat().st_size
    except OSError as e:
        raise ExtractionFailed(f"Failed to read {path}: {e}") from e

    if size > MAX_FILE_BYTES:
        raise TooLarge(
            f"{path.name} is {size:,} bytes; the limit is {MAX_FILE_BYTES:,} bytes"
        )
    return kind, size


def read_buffer(path: Path) -> bytes:
    """Read the whole file into memory.

    Raises:
        ExtractionFailed: wrapping any ``OSError``.
    """
    try:
        return path.read_bytes()
    except OSError as e:
        raise ExtractionFailed(f"Failed to read {path}: {e}") from e


def ingest(path: Path, mime_type: str | None = None) -> Document:
    """Validate, read, and extract one file.

    Args:
        path:      File to ingest.
        mime_type: MIME type reported by the caller.  Guessed from the
                   filename when omitted.

    Returns:
        A ``Document`` whose ``extracted_text`` is longer than 50 characters.

    Raises:
        UnsupportedType, TooLarge, ExtractionFailed, EmptyContent.
    """
    kind, size = check_file(path, mime_type)
    return load_document(path, kind, size)


def load_document(path: Path, kind: MimeKind, size: int) -> Document:
    """Extract an already validated file into a ``Document``.

    Raises:
        ExtractionFailed, EmptyContent.
    """
    text = extract_text(path, kind)
    if len(text) <= MIN_TEXT_CHARS:
        raise EmptyContent(f"Only {len(text)} characters extracted from {path.name}")
    return Document(name=path.name, size_bytes=size, mime_kind=kind, extracted_text=text)


def extract_text(path: Path, kind: MimeKind) -> str:
    """Read *path* and dispatch to the extractor for *kind*."""
    data = read_buffer(path)
    logger.info("Extracting %s text from: %s (%s bytes)", kind, path.name, f"{len(data):,}")
    if kind == "pdf":
        text = _extract_pdf(data, path.name)
    else:
        text = _extract_docx(data, path.name)
    logger.info("Extraction complete: %s chars", f"{len(text):,}")
    return text


def _extract_pdf(data: bytes, name: str) -> str:
    """Join each page's text items with spaces and the pages with newlines.

    Raises:
        ExtractionFailed: wrapping any exception raised by pypdf.
    """
    try:
        reader = PdfReader(io.BytesIO(data))
        pages: list[str] = []
        for page in reader.pages:
            items: list[str] = []

            def collect(text, *_args) -> None:
                item = text.strip()
                if item:
                    items.append(item)

            page.extract_text(visitor_text=collect)
            pages.append(" ".join(items))
        logger.debug("Read %d PDF pages from %s", len(pages), name)
        return "\n".join(pages).strip()
    except Exception as e:
        raise ExtractionFailed(f"Failed to parse {name}: {e}") from e


def _extract_docx(data: bytes, name: str) -> str:
    """Raw text of paragraphs and table cells in document order.

    Raises:
        ExtractionFailed: wrapping any exception raised by python-docx.
    """
    try:
        document = docx.Document(io.BytesIO(data))
        lines: list[str] = []
        for block in document.iter_inner_content():
            if isinstance(block, Table):
                for row in block.rows:
                    lines.extend(_unique_cell_texts(row.cells))
            else:
                lines.append(block.text)
        logger.debug("Read %d DOCX lines from %s", len(lines), name)
        return "\n".join(lines).strip()
    except Exception as e:
        raise ExtractionFailed(f"Failed to parse {name}: {e}") from e


def _unique_cell_texts(cells) -> list[str]:
    # python-docx repeats a horizontally merged cell once per grid column.
    kept = []
    for cell in cells:
        if not any(cell._tc is seen._tc for seen in kept):
            kept.append(cell)
    return [cell.text for cell in kept]
