"""Pydantic models, dataclass Config, and exceptions for the docsum pipeline.

This module only defines the *shape* of the data that flows between
ingestion, the provider clients, and the session: documents, requests,
results, persisted preferences, and runtime configuration.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

MimeKind = Literal["pdf", "docx"]
"""The two accepted document formats."""

LengthClass = Literal["short", "medium", "long"]
"""Target verbosity of a generated summary."""

StatusKind = Literal["info", "success", "error"]

#: Extracted text must be strictly longer than this to count as content.
MIN_TEXT_CHARS = 50

# ---------------------------------------------------------------------------
# Documents and summaries
# ---------------------------------------------------------------------------


class Document(BaseModel):
    """A validated, extracted input file.

    Created by ``ingest.ingest()`` and held by the session until another file
    is selected or the current one is removed.
    """

    name: str
    size_bytes: int = Field(ge=0)
    mime_kind: MimeKind
    extracted_text: str | None = None

    @model_validator(mode="after")
    def _validate_text_length(self) -> "Document":
        if self.extracted_text is not None and len(self.extracted_text) <= MIN_TEXT_CHARS:
            raise ValueError(
                f"extracted_text must be longer than {MIN_TEXT_CHARS} characters"
            )
        return self


class SummaryRequest(BaseModel):
    """One summarization call.  Built per request and never persisted.

    ``provider_id`` is a plain string; unknown ids are reported by
    ``llm.get_provider`` as ``UnsupportedProvider``.
    """

    source_text: str
    provider_id: str
    length_class: LengthClass
    api_key: str


class SummaryResult(BaseModel):
    """The trimmed completion text returned by a provider."""

    text: str


class Status(BaseModel):
    """The single user-visible status line."""

    message: str
    kind: StatusKind


# ---------------------------------------------------------------------------
# Preferences
# ---------------------------------------------------------------------------


class Preferences(BaseModel):
    """User preferences persisted between sessions.

    Serialized under the fixed storage keys ``aiProvider``, ``apiKey`` and
    ``summaryLength`` (see ``preferences.PreferenceStore``).
    """

    model_config = ConfigDict(populate_by_name=True)

    provider: str = Field(default="openai", alias="aiProvider")
    api_key: str = Field(default="", alias="apiKey")
    length: LengthClass = Field(default="medium", alias="summaryLength")


# ---------------------------------------------------------------------------
# Config (dataclass — not pydantic; holds runtime settings)
# ---------------------------------------------------------------------------


def _default_preferences_path() -> Path:
    env_path = os.environ.get("DOCSUM_PREFERENCES")
    if env_path:
        return Path(env_path)
    return Path.home() / ".docsum" / "preferences.json"


@dataclass
class Config:
    """Runtime configuration for the docsum pipeline.

    Attributes:
        preferences_path:    JSON file holding the persisted ``Preferences``.
        output_dir:          Directory that downloaded summaries are written to.
        openai_url:          Chat-completions endpoint.
        openai_model:        Model name sent in the OpenAI request body.
        gemini_url_template: generateContent endpoint; ``{model}`` is filled
                             from ``gemini_model``.
        gemini_model:        Gemini model name.
        timeout_s:           Seconds the HTTP transport waits for a provider
                             before giving up.
        verbose:             If True, log at DEBUG level.
    """

    preferences_path: Path = field(default_factory=_default_preferences_path)
    output_dir: Path = Path(".")
    openai_url: str = "https://api.openai.com/v1/chat/completions"
    openai_model: str = "gpt-3.5-turbo"
    gemini_url_template: str = (
        "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
    )
    gemini_model: str = "gemini-2.0-flash"
    timeout_s: int = 120
    verbose: bool = False


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class DocsumError(Exception):
    """Base class for every error raised by the docsum package."""


class IngestError(DocsumError):
    """Raised when a selected file cannot become a ``Document``."""


class UnsupportedType(IngestError):
    """The file is neither a PDF nor a DOCX document."""


class TooLarge(IngestError):
    """The file exceeds the upload size ceiling."""


class ExtractionFailed(IngestError):
    """The file could not be read or its format could not be parsed."""


class EmptyContent(IngestError):
    """Extraction succeeded but produced too little text to summarize."""


class SummarizeError(DocsumError):
    """Raised when a summary cannot be produced."""


class MissingInput(SummarizeError):
    """No document text or no API key at summarize time."""


class UnsupportedProvider(SummarizeError):
    """The provider id matches no registered provider."""


class EmptyCompletion(SummarizeError):
    """A successful response did not carry completion text."""


class ProviderHttpError(SummarizeError):
    """The provider answered with a non-2xx status or could not be reached.

    Attributes:
        provider:    Display name of the provider (``"OpenAI"``, ``"Gemini"``).
        status_code: HTTP status, or ``None`` when no response was received.
    """

    def __init__(
        self, message: str, provider: str, status_code: int | None = None
    ) -> None:
        self.provider = provider
        self.status_code = status_code
        super().__init__(message)
