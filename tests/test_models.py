"""Tests for docsum/models.py — pydantic models, dataclass Config, exceptions."""

from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from docsum.models import (
    Config,
    DocsumError,
    Document,
    EmptyCompletion,
    EmptyContent,
    ExtractionFailed,
    IngestError,
    MissingInput,
    Preferences,
    ProviderHttpError,
    SummarizeError,
    SummaryRequest,
    TooLarge,
    UnsupportedProvider,
    UnsupportedType,
)


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


def test_document_accepts_51_chars():
    doc = Document(name="a.pdf", size_bytes=10, mime_kind="pdf", extracted_text="a" * 51)
    assert len(doc.extracted_text) == 51


def test_document_rejects_50_chars():
    with pytest.raises(ValidationError):
        Document(name="a.pdf", size_bytes=10, mime_kind="pdf", extracted_text="a" * 50)


def test_document_text_may_be_absent():
    doc = Document(name="a.docx", size_bytes=10, mime_kind="docx")
    assert doc.extracted_text is None


def test_document_rejects_unknown_kind():
    with pytest.raises(ValidationError):
        Document(name="a.txt", size_bytes=10, mime_kind="txt")


# ---------------------------------------------------------------------------
# SummaryRequest / Preferences
# ---------------------------------------------------------------------------


def test_summary_request_accepts_any_provider_id():
    """Unknown providers are reported later by the provider lookup."""
    req = SummaryRequest(source_text="t", provider_id="other", length_class="short", api_key="k")
    assert req.provider_id == "other"


def test_summary_request_rejects_unknown_length():
    with pytest.raises(ValidationError):
        SummaryRequest(source_text="t", provider_id="openai", length_class="huge", api_key="k")


def test_preferences_defaults():
    prefs = Preferences()
    assert prefs.provider == "openai"
    assert prefs.api_key == ""
    assert prefs.length == "medium"


def test_preferences_serialize_with_storage_keys():
    prefs = Preferences(provider="gemini", api_key="X", length="long")
    assert prefs.model_dump(by_alias=True) == {
        "aiProvider": "gemini",
        "apiKey": "X",
        "summaryLength": "long",
    }


def test_preferences_accept_storage_keys():
    prefs = Preferences.model_validate(
        {"aiProvider": "gemini", "apiKey": "X", "summaryLength": "short"}
    )
    assert (prefs.provider, prefs.api_key, prefs.length) == ("gemini", "X", "short")


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


def test_config_defaults():
    config = Config()
    assert config.openai_url == "https://api.openai.com/v1/chat/completions"
    assert config.openai_model == "gpt-3.5-turbo"
    assert config.gemini_model == "gemini-2.0-flash"
    assert config.timeout_s == 120
    assert config.verbose is False


def test_config_preferences_path_from_env(tmp_path):
    target = tmp_path / "p.json"
    with patch.dict("os.environ", {"DOCSUM_PREFERENCES": str(target)}):
        assert Config().preferences_path == target


def test_config_preferences_path_default_under_home():
    with patch.dict("os.environ", {}, clear=True):
        path = Config().preferences_path
    assert path.name == "preferences.json"
    assert path.parent.name == ".docsum"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("cls", [UnsupportedType, TooLarge, ExtractionFailed, EmptyContent])
def test_ingest_errors_hierarchy(cls):
    assert issubclass(cls, IngestError)
    assert issubclass(cls, DocsumError)


@pytest.mark.parametrize(
    "cls", [MissingInput, EmptyCompletion, UnsupportedProvider, ProviderHttpError]
)
def test_summarize_errors_hierarchy(cls):
    assert issubclass(cls, SummarizeError)
    assert issubclass(cls, DocsumError)


def test_provider_http_error_attributes():
    err = ProviderHttpError("bad key", provider="OpenAI", status_code=401)
    assert str(err) == "bad key"
    assert err.provider == "OpenAI"
    assert err.status_code == 401
