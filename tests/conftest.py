"""Shared pytest fixtures for the docsum test suite."""

import io
import logging
from pathlib import Path

import docx
import pytest

from docsum.models import Config
from docsum.preferences import PreferenceStore


# ---------------------------------------------------------------------------
# Logger isolation
# ---------------------------------------------------------------------------


_MANAGED_LOGGERS = ("docsum", "urllib3", "pypdf")


def _reset_loggers() -> None:
    for name in _MANAGED_LOGGERS:
        logger = logging.getLogger(name)
        for h in logger.handlers[:]:
            try:
                h.close()
            except Exception:
                pass
            logger.removeHandler(h)
        logger.setLevel(logging.NOTSET)
        logger.propagate = True


@pytest.fixture(autouse=True)
def _reset_docsum_logger():
    """Clear the docsum (and quietened third-party) loggers between tests.

    Tests that call ``main()`` trigger ``setup_logging()``, which attaches
    handlers and sets ``propagate=False``.  Without this fixture the state
    leaks into subsequent tests and breaks ``caplog`` capture.
    """
    _reset_loggers()
    yield
    _reset_loggers()


# ---------------------------------------------------------------------------
# Document builders
# ---------------------------------------------------------------------------

LONG_TEXT = (
    "The quarterly report shows steady revenue growth across every region "
    "and a reduction in operating costs."
)


def build_pdf(pages: list[str]) -> bytes:
    """Build a minimal PDF with one Helvetica text line per page."""
    n = len(pages)
    objects: list[bytes] = []
    kids = " ".join(f"{4 + 2 * i} 0 R" for i in range(n))
    objects.append(b"<< /Type /Catalog /Pages 2 0 R >>")
    objects.append(f"<< /Type /Pages /Kids [{kids}] /Count {n} >>".encode())
    objects.append(b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>")
    for i, text in enumerate(pages):
        content_id = 5 + 2 * i
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                "/Resources << /Font << /F1 3 0 R >> >> "
                f"/Contents {content_id} 0 R >>"
            ).encode()
        )
        escaped = text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
        stream = f"BT /F1 12 Tf 72 720 Td ({escaped}) Tj ET".encode("latin-1")
        objects.append(
            b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream"
        )

    out = io.BytesIO()
    out.write(b"%PDF-1.4\n")
    offsets = []
    for num, body in enumerate(objects, start=1):
        offsets.append(out.tell())
        out.write(b"%d 0 obj\n" % num + body + b"\nendobj\n")
    xref_at = out.tell()
    out.write(b"xref\n0 %d\n" % (len(objects) + 1))
    out.write(b"0000000000 65535 f \n")
    for off in offsets:
        out.write(b"%010d 00000 n \n" % off)
    out.write(
        b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n"
        % (len(objects) + 1, xref_at)
    )
    return out.getvalue()


def build_docx(paragraphs: list[str]) -> bytes:
    """Build a DOCX with one paragraph per entry."""
    document = docx.Document()
    for text in paragraphs:
        document.add_paragraph(text)
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture
def make_pdf(tmp_path):
    """Factory writing a generated PDF into ``tmp_path``."""

    def _make(pages: list[str], name: str = "report.pdf") -> Path:
        path = tmp_path / name
        path.write_bytes(build_pdf(pages))
        return path

    return _make


@pytest.fixture
def make_docx(tmp_path):
    """Factory writing a generated DOCX into ``tmp_path``."""

    def _make(paragraphs: list[str], name: str = "notes.docx") -> Path:
        path = tmp_path / name
        path.write_bytes(build_docx(paragraphs))
        return path

    return _make


# ---------------------------------------------------------------------------
# Config / preferences
# ---------------------------------------------------------------------------


@pytest.fixture
def config(tmp_path) -> Config:
    """Config whose preferences and output live under ``tmp_path``."""
    return Config(
        preferences_path=tmp_path / "prefs" / "preferences.json",
        output_dir=tmp_path / "out",
    )


@pytest.fixture
def store(config) -> PreferenceStore:
    return PreferenceStore(config.preferences_path)


@pytest.fixture
def long_text() -> str:
    """A sentence comfortably above the 50-character content threshold."""
    return LONG_TEXT
