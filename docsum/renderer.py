"""Presentation helpers — human-readable sizes and output filenames.

No file I/O is performed here; the session and the CLI are responsible for
writing and printing the returned strings.
"""

from docsum.models import Document

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")

DEFAULT_SUMMARY_FILENAME = "document_summary.txt"


def format_file_size(size_bytes: int) -> str:
    """Format a byte count with 1024-based units, e.g. ``"1.5 KB"``."""
    if size_bytes == 0:
        return "0 Bytes"
    value = float(size_bytes)
    unit = 0
    while value >= 1024 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{round(value, 2):g} {_SIZE_UNITS[unit]}"


def summary_filename(document_name: str | None) -> str:
    """Download filename for a summary of *document_name*.

    The basename is everything before the first dot, so ``report.v2.pdf``
    becomes ``report_summary.txt``.
    """
    if not document_name:
        return DEFAULT_SUMMARY_FILENAME
    return f"{document_name.split('.')[0]}_summary.txt"


def describe_document(document: Document) -> str:
    """One-line description shown after a file is loaded."""
    chars = len(document.extracted_text or "")
    return (
        f"{document.name} ({format_file_size(document.size_bytes)}, "
        f"{document.mime_kind.upper()}, {chars:,} chars)"
    )
