"""Command-line interface for docsum.

Entry point: ``summarize-document`` (configured in ``pyproject.toml``).

Usage:
    summarize-document FILE [options]

Key options:
    --provider, --api-key, --length      (persisted as preferences)
    --copy, --download, --output-dir,
    --preferences, --openai-model, --gemini-model, --timeout,
    --verbose/--no-verbose, --log-file.

Preference flags are written back to the preferences file as soon as they
are applied, so later runs reuse them.  When no API key is stored or given,
``DOCSUM_API_KEY`` is used for this run only.
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from docsum.llm import PROVIDERS
from docsum.log import setup_logging
from docsum.models import Config
from docsum.prompts import LENGTH_INSTRUCTIONS
from docsum.renderer import describe_document
from docsum.session import SummarizerSession

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    parsed = int(value)
    if parsed < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return parsed


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Parse CLI arguments, load preferences, and summarize one document."""
    load_dotenv()

    parser = _build_parser()
    args = parser.parse_args()

    setup_logging(
        verbose=args.verbose,
        log_file=Path(args.log_file) if args.log_file else None,
    )

    config = Config(
        output_dir=Path(args.output_dir),
        openai_model=args.openai_model,
        gemini_model=args.gemini_model,
        timeout_s=args.timeout,
        verbose=args.verbose,
    )
    if args.preferences:
        config.preferences_path = Path(args.preferences)

    session = SummarizerSession(config)
    _apply_preferences(session, args)

    if not session.select_file(Path(args.file)):
        _fail(session)
    logger.info("Loaded: %s", describe_document(session.document))

    if session.summarize() is None:
        _fail(session)

    print(session.summary.text)

    if args.download and session.download_summary() is None:
        _fail(session)
    if args.copy and not session.copy_summary(_copy_to_clipboard):
        _fail(session)


def _apply_preferences(session: SummarizerSession, args: argparse.Namespace) -> None:
    """Persist preference flags; fall back to ``DOCSUM_API_KEY`` for this run."""
    if args.provider:
        session.set_provider(args.provider)
    if args.api_key:
        session.set_api_key(args.api_key)
    if args.length:
        session.set_length(args.length)

    env_key = os.environ.get("DOCSUM_API_KEY", "")
    if not session.preferences.api_key.strip() and env_key.strip():
        logger.debug("Using API key from DOCSUM_API_KEY")
        session.preferences = session.preferences.model_copy(update={"api_key": env_key})

    logger.info(
        "Provider: %s  length: %s", session.preferences.provider, session.preferences.length
    )


def _fail(session: SummarizerSession) -> None:
    if session.status is not None:
        logger.error("%s", session.status.message)
    sys.exit(1)


# ---------------------------------------------------------------------------
# Clipboard
# ---------------------------------------------------------------------------


def _copy_to_clipboard(text: str) -> None:
    """Place *text* on the system clipboard through a hidden Tk root window."""
    import tkinter

    root = tkinter.Tk()
    try:
        root.withdraw()
        root.clipboard_clear()
        root.clipboard_append(text)
        root.update()
    finally:
        root.destroy()


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="summarize-document",
        description=(
            "Summarise a PDF or DOCX document with OpenAI or Gemini. "
            "Provider, API key and length are remembered between runs."
        ),
    )

    parser.add_argument("file", metavar="FILE", help="PDF or DOCX file to summarize.")

    parser.add_argument(
        "--provider",
        choices=sorted(PROVIDERS),
        default=None,
        help="AI provider to use (saved for later runs).",
    )
    parser.add_argument(
        "--api-key",
        metavar="KEY",
        default=None,
        help="API key for the provider (saved for later runs).",
    )
    parser.add_argument(
        "--length",
        choices=list(LENGTH_INSTRUCTIONS),
        default=None,
        help="Summary length (saved for later runs).",
    )
    parser.add_argument(
        "--copy",
        action="store_true",
        default=False,
        help="Copy the summary to the clipboard.",
    )
    parser.add_argument(
        "--download",
        action="store_true",
        default=False,
        help="Write the summary to <name>_summary.txt in --output-dir.",
    )
    parser.add_argument(
        "--output-dir",
        metavar="DIR",
        default=".",
        help="Directory for --download output (default: current directory).",
    )
    parser.add_argument(
        "--preferences",
        metavar="FILE",
        default=None,
        help=(
            "Preferences file (default: DOCSUM_PREFERENCES env var, "
            "else ~/.docsum/preferences.json)."
        ),
    )
    _default_openai = os.environ.get("DOCSUM_OPENAI_MODEL", "gpt-3.5-turbo")
    parser.add_argument(
        "--openai-model",
        metavar="MODEL",
        default=_default_openai,
        help=f"OpenAI model (default: DOCSUM_OPENAI_MODEL env var, currently {_default_openai!r}).",
    )
    _default_gemini = os.environ.get("DOCSUM_GEMINI_MODEL", "gemini-2.0-flash")
    parser.add_argument(
        "--gemini-model",
        metavar="MODEL",
        default=_default_gemini,
        help=f"Gemini model (default: DOCSUM_GEMINI_MODEL env var, currently {_default_gemini!r}).",
    )
    parser.add_argument(
        "--timeout",
        metavar="S",
        type=_positive_int,
        default=120,
        help="HTTP timeout in seconds for the provider call (default: 120).",
    )
    parser.add_argument(
        "--verbose",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Enable DEBUG-level logging (default: off).",
    )
    parser.add_argument(
        "--log-file",
        metavar="FILE",
        default=None,
        help="Also write log output to FILE.",
    )

    return parser


if __name__ == "__main__":
    main()
