"""Summary prompt builder and length-class settings.

Each length class maps to a natural-language instruction embedded in the
prompt and to an output-token ceiling sent to the provider.
"""

from docsum.models import LengthClass

TEMPERATURE = 0.3

LENGTH_INSTRUCTIONS: dict[str, str] = {
    "short": "in 2-3 sentences",
    "medium": "in one paragraph (4-6 sentences)",
    "long": "in 2-3 detailed paragraphs",
}

MAX_OUTPUT_TOKENS: dict[str, int] = {
    "short": 150,
    "medium": 300,
    "long": 600,
}


def max_output_tokens(length: LengthClass) -> int:
    """Return the output-token ceiling for *length*."""
    return MAX_OUTPUT_TOKENS[length]


def build_summary_prompt(text: str, length: LengthClass) -> str:
    """Build the single user prompt sent to every provider.

    Args:
        text:   The extracted document text, sent in full.
        length: The requested length class.

    Returns:
        A self-contained prompt string.
    """
    return (
        f"Please summarize the following document {LENGTH_INSTRUCTIONS[length]}. "
        "Focus on the main points, key findings, and important conclusions:"
        f"\n\n{text}"
    )
