"""
docsum — document summarization pipeline.

Extracts text from PDF (pypdf) or DOCX (python-docx) files and asks a hosted
LLM (OpenAI or Gemini) for a summary of the requested length.
"""

__version__ = "0.1.0"
