"""
Text utilities - Pure functions for cleaning and measuring extracted text.
"""
import re

# Literal backslash escapes left behind in PDF string payloads
_ESCAPE_PATTERN = re.compile(r"\\([nrt])")
_ESCAPES = {"n": "\n", "r": "\r", "t": "\t"}

_NON_PRINTABLE_PATTERN = re.compile(r"[^\x20-\x7E\n]")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def clean_extracted_text(text: str) -> str:
    """
    Normalize raw extracted text.

    Unescapes ``\\n``, ``\\r`` and ``\\t`` sequences, replaces non-printable
    characters with spaces, collapses whitespace runs and strips the ends.
    Applying it twice gives the same result as applying it once.

    Args:
        text: Raw text fragment

    Returns:
        Cleaned single-line text
    """
    if not text:
        return ""
    text = _ESCAPE_PATTERN.sub(lambda m: _ESCAPES[m.group(1)], text)
    text = _NON_PRINTABLE_PATTERN.sub(" ", text)
    text = _WHITESPACE_PATTERN.sub(" ", text)
    return text.strip()


def build_preview(text: str, length: int = 500) -> str:
    """Return the first ``length`` characters, with ``...`` when truncated."""
    if len(text) > length:
        return text[:length] + "..."
    return text


def count_words(text: str) -> int:
    """Count whitespace-delimited, non-empty tokens."""
    return len(text.split())
