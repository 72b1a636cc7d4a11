"""
PDF Text Extractor.

Best-effort heuristic over raw PDF bytes: text-show operators inside
``BT ... ET`` text objects, plus a scan for long printable ASCII runs.
It does not read cross-reference tables, object streams or font encodings,
so compressed content streams yield little; short results are reported
with a low-confidence sentinel instead of noise.
"""
import re
from typing import Iterator, List, Optional
from .base import BaseTextExtractor
from ...core.config import ExtractionLimits
from ...core.logging_config import get_logger
from ...domain.entities import ExtractionOutcome
from ...domain.value_objects import DocumentFormat, REASON_LOW_CONFIDENCE
from ...utils.text_utils import clean_extracted_text

logger = get_logger(__name__)

LOW_CONFIDENCE_SENTINEL = (
    "PDF text extraction completed. For complex PDFs with images or special formatting, "
    "content may be limited."
)

# Text-object delimiters, only as standalone operators (not inside names like BTX)
BEGIN_TEXT_PATTERN = re.compile(r"(?<![A-Za-z])BT(?![A-Za-z])")
END_TEXT_PATTERN = re.compile(r"(?<![A-Za-z])ET(?![A-Za-z])")

# (string) Tj  or  [ (string) 12 (string) ] TJ, in encounter order
SHOW_TEXT_PATTERN = re.compile(
    r"\(((?:[^()\\]|\\.)*)\)\s*Tj|\[((?:[^\[\]\\]|\\.)*)\]\s*TJ",
    re.DOTALL
)
LITERAL_STRING_PATTERN = re.compile(r"\(((?:[^()\\]|\\.)*)\)", re.DOTALL)
LITERAL_ESCAPE_PATTERN = re.compile(r"\\([()\\])")


def _unescape_literal(payload: str) -> str:
    """Undo the \\( \\) \\\\ escapes of a PDF literal string."""
    return LITERAL_ESCAPE_PATTERN.sub(r"\1", payload)


def iter_text_objects(content: str) -> Iterator[str]:
    """
    Bodies of ``BT ... ET`` text objects, in order, in a single forward scan.

    Each object ends at the first ``ET`` after its ``BT``. An unclosed ``BT``
    ends the scan, since no later object could be closed either.
    """
    position = 0
    while True:
        begin = BEGIN_TEXT_PATTERN.search(content, position)
        if begin is None:
            return
        end = END_TEXT_PATTERN.search(content, begin.end())
        if end is None:
            return
        yield content[begin.end():end.start()]
        position = end.end()


def _show_operator_payloads(text_object: str) -> List[str]:
    fragments = []
    for show in SHOW_TEXT_PATTERN.finditer(text_object):
        if show.group(1) is not None:
            payloads = [show.group(1)]
        else:
            payloads = LITERAL_STRING_PATTERN.findall(show.group(2))
        fragments.extend(_unescape_literal(p) for p in payloads if p)
    return fragments


def extract_show_operator_text(content: str) -> List[str]:
    """
    Literal string payloads of Tj and TJ operators inside text objects.

    Args:
        content: Permissively decoded PDF bytes

    Returns:
        Non-empty payloads in encounter order
    """
    return [
        fragment
        for text_object in iter_text_objects(content)
        for fragment in _show_operator_payloads(text_object)
    ]


def extract_printable_runs(content: str, min_run_length: int = 20) -> List[str]:
    """
    Printable ASCII runs of at least ``min_run_length`` characters that start
    with a letter. Covers producers whose text is not behind Tj/TJ operators.
    """
    pattern = re.compile(
        r"[A-Za-z][A-Za-z0-9\s.,;:!?'\"()-]{%d,}" % max(min_run_length - 1, 0)
    )
    return pattern.findall(content)


class PDFExtractor(BaseTextExtractor):
    """Extractor for PDF files."""

    def __init__(self, limits: Optional[ExtractionLimits] = None):
        super().__init__(DocumentFormat.PDF, ".pdf", "PDF", limits)

    def extract(self, file_bytes: bytes, filename: str = "") -> ExtractionOutcome:
        """
        Extract text from PDF file.

        Args:
            file_bytes: PDF file content as bytes
            filename: Original filename

        Returns:
            Cleaned text, or a degraded outcome carrying the low-confidence
            sentinel when too little text was recovered
        """
        # latin-1 maps every byte to one character, so decoding never fails
        content = file_bytes.decode("latin-1")

        text_objects = list(iter_text_objects(content))
        operator_text = [fragment for body in text_objects for fragment in _show_operator_payloads(body)]
        fallback_text = extract_printable_runs(content, self.limits.pdf_min_run_length)
        text = clean_extracted_text(" ".join(operator_text + fallback_text))

        metadata = {
            "type": self.document_format.value,
            "textObjectCount": len(text_objects),
            "operatorFragmentCount": len(operator_text),
            "fallbackFragmentCount": len(fallback_text),
        }

        if len(text) < self.limits.pdf_min_text_length:
            logger.info(
                f"Low-confidence PDF extraction for '{filename}': "
                f"{len(text)} characters recovered"
            )
            metadata["lowConfidence"] = True
            return ExtractionOutcome.degraded(
                text=LOW_CONFIDENCE_SENTINEL,
                reason=REASON_LOW_CONFIDENCE,
                metadata=metadata
            )

        metadata["lowConfidence"] = False
        return ExtractionOutcome.ok(text, metadata=metadata)
