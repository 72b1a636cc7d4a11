"""
DOCX Text Extractor.

Extracts paragraph text from the main document part of a WordprocessingML
container, streaming the XML with an element stack instead of loading a
full document model.
"""
import xml.etree.ElementTree as ET
from typing import List, Optional
from .base import BaseTextExtractor
from ..container_reader import ContainerReader
from ...api.exceptions import ContainerCorrupt
from ...core.config import ExtractionLimits
from ...core.logging_config import get_logger
from ...domain.entities import ExtractionOutcome
from ...domain.value_objects import DocumentFormat

logger = get_logger(__name__)

DOCUMENT_ENTRY = "word/document.xml"

W_NS = "{http://schemas.openxmlformats.org/wordprocessingml/2006/main}"
PARAGRAPH = f"{W_NS}p"
RUN = f"{W_NS}r"
TEXT = f"{W_NS}t"
TAB = f"{W_NS}tab"
BREAKS = (f"{W_NS}br", f"{W_NS}cr")

FEED_CHUNK_SIZE = 64 * 1024


def iter_docx_paragraphs(document_xml: str) -> List[str]:
    """
    Collect paragraph texts from ``word/document.xml`` in document order.

    Every ``w:p`` start opens a paragraph; ``w:t`` leaves contribute their
    text to the innermost open paragraph. Run-level tabs and breaks become
    ``\\t`` and ``\\n``. Formatting markup is ignored.

    Args:
        document_xml: Main document part as text

    Returns:
        Paragraph texts, empty ones included, ordered by paragraph start

    Raises:
        xml.etree.ElementTree.ParseError: If the XML is malformed
    """
    parser = ET.XMLPullParser(events=("start", "end"))
    paragraphs: List[List[str]] = []
    open_paragraphs: List[List[str]] = []
    tag_stack: List[str] = []

    def consume_events():
        for event, elem in parser.read_events():
            if event == "start":
                tag_stack.append(elem.tag)
                if elem.tag == PARAGRAPH:
                    buffer: List[str] = []
                    paragraphs.append(buffer)
                    open_paragraphs.append(buffer)
                continue

            tag_stack.pop()
            parent = tag_stack[-1] if tag_stack else None
            if elem.tag == PARAGRAPH:
                open_paragraphs.pop()
                elem.clear()
            elif not open_paragraphs:
                continue
            elif elem.tag == TEXT and elem.text:
                open_paragraphs[-1].append(elem.text)
            elif elem.tag == TAB and parent == RUN:
                open_paragraphs[-1].append("\t")
            elif elem.tag in BREAKS and parent == RUN:
                open_paragraphs[-1].append("\n")

    for start in range(0, len(document_xml), FEED_CHUNK_SIZE):
        parser.feed(document_xml[start:start + FEED_CHUNK_SIZE])
        consume_events()
    parser.close()
    consume_events()

    return ["".join(parts) for parts in paragraphs]


class DOCXExtractor(BaseTextExtractor):
    """Extractor for DOCX files."""

    def __init__(self, limits: Optional[ExtractionLimits] = None):
        super().__init__(DocumentFormat.DOCX, ".docx", "DOCX", limits)

    def extract(self, file_bytes: bytes, filename: str = "") -> ExtractionOutcome:
        """
        Extract text from DOCX file.

        Args:
            file_bytes: DOCX file content as bytes
            filename: Original filename

        Returns:
            Non-empty paragraphs joined by blank lines, or a degraded
            outcome when the container or main document is unreadable
        """
        try:
            with ContainerReader.open(file_bytes) as container:
                document_xml = container.read_entry(DOCUMENT_ENTRY)

            if document_xml is None:
                logger.warning(f"No {DOCUMENT_ENTRY} in '{filename}'")
                return ExtractionOutcome.degraded(
                    text="DOCX file uploaded but no document.xml found.",
                    reason="missing_entry",
                    error=f"{DOCUMENT_ENTRY} not found",
                    metadata={"type": self.document_format.value}
                )

            paragraphs = [p for p in iter_docx_paragraphs(document_xml) if p.strip()]
        except (ContainerCorrupt, ET.ParseError) as e:
            return self.degrade(e, filename)

        logger.debug(f"Extracted {len(paragraphs)} paragraphs from '{filename}'")
        metadata = {"type": self.document_format.value, "paragraphCount": len(paragraphs)}
        return ExtractionOutcome.ok(
            "\n\n".join(paragraphs) or "Document processed successfully.",
            metadata=metadata
        )
