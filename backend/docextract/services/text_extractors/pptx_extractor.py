"""
PPTX Slide-Deck Parser.

Builds a structured model of a presentation (metadata, slides, tables and
speaker notes) from the PresentationML parts of the container, and derives
two views from it: a flat text rendering and a JSON-ready tree.

To add a new slide field:
1. Add it to the Slide entity
2. Populate it in parse_slide()
3. Render it in deck_to_text() and deck_to_structured()
"""
import posixpath
import re
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional, Tuple
from .base import BaseTextExtractor
from ..container_reader import ContainerReader
from ...api.exceptions import ContainerCorrupt, ExtractionError
from ...core.config import ExtractionLimits
from ...core.logging_config import get_logger
from ...domain.entities import DeckMetadata, ExtractionOutcome, Slide, SlideDeck, Table
from ...domain.value_objects import DocumentFormat

logger = get_logger(__name__)

# Namespaces
P_NS = "{http://schemas.openxmlformats.org/presentationml/2006/main}"
A_NS = "{http://schemas.openxmlformats.org/drawingml/2006/main}"
REL_NS = "{http://schemas.openxmlformats.org/package/2006/relationships}"
CP_NS = "{http://schemas.openxmlformats.org/package/2006/metadata/core-properties}"
DC_NS = "{http://purl.org/dc/elements/1.1/}"
DCTERMS_NS = "{http://purl.org/dc/terms/}"

CORE_PROPERTIES_ENTRY = "docProps/core.xml"
SLIDE_ENTRY_PATTERN = re.compile(r"^ppt/slides/slide(\d+)\.xml$")
NOTES_RELATIONSHIP_SUFFIX = "/notesSlide"

TITLE_TYPES = {"title", "ctrTitle"}
SUBTITLE_TYPES = {"subTitle"}
# Placeholders repeated on every slide; not slide content
BOILERPLATE_TYPES = {"sldNum", "dt", "ftr", "hdr", "sldImg"}


def _paragraph_text(paragraph: ET.Element) -> str:
    """Text of one a:p, with line breaks kept as newlines."""
    parts = []
    for child in paragraph:
        if child.tag in (f"{A_NS}r", f"{A_NS}fld"):
            text = child.find(f"{A_NS}t")
            if text is not None and text.text:
                parts.append(text.text)
        elif child.tag == f"{A_NS}br":
            parts.append("\n")
    return "".join(parts)


def _shape_paragraphs(shape: ET.Element) -> List[str]:
    """Non-empty paragraph texts of a shape's text body."""
    body = shape.find(f"{P_NS}txBody")
    if body is None:
        return []
    paragraphs = (_paragraph_text(p).strip() for p in body.iter(f"{A_NS}p"))
    return [p for p in paragraphs if p]


def _placeholder_type(shape: ET.Element) -> Optional[str]:
    """
    Placeholder type of a shape, None for ordinary shapes.
    A placeholder without a type attribute is a body placeholder.
    """
    placeholder = shape.find(f"{P_NS}nvSpPr/{P_NS}nvPr/{P_NS}ph")
    if placeholder is None:
        return None
    return placeholder.get("type", "body")


def _parse_table(table: ET.Element) -> Table:
    rows = []
    for row in table.iter(f"{A_NS}tr"):
        cells = []
        for cell in row.findall(f"{A_NS}tc"):
            texts = (_paragraph_text(p).strip() for p in cell.iter(f"{A_NS}p"))
            cells.append(" ".join(t for t in texts if t))
        rows.append(cells)
    return Table(rows=rows)


def parse_slide(slide_xml: str, slide_number: int, notes_xml: Optional[str] = None) -> Slide:
    """
    Parse one slide part into a Slide.

    Args:
        slide_xml: Slide part as text
        slide_number: 1-based number assigned to the slide
        notes_xml: Paired notes-slide part, if any

    Returns:
        Slide with title (empty string when absent), subtitle, body text,
        tables and notes

    Raises:
        xml.etree.ElementTree.ParseError: If either part is malformed
    """
    root = ET.fromstring(slide_xml)
    slide = Slide(slide_number=slide_number)

    for shape in root.iter(f"{P_NS}sp"):
        placeholder = _placeholder_type(shape)
        if placeholder in BOILERPLATE_TYPES:
            continue
        paragraphs = _shape_paragraphs(shape)
        if not paragraphs:
            continue

        if placeholder in TITLE_TYPES and not slide.title:
            slide.title = " ".join(paragraphs)
        elif placeholder in SUBTITLE_TYPES and slide.subtitle is None:
            slide.subtitle = " ".join(paragraphs)
        else:
            slide.body_text.extend(paragraphs)

    for table in root.iter(f"{A_NS}tbl"):
        slide.tables.append(_parse_table(table))

    if notes_xml is not None:
        slide.notes = parse_notes(notes_xml)

    return slide


def parse_notes(notes_xml: str) -> Optional[str]:
    """Speaker notes text of a notes-slide part, None when it holds no text."""
    root = ET.fromstring(notes_xml)
    paragraphs = []
    for shape in root.iter(f"{P_NS}sp"):
        if _placeholder_type(shape) in BOILERPLATE_TYPES:
            continue
        paragraphs.extend(_shape_paragraphs(shape))
    return "\n".join(paragraphs) or None


def parse_core_properties(core_xml: Optional[str]) -> DeckMetadata:
    """
    Read title, author and timestamps from docProps/core.xml.
    Missing or malformed properties leave the fields empty.
    """
    metadata = DeckMetadata()
    if core_xml is None:
        return metadata

    try:
        root = ET.fromstring(core_xml)
    except ET.ParseError as e:
        logger.warning(f"Could not parse core properties: {e}")
        return metadata

    title_elem = root.find(f"{DC_NS}title")
    if title_elem is not None and title_elem.text:
        metadata.title = title_elem.text.strip()

    creator_elem = root.find(f"{DC_NS}creator")
    if creator_elem is not None and creator_elem.text:
        metadata.author = creator_elem.text.strip()

    created_elem = root.find(f"{DCTERMS_NS}created")
    if created_elem is not None and created_elem.text:
        metadata.created = created_elem.text.strip()

    modified_elem = root.find(f"{DCTERMS_NS}modified")
    if modified_elem is not None and modified_elem.text:
        metadata.modified = modified_elem.text.strip()

    return metadata


def _resolve_target(source_entry: str, target: str) -> str:
    """Resolve a relationship target against the part that declares it."""
    if target.startswith("/"):
        return posixpath.normpath(target.lstrip("/"))
    return posixpath.normpath(posixpath.join(posixpath.dirname(source_entry), target))


def _notes_entry_for(container: ContainerReader, slide_entry: str, suffix: str) -> Optional[str]:
    """
    Locate the notes part paired with a slide.

    When the slide has a relationships part, only its notesSlide relationship
    counts: notes parts are numbered in creation order, so a slide whose
    relationships name no notes has none. The shared numeric suffix is only
    assumed for packages that carry no relationships part for the slide.

    Returns:
        Entry name of the notes part, or None when the slide has no notes
    """
    rels_entry = posixpath.join(
        posixpath.dirname(slide_entry), "_rels", posixpath.basename(slide_entry) + ".rels"
    )
    rels_xml = container.read_entry(rels_entry)
    if rels_xml is None:
        return f"ppt/notesSlides/notesSlide{suffix}.xml"

    try:
        rels_root = ET.fromstring(rels_xml)
    except ET.ParseError as e:
        logger.debug(f"Ignoring malformed relationships {rels_entry}: {e}")
        return None

    for rel in rels_root.iter(f"{REL_NS}Relationship"):
        if rel.get("Type", "").endswith(NOTES_RELATIONSHIP_SUFFIX) and rel.get("Target"):
            return _resolve_target(slide_entry, rel.get("Target"))
    return None

def parse_presentation(file_bytes: bytes) -> SlideDeck:
    """
    Parse a PPTX container into a SlideDeck.

    Slides are ordered by the numeric suffix of their entry name and
    numbered 1..k in that order. A slide whose XML cannot be read is
    omitted with a warning.

    Args:
        file_bytes: PPTX file content as bytes

    Returns:
        Parsed SlideDeck

    Raises:
        ContainerCorrupt: If the container cannot be opened
        ExtractionError: If no slide could be parsed
    """
    with ContainerReader.open(file_bytes) as container:
        metadata = parse_core_properties(container.read_entry(CORE_PROPERTIES_ENTRY))

        slide_entries: List[Tuple[int, str, str]] = []
        for entry_name in container.entry_names():
            match = SLIDE_ENTRY_PATTERN.match(entry_name)
            if match:
                slide_entries.append((int(match.group(1)), match.group(1), entry_name))
        slide_entries.sort()

        slides: List[Slide] = []
        for _, suffix, entry_name in slide_entries:
            try:
                slide_xml = container.read_entry(entry_name)
                notes_entry = _notes_entry_for(container, entry_name, suffix)
                notes_xml = container.read_entry(notes_entry) if notes_entry else None
                slides.append(parse_slide(slide_xml, len(slides) + 1, notes_xml))
            except (ET.ParseError, ContainerCorrupt) as e:
                logger.warning(f"Skipping unreadable slide {entry_name}: {e}")

    if not slides:
        raise ExtractionError("No readable slides found in presentation")

    metadata.slide_count = len(slides)
    logger.debug(f"Parsed {len(slides)} of {len(slide_entries)} slide entries")
    return SlideDeck(metadata=metadata, slides=slides)


def deck_to_text(deck: SlideDeck) -> str:
    """
    Flat text rendering of a deck.

    Each slide starts with a ``--- Slide n ---`` marker followed by its
    title, subtitle, body text, tables and notes.
    """
    blocks = []
    if deck.metadata.title:
        blocks.append(f"Presentation: {deck.metadata.title}")

    for slide in deck.slides:
        lines = [f"--- Slide {slide.slide_number} ---"]
        if slide.title:
            lines.append(f"Title: {slide.title}")
        if slide.subtitle:
            lines.append(f"Subtitle: {slide.subtitle}")
        lines.extend(slide.body_text)
        for table in slide.tables:
            lines.append("[Table]")
            lines.extend(" | ".join(row) for row in table.rows)
        if slide.notes:
            lines.append(f"Notes: {slide.notes}")
        blocks.append("\n".join(lines))

    return "\n\n".join(blocks)


def deck_to_structured(deck: SlideDeck) -> Dict[str, Any]:
    """JSON-ready tree of a deck for callers that want per-slide fields."""
    return {
        "metadata": {
            "title": deck.metadata.title,
            "author": deck.metadata.author,
            "slideCount": deck.metadata.slide_count,
            "created": deck.metadata.created,
            "modified": deck.metadata.modified,
        },
        "slideCount": len(deck.slides),
        "slides": [
            {
                "slideNumber": slide.slide_number,
                "title": slide.title,
                "subtitle": slide.subtitle,
                "bodyText": list(slide.body_text),
                "tables": [[list(row) for row in table.rows] for table in slide.tables],
                "notes": slide.notes,
                "hasNotes": slide.has_notes,
                "contentLength": slide.content_length,
            }
            for slide in deck.slides
        ],
    }


class PPTXExtractor(BaseTextExtractor):
    """Extractor for PPTX presentations."""

    def __init__(self, limits: Optional[ExtractionLimits] = None):
        super().__init__(DocumentFormat.PPTX, ".pptx", "PPTX", limits)

    def get_failure_message(self, filename: str = "", error: Optional[Exception] = None) -> str:
        return f"PowerPoint file uploaded: {filename}. Parsing encountered an issue: {error or 'Unknown error'}"

    def extract(self, file_bytes: bytes, filename: str = "") -> ExtractionOutcome:
        """
        Extract text and structure from PPTX file.

        Args:
            file_bytes: PPTX file content as bytes
            filename: Original filename

        Returns:
            Outcome whose text is the flat rendering and whose structured
            data is the slide tree
        """
        try:
            deck = parse_presentation(file_bytes)
        except (ContainerCorrupt, ExtractionError) as e:
            return self.degrade(e, filename)

        metadata = {
            "type": self.document_format.value,
            "slideCount": len(deck.slides),
            "presentationTitle": deck.metadata.title,
            "author": deck.metadata.author,
            "created": deck.metadata.created,
            "modified": deck.metadata.modified,
            "slides": [
                {
                    "number": slide.slide_number,
                    "title": slide.title,
                    "hasNotes": slide.has_notes,
                    "contentLength": slide.content_length,
                }
                for slide in deck.slides
            ],
        }
        logger.info(f"Parsed {len(deck.slides)} slides from '{filename}'")
        return ExtractionOutcome.ok(
            deck_to_text(deck),
            metadata=metadata,
            structured_data=deck_to_structured(deck)
        )
