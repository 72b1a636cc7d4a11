"""
XLSX Text Extractor.

Builds the shared-string table, then reads each worksheet row by row into
pipe-joined cell text. Worksheets are read in archive enumeration order,
which is not necessarily numeric sheet order.
"""
import re
import xml.etree.ElementTree as ET
from typing import List, Optional
from .base import BaseTextExtractor
from ..container_reader import ContainerReader
from ...api.exceptions import ContainerCorrupt
from ...core.config import ExtractionLimits
from ...core.logging_config import get_logger
from ...domain.entities import ExtractionOutcome, Sheet
from ...domain.value_objects import DocumentFormat

logger = get_logger(__name__)

SHARED_STRINGS_ENTRY = "xl/sharedStrings.xml"
SHEET_ENTRY_PATTERN = re.compile(r"^xl/worksheets/sheet(\d+)\.xml$")

S_NS = "{http://schemas.openxmlformats.org/spreadsheetml/2006/main}"
SHARED_ITEM = f"{S_NS}si"
RICH_RUN = f"{S_NS}r"
TEXT = f"{S_NS}t"
ROW = f"{S_NS}row"
CELL = f"{S_NS}c"
VALUE = f"{S_NS}v"
INLINE_STRING = f"{S_NS}is"

CELL_SEPARATOR = " | "
FEED_CHUNK_SIZE = 64 * 1024


class SharedStringTable:
    """
    Deduplicated string pool of a workbook, indexed by position.
    Resolution is a direct list lookup.
    """

    def __init__(self, strings: Optional[List[str]] = None):
        self.strings = strings or []

    def __len__(self) -> int:
        return len(self.strings)

    @classmethod
    def from_xml(cls, shared_strings_xml: Optional[str]) -> "SharedStringTable":
        """Parse xl/sharedStrings.xml; None gives an empty table."""
        if shared_strings_xml is None:
            return cls()

        root = ET.fromstring(shared_strings_xml)
        strings = []
        for item in root.iter(SHARED_ITEM):
            # Plain items hold one <t>; rich items hold runs. Phonetic runs are skipped.
            parts = []
            direct = item.find(TEXT)
            if direct is not None:
                parts.append(direct.text or "")
            for run in item.findall(RICH_RUN):
                run_text = run.find(TEXT)
                if run_text is not None:
                    parts.append(run_text.text or "")
            strings.append("".join(parts))
        return cls(strings)

    def resolve(self, raw_index: str) -> str:
        """
        Resolve a shared-string reference.

        Args:
            raw_index: Cell value text, expected to be an integer index

        Returns:
            The referenced string, or ``raw_index`` itself when it is not a
            valid index into the table
        """
        try:
            index = int(raw_index.strip())
        except ValueError:
            return raw_index
        if 0 <= index < len(self.strings):
            return self.strings[index]
        return raw_index


def _cell_text(cell: ET.Element, shared_strings: SharedStringTable) -> Optional[str]:
    cell_type = cell.get("t")

    if cell_type == "inlineStr":
        inline = cell.find(INLINE_STRING)
        if inline is None:
            return None
        return "".join(t.text or "" for t in inline.iter(TEXT))

    value = cell.find(VALUE)
    if value is None or value.text is None:
        return None
    if cell_type == "s":
        return shared_strings.resolve(value.text)
    return value.text


def read_sheet_rows(sheet_xml: str, shared_strings: SharedStringTable, max_rows: int) -> List[str]:
    """
    Read up to ``max_rows`` rows of a worksheet as pipe-joined cell text.

    The row cap counts every ``<row>`` element, including rows that end up
    empty. Parsing stops as soon as the cap is reached.

    Args:
        sheet_xml: Worksheet part as text
        shared_strings: Workbook shared-string table
        max_rows: Maximum number of rows to read

    Returns:
        Non-empty row texts in sheet order
    """
    parser = ET.XMLPullParser(events=("end",))
    rows: List[str] = []
    rows_seen = 0

    for start in range(0, len(sheet_xml), FEED_CHUNK_SIZE):
        parser.feed(sheet_xml[start:start + FEED_CHUNK_SIZE])
        for _, elem in parser.read_events():
            if elem.tag != ROW:
                continue
            rows_seen += 1
            values = [
                text for text in (_cell_text(cell, shared_strings) for cell in elem.findall(CELL))
                if text is not None
            ]
            elem.clear()
            if values:
                rows.append(CELL_SEPARATOR.join(values))
            if rows_seen >= max_rows:
                return rows

    return rows


class XLSXExtractor(BaseTextExtractor):
    """Extractor for XLSX spreadsheets."""

    def __init__(self, limits: Optional[ExtractionLimits] = None):
        super().__init__(DocumentFormat.XLSX, ".xlsx", "XLSX", limits)

    def extract(self, file_bytes: bytes, filename: str = "") -> ExtractionOutcome:
        """
        Extract text from XLSX file.

        Args:
            file_bytes: XLSX file content as bytes
            filename: Original filename

        Returns:
            Sheet blocks (banner line plus rows) separated by blank lines,
            falling back to the shared strings, then to a placeholder
        """
        max_rows = self.limits.max_rows_per_sheet
        sheets: List[Sheet] = []

        try:
            with ContainerReader.open(file_bytes) as container:
                shared_strings = SharedStringTable.from_xml(container.read_entry(SHARED_STRINGS_ENTRY))

                for entry_name in container.entry_names():
                    match = SHEET_ENTRY_PATTERN.match(entry_name)
                    if not match:
                        continue
                    sheet_xml = container.read_entry(entry_name)
                    if sheet_xml is None:
                        continue
                    rows = read_sheet_rows(sheet_xml, shared_strings, max_rows)
                    if rows:
                        sheets.append(Sheet(identifier=match.group(1), rows=rows))
        except (ContainerCorrupt, ET.ParseError) as e:
            return self.degrade(e, filename, {"rowLimit": max_rows})

        metadata = {
            "type": self.document_format.value,
            "sheetCount": len(sheets),
            "sheets": [{"sheet": sheet.identifier, "rowCount": len(sheet.rows)} for sheet in sheets],
            "sharedStringCount": len(shared_strings),
            "rowLimit": max_rows,
        }

        if sheets:
            text = "\n\n".join(
                f"=== Sheet {sheet.identifier} ===\n" + "\n".join(sheet.rows) for sheet in sheets
            )
        else:
            logger.info(f"No worksheet rows found in '{filename}', falling back to shared strings")
            text = (
                ", ".join(s for s in shared_strings.strings if s.strip())
                or "Spreadsheet processed successfully."
            )

        return ExtractionOutcome.ok(text, metadata=metadata)
