import io
import zipfile
from xml.sax.saxutils import escape

import pytest

from docextract.core.config import ExtractionLimits
from docextract.services.extraction_service import ExtractionService

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
S_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
P_NS = "http://schemas.openxmlformats.org/presentationml/2006/main"
A_NS = "http://schemas.openxmlformats.org/drawingml/2006/main"
R_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
REL_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
NOTES_REL_TYPE = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/notesSlide"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'


def build_zip(entries):
    """Zip archive bytes from an ordered {name: text} mapping."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for name, text in entries.items():
            archive.writestr(name, text)
    return buffer.getvalue()


def build_docx(paragraphs):
    """DOCX bytes; each paragraph is a list of run texts."""
    body = []
    for runs in paragraphs:
        run_xml = "".join(
            f'<w:r><w:rPr><w:b/></w:rPr><w:t xml:space="preserve">{escape(text)}</w:t></w:r>'
            for text in runs
        )
        body.append(f'<w:p w:rsidR="00A1"><w:pPr><w:pStyle w:val="Normal"/></w:pPr>{run_xml}</w:p>')
    document = (
        f'{XML_DECLARATION}<w:document xmlns:w="{W_NS}"><w:body>'
        f'{"".join(body)}<w:sectPr/></w:body></w:document>'
    )
    return build_zip({
        "[Content_Types].xml": "<Types/>",
        "word/document.xml": document,
    })


def build_xlsx(shared_strings, sheets):
    """
    XLSX bytes.

    ``sheets`` maps the sheet number to rows; each cell is either
    ("s", index) for a shared-string reference or a literal value.
    """
    entries = {"[Content_Types].xml": "<Types/>"}
    if shared_strings is not None:
        items = "".join(f"<si><t>{escape(s)}</t></si>" for s in shared_strings)
        entries["xl/sharedStrings.xml"] = (
            f'{XML_DECLARATION}<sst xmlns="{S_NS}" count="{len(shared_strings)}">{items}</sst>'
        )
    for number, rows in sheets.items():
        row_xml = []
        for r, row in enumerate(rows, start=1):
            cells = []
            for c, cell in enumerate(row):
                ref = f"{chr(ord('A') + c)}{r}"
                if isinstance(cell, tuple):
                    cells.append(f'<c r="{ref}" t="s"><v>{cell[1]}</v></c>')
                else:
                    cells.append(f'<c r="{ref}"><v>{escape(str(cell))}</v></c>')
            row_xml.append(f'<row r="{r}">{"".join(cells)}</row>')
        entries[f"xl/worksheets/sheet{number}.xml"] = (
            f'{XML_DECLARATION}<worksheet xmlns="{S_NS}"><sheetData>{"".join(row_xml)}</sheetData></worksheet>'
        )
    return build_zip(entries)


def _shape(text_paragraphs, placeholder=None):
    ph = ""
    if placeholder is not None:
        ph = f'<p:ph type="{placeholder}"/>' if placeholder else '<p:ph idx="1"/>'
    paragraphs = "".join(
        f"<a:p><a:r><a:rPr lang=\"en-US\"/><a:t>{escape(p)}</a:t></a:r></a:p>" for p in text_paragraphs
    )
    return (
        f'<p:sp><p:nvSpPr><p:cNvPr id="2" name="Shape"/><p:cNvSpPr/><p:nvPr>{ph}</p:nvPr></p:nvSpPr>'
        f'<p:spPr/><p:txBody><a:bodyPr/>{paragraphs}</p:txBody></p:sp>'
    )


def _table(rows):
    row_xml = "".join(
        "<a:tr h=\"370840\">" + "".join(
            f"<a:tc><a:txBody><a:bodyPr/><a:p><a:r><a:t>{escape(cell)}</a:t></a:r></a:p></a:txBody></a:tc>"
            for cell in row
        ) + "</a:tr>"
        for row in rows
    )
    return (
        '<p:graphicFrame><p:nvGraphicFramePr><p:cNvPr id="4" name="Table"/></p:nvGraphicFramePr>'
        f'<a:graphic><a:graphicData><a:tbl><a:tblGrid/>{row_xml}</a:tbl></a:graphicData></a:graphic>'
        '</p:graphicFrame>'
    )


def slide_xml(title=None, subtitle=None, body=None, tables=None, extra_shapes=""):
    shapes = []
    if title is not None:
        shapes.append(_shape([title], "title"))
    if subtitle is not None:
        shapes.append(_shape([subtitle], "subTitle"))
    if body:
        shapes.append(_shape(body, ""))
    for rows in tables or []:
        shapes.append(_table(rows))
    return (
        f'{XML_DECLARATION}<p:sld xmlns:p="{P_NS}" xmlns:a="{A_NS}" xmlns:r="{R_NS}">'
        f'<p:cSld><p:spTree><p:nvGrpSpPr/><p:grpSpPr/>{"".join(shapes)}{extra_shapes}</p:spTree></p:cSld></p:sld>'
    )


def notes_xml(text):
    return (
        f'{XML_DECLARATION}<p:notes xmlns:p="{P_NS}" xmlns:a="{A_NS}"><p:cSld><p:spTree>'
        f'{_shape([], "sldImg")}{_shape([text], "body")}{_shape(["7"], "sldNum")}'
        '</p:spTree></p:cSld></p:notes>'
    )


def core_xml(title="", creator=""):
    return (
        f'{XML_DECLARATION}<cp:coreProperties '
        'xmlns:cp="http://schemas.openxmlformats.org/package/2006/metadata/core-properties" '
        'xmlns:dc="http://purl.org/dc/elements/1.1/" xmlns:dcterms="http://purl.org/dc/terms/">'
        f'<dc:title>{escape(title)}</dc:title><dc:creator>{escape(creator)}</dc:creator>'
        '<dcterms:created>2024-01-15T09:30:00Z</dcterms:created>'
        '<dcterms:modified>2024-02-01T17:05:00Z</dcterms:modified>'
        '</cp:coreProperties>'
    )


def build_pptx(slides, notes=None, title="", creator="", notes_via_rels=False):
    """
    PPTX bytes.

    ``slides`` maps the entry suffix to slide XML; ``notes`` maps the same
    suffix to notes text.
    """
    entries = {
        "[Content_Types].xml": "<Types/>",
        "docProps/core.xml": core_xml(title, creator),
    }
    for suffix, xml in slides.items():
        entries[f"ppt/slides/slide{suffix}.xml"] = xml
    for suffix, text in (notes or {}).items():
        if notes_via_rels:
            target = f"notesSlide{suffix + 100}.xml"
            entries[f"ppt/slides/_rels/slide{suffix}.xml.rels"] = (
                f'{XML_DECLARATION}<Relationships xmlns="{REL_NS}">'
                f'<Relationship Id="rId2" Type="{NOTES_REL_TYPE}" Target="../notesSlides/{target}"/>'
                '</Relationships>'
            )
            entries[f"ppt/notesSlides/{target}"] = notes_xml(text)
        else:
            entries[f"ppt/notesSlides/notesSlide{suffix}.xml"] = notes_xml(text)
    return build_zip(entries)


@pytest.fixture
def docx_bytes():
    return build_docx


@pytest.fixture
def xlsx_bytes():
    return build_xlsx


@pytest.fixture
def pptx_bytes():
    return build_pptx


@pytest.fixture
def zip_bytes():
    return build_zip


@pytest.fixture
def limits():
    return ExtractionLimits()


@pytest.fixture
def service(limits):
    return ExtractionService(limits)


@pytest.fixture
def slide_markup():
    return slide_xml
