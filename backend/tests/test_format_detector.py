import pytest

from docextract.domain.value_objects import DocumentFormat
from docextract.services.format_detector import detect_format


@pytest.mark.parametrize("content_type,expected", [
    ("application/pdf", DocumentFormat.PDF),
    ("application/vnd.openxmlformats-officedocument.wordprocessingml.document", DocumentFormat.DOCX),
    ("application/vnd.openxmlformats-officedocument.spreadsheetml.sheet", DocumentFormat.XLSX),
    ("application/vnd.openxmlformats-officedocument.presentationml.presentation", DocumentFormat.PPTX),
    ("text/csv", DocumentFormat.CSV),
    ("text/plain; charset=utf-8", DocumentFormat.TXT),
])
def test_content_type_detection(content_type, expected):
    assert detect_format(content_type, "upload.bin") == expected


def test_content_type_takes_priority_over_extension():
    assert detect_format("application/pdf", "notes.txt") == DocumentFormat.PDF


@pytest.mark.parametrize("filename,expected", [
    ("Report.PDF", DocumentFormat.PDF),
    ("contract.docx", DocumentFormat.DOCX),
    ("budget.xlsx", DocumentFormat.XLSX),
    ("deck.pptx", DocumentFormat.PPTX),
    ("people.csv", DocumentFormat.CSV),
    ("readme.txt", DocumentFormat.TXT),
])
def test_extension_fallback(filename, expected):
    assert detect_format("application/octet-stream", filename) == expected


@pytest.mark.parametrize("content_type,filename", [
    ("application/zip", "archive.zip"),
    ("", ""),
    (None, None),
    ("image/png", "photo.png"),
])
def test_unknown_inputs(content_type, filename):
    assert detect_format(content_type, filename) == DocumentFormat.UNKNOWN
