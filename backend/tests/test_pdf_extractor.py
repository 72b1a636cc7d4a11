import time

from docextract.core.config import ExtractionLimits
from docextract.domain.value_objects import OutcomeStatus
from docextract.services.text_extractors import PDFExtractor
from docextract.services.text_extractors.pdf_extractor import (
    LOW_CONFIDENCE_SENTINEL,
    extract_printable_runs,
    extract_show_operator_text,
    iter_text_objects,
)

# Disable the printable-run scan so only text-show operators contribute
OPERATORS_ONLY = ExtractionLimits(pdf_min_text_length=1, pdf_min_run_length=10_000)


def test_single_show_operator():
    outcome = PDFExtractor(OPERATORS_ONLY).extract(b"BT /F1 12 Tf (Hello) Tj ET", "hello.pdf")

    assert outcome.status == OutcomeStatus.OK
    assert "Hello" in outcome.text
    assert outcome.metadata["textObjectCount"] == 1
    assert outcome.metadata["operatorFragmentCount"] == 1
    assert outcome.metadata["lowConfidence"] is False


def test_short_result_uses_sentinel():
    outcome = PDFExtractor().extract(b"%PDF-1.4\nBT (Hi) Tj ET\n%%EOF", "tiny.pdf")

    assert outcome.is_degraded
    assert outcome.text == LOW_CONFIDENCE_SENTINEL
    assert outcome.reason == "low_confidence"
    assert outcome.error is None
    assert outcome.metadata["lowConfidence"] is True


def test_operators_keep_encounter_order():
    content = "BT (one) Tj [(two) -250 (three)] TJ (four) Tj ET BT (five) Tj ET"
    assert extract_show_operator_text(content) == ["one", "two", "three", "four", "five"]


def test_escaped_parentheses_are_unescaped():
    content = r"BT (f\(x\) = y) Tj (back\\slash) Tj ET"
    assert extract_show_operator_text(content) == ["f(x) = y", "back\\slash"]


def test_strings_outside_text_objects_are_ignored():
    assert extract_show_operator_text("(outside) Tj BT (inside) Tj ET") == ["inside"]


def test_operator_names_inside_words_do_not_delimit():
    assert extract_show_operator_text("BTX (nope) Tj ETX") == []


def test_printable_run_scan():
    content = "\x00\x01This is a readable sentence in the stream\x02\x03ab\x04"
    assert extract_printable_runs(content, 20) == ["This is a readable sentence in the stream"]
    assert extract_printable_runs("short\x00words", 20) == []


def test_fallback_text_used_without_operators():
    body = b"stream\x00\x9c" + b"Quarterly results exceeded expectations across every region" + b"\x00\xffendstream"
    outcome = PDFExtractor().extract(body, "scan.pdf")

    assert outcome.status == OutcomeStatus.OK
    assert "Quarterly results exceeded expectations across every region" in outcome.text
    assert outcome.metadata["operatorFragmentCount"] == 0
    assert outcome.metadata["fallbackFragmentCount"] >= 1


def test_binary_noise_is_low_confidence():
    outcome = PDFExtractor().extract(b"%PDF-1.7\n" + b"\x00\xff\x9c\x81" * 500 + b"\n%%EOF", "noise.pdf")
    assert outcome.text == LOW_CONFIDENCE_SENTINEL
    assert outcome.metadata["textObjectCount"] == 0


def test_text_objects_scanned_in_order():
    content = "BT (a) Tj ET junk BT (b) Tj ET BT (unclosed) Tj"
    assert list(iter_text_objects(content)) == [" (a) Tj ", " (b) Tj "]


def test_unclosed_text_objects_scale_linearly():
    hostile = b"BT " * 1_000_000
    started = time.perf_counter()
    outcome = PDFExtractor(OPERATORS_ONLY).extract(hostile, "hostile.pdf")
    elapsed = time.perf_counter() - started

    assert outcome.metadata["textObjectCount"] == 0
    assert elapsed < 5


def test_unclosed_arrays_scale_linearly():
    hostile = b"BT " + b"[(x) " * 200_000 + b"ET"
    started = time.perf_counter()
    outcome = PDFExtractor(OPERATORS_ONLY).extract(hostile, "arrays.pdf")
    elapsed = time.perf_counter() - started

    assert outcome.metadata["textObjectCount"] == 1
    assert outcome.metadata["operatorFragmentCount"] == 0
    assert elapsed < 5
