"""
Extraction Service - Orchestrates document extraction.

Enforces the size ceiling, detects the format, dispatches to the matching
extractor and normalizes whatever comes back into one ExtractionResult.
Only MissingInput and SizeExceeded leave this service as exceptions;
every other problem becomes placeholder text plus metadata.
"""
from datetime import datetime, timezone
from typing import Optional
from .format_detector import detect_format
from .text_extractors import BaseTextExtractor, TextExtractorFactory
from ..api.exceptions import MissingInput
from ..core.config import ExtractionLimits, DEFAULT_LIMITS
from ..core.logging_config import get_logger
from ..domain.entities import ExtractionOutcome, ExtractionResult, RawInput
from ..domain.value_objects import DocumentFormat, REASON_UNSUPPORTED_FORMAT
from ..utils.text_utils import build_preview, count_words
from ..utils.validators import validate_content_present, validate_size

logger = get_logger(__name__)

UNREADABLE_FORMAT_TEXT = "Unable to extract text from this file format."
UNSUPPORTED_FORMAT_TEXT = "File uploaded but text extraction is not supported for this format."


class ExtractionService:
    """
    Stateless extraction engine.

    Each call to extract() is independent; the service holds only its
    limits and a read-only extractor registry.
    """

    def __init__(
        self,
        limits: Optional[ExtractionLimits] = None,
        factory: Optional[TextExtractorFactory] = None
    ):
        """
        Initialize the service.

        Args:
            limits: Extraction limits (defaults to configured limits)
            factory: Extractor registry (defaults to one built with ``limits``)
        """
        self.limits = limits or DEFAULT_LIMITS
        self.factory = factory or TextExtractorFactory(self.limits)

    def extract(self, raw: Optional[RawInput]) -> ExtractionResult:
        """
        Extract text and metadata from an upload.

        Args:
            raw: Upload bytes, declared content-type and filename

        Returns:
            Normalized ExtractionResult

        Raises:
            MissingInput: If no upload or no bytes were supplied
            SizeExceeded: If the upload exceeds the size ceiling
        """
        if raw is None:
            raise MissingInput()
        validate_content_present(raw.content)
        validate_size(raw.size, self.limits.max_file_size)

        document_format = detect_format(raw.content_type, raw.filename)
        logger.debug(f"Detected format '{document_format.value}' for '{raw.filename}' ({raw.size} bytes)")

        extractor = self.factory.get_extractor(document_format)
        if extractor is None:
            outcome = self._extract_unknown(raw)
        else:
            outcome = self._run_extractor(extractor, raw)

        return self._build_result(raw, outcome)

    def _run_extractor(self, extractor: BaseTextExtractor, raw: RawInput) -> ExtractionOutcome:
        """Run one extractor, converting any escaped failure into a degraded outcome."""
        try:
            outcome = extractor.extract(raw.content, raw.filename)
        except Exception as e:
            logger.error(
                f"Error extracting text from {raw.filename} ({extractor.format_name}): {e}",
                exc_info=True
            )
            return extractor.degrade(e, raw.filename)

        if outcome.is_degraded:
            logger.warning(
                f"Degraded {extractor.format_name} extraction for {raw.filename}: "
                f"{outcome.error or outcome.reason}"
            )
        else:
            logger.info(
                f"Successfully extracted {len(outcome.text)} characters from "
                f"{raw.filename} ({extractor.format_name})"
            )
        return outcome

    def _extract_unknown(self, raw: RawInput) -> ExtractionOutcome:
        """Fallback for unrecognized formats: strict UTF-8 decode or placeholder."""
        metadata = {"type": DocumentFormat.UNKNOWN.value}
        try:
            decoded = raw.content.decode("utf-8")
        except UnicodeDecodeError:
            logger.warning(f"Unsupported binary format: {raw.filename} ({raw.content_type})")
            return ExtractionOutcome.degraded(
                UNSUPPORTED_FORMAT_TEXT, reason=REASON_UNSUPPORTED_FORMAT, metadata=metadata
            )

        if not decoded.strip():
            return ExtractionOutcome.degraded(
                UNREADABLE_FORMAT_TEXT, reason=REASON_UNSUPPORTED_FORMAT, metadata=metadata
            )

        logger.info(f"Successfully decoded unsupported format as UTF-8 text: {raw.filename}")
        return ExtractionOutcome.ok(decoded, metadata=metadata)

    def _build_result(self, raw: RawInput, outcome: ExtractionOutcome) -> ExtractionResult:
        text = outcome.text or ""

        metadata = {
            "fileName": raw.filename,
            "fileType": raw.content_type,
            "size": raw.size,
            "processedAt": datetime.now(timezone.utc).isoformat(),
        }
        metadata.update(outcome.metadata)
        metadata["extractionStatus"] = outcome.status.value
        if outcome.is_degraded:
            metadata["degradedReason"] = outcome.reason
        if outcome.error:
            metadata["error"] = outcome.error

        return ExtractionResult(
            plain_text=text,
            structured_data=outcome.structured_data,
            metadata=metadata,
            preview=build_preview(text, self.limits.preview_length),
            character_count=len(text),
            word_count=count_words(text),
        )


def extract_document(
    content: Optional[bytes],
    content_type: str,
    filename: str,
    limits: Optional[ExtractionLimits] = None
) -> ExtractionResult:
    """
    Convenience wrapper: extract one upload with a fresh service.

    Raises:
        MissingInput: If ``content`` is None
        SizeExceeded: If ``content`` exceeds the size ceiling
    """
    service = ExtractionService(limits)
    return service.extract(RawInput(content=content, content_type=content_type, filename=filename))
