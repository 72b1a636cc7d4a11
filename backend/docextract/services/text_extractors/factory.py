"""
Text Extractor Factory.

Manages registration and retrieval of text extractors for different file formats.
Uses the Factory pattern to provide plug-and-play text extraction.
"""
from typing import Dict, List, Optional
from .base import BaseTextExtractor
from .pdf_extractor import PDFExtractor
from .docx_extractor import DOCXExtractor
from .xlsx_extractor import XLSXExtractor
from .pptx_extractor import PPTXExtractor
from .text_extractor import TextExtractor, CSVExtractor
from ...core.config import ExtractionLimits
from ...core.logging_config import get_logger
from ...domain.value_objects import DocumentFormat

logger = get_logger(__name__)


class TextExtractorFactory:
    """
    Registry of extractors keyed by document format.

    Each factory instance owns its extractors, so engines configured with
    different limits do not share state. The registry is filled once at
    construction and only read afterwards.
    """

    def __init__(self, limits: Optional[ExtractionLimits] = None):
        """
        Initialize default extractors.

        Args:
            limits: Extraction limits handed to every default extractor
        """
        self._extractors: Dict[DocumentFormat, BaseTextExtractor] = {}

        self.register(PDFExtractor(limits))
        self.register(DOCXExtractor(limits))
        self.register(XLSXExtractor(limits))
        self.register(PPTXExtractor(limits))
        self.register(CSVExtractor(limits))
        self.register(TextExtractor(limits=limits))

        logger.debug(f"TextExtractorFactory initialized with {len(self._extractors)} extractors")

    def register(self, extractor: BaseTextExtractor):
        """
        Register a text extractor.

        Args:
            extractor: Text extractor instance to register
        """
        if extractor.document_format in self._extractors:
            logger.warning(f"Overriding existing extractor for {extractor.document_format.value}")

        self._extractors[extractor.document_format] = extractor
        logger.debug(f"Registered extractor for {extractor.document_format.value}: {extractor.format_name}")

    def get_extractor(self, document_format: DocumentFormat) -> Optional[BaseTextExtractor]:
        """
        Get extractor for a detected format.

        Args:
            document_format: Detected document format

        Returns:
            Text extractor instance or None if not found
        """
        return self._extractors.get(document_format)

    def get_supported_formats(self) -> List[str]:
        """
        Get list of supported file formats.

        Returns:
            List of supported format names
        """
        return sorted(extractor.format_name for extractor in self._extractors.values())

    def get_supported_extensions(self) -> List[str]:
        """
        Get list of supported file extensions.

        Returns:
            List of supported file extensions
        """
        return sorted(extractor.file_extension for extractor in self._extractors.values())

    def is_format_supported(self, document_format: DocumentFormat) -> bool:
        return document_format in self._extractors
