"""
Format Detector.

Classifies an upload by its declared content-type, falling back to the
filename extension.
"""
from typing import Dict, Optional
from ..domain.value_objects import DocumentFormat

CONTENT_TYPE_FORMATS: Dict[str, DocumentFormat] = {
    "application/pdf": DocumentFormat.PDF,
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": DocumentFormat.DOCX,
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": DocumentFormat.XLSX,
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": DocumentFormat.PPTX,
    "text/csv": DocumentFormat.CSV,
    "text/plain": DocumentFormat.TXT,
}

EXTENSION_FORMATS: Dict[str, DocumentFormat] = {
    ".pdf": DocumentFormat.PDF,
    ".docx": DocumentFormat.DOCX,
    ".xlsx": DocumentFormat.XLSX,
    ".pptx": DocumentFormat.PPTX,
    ".csv": DocumentFormat.CSV,
    ".txt": DocumentFormat.TXT,
}


def detect_format(content_type: Optional[str], filename: Optional[str]) -> DocumentFormat:
    """
    Detect the document format of an upload.

    Args:
        content_type: Declared MIME type (parameters such as charset are ignored)
        filename: Client filename

    Returns:
        Detected format, ``DocumentFormat.UNKNOWN`` when nothing matches
    """
    if content_type:
        mime = content_type.split(";", 1)[0].strip().lower()
        detected = CONTENT_TYPE_FORMATS.get(mime)
        if detected is not None:
            return detected

    name = (filename or "").lower()
    for extension, document_format in EXTENSION_FORMATS.items():
        if name.endswith(extension):
            return document_format

    return DocumentFormat.UNKNOWN
