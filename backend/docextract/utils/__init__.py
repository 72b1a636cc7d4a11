"""
Utility functions - Pure functions with no dependencies.
These can be used across all layers.
"""
from .text_utils import clean_extracted_text, build_preview, count_words
from .validators import validate_content_present, validate_size, normalize_filename

__all__ = [
    "clean_extracted_text",
    "build_preview",
    "count_words",
    "validate_content_present",
    "validate_size",
    "normalize_filename",
]
