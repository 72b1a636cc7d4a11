"""
Validation utilities - Pure validation functions.
"""
from typing import Optional
from ..api.exceptions import MissingInput, SizeExceeded


def validate_content_present(content: Optional[bytes]) -> None:
    """
    Validate that an upload carries a byte buffer.

    Raises:
        MissingInput: If no buffer was supplied
    """
    if content is None:
        raise MissingInput()


def validate_size(size: int, limit: int) -> None:
    """
    Validate upload size against the ceiling.

    Raises:
        SizeExceeded: If the upload is larger than ``limit`` bytes
    """
    if size > limit:
        raise SizeExceeded(size, limit)


def normalize_filename(filename: Optional[str]) -> str:
    """
    Reduce a client-supplied filename to its final path component.

    Browsers on Windows may send full paths, so both separators are handled.
    """
    if not filename:
        return ""
    return filename.replace("\\", "/").rsplit("/", 1)[-1].strip()
