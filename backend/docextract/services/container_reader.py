"""
Container Reader.

Opens the ZIP packaging shared by DOCX, XLSX and PPTX files and returns the
text of named entries on demand. The archive handle only lives inside the
``with`` block returned by :meth:`ContainerReader.open`.
"""
import io
import zipfile
import zlib
from contextlib import contextmanager
from typing import Iterator, List, Optional
from ..api.exceptions import ContainerCorrupt
from ..core.logging_config import get_logger

logger = get_logger(__name__)


class ContainerReader:
    """Read-only view over an OOXML container."""

    def __init__(self, archive: zipfile.ZipFile):
        self._archive = archive

    @classmethod
    @contextmanager
    def open(cls, data: bytes) -> Iterator["ContainerReader"]:
        """
        Open a ZIP container from raw bytes.

        Args:
            data: Archive bytes

        Yields:
            ContainerReader bound to the open archive

        Raises:
            ContainerCorrupt: If the archive cannot be parsed
        """
        try:
            archive = zipfile.ZipFile(io.BytesIO(data))
        except (zipfile.BadZipFile, zipfile.LargeZipFile, EOFError, OSError, ValueError) as e:
            raise ContainerCorrupt(f"Archive could not be opened: {e}") from e

        try:
            yield cls(archive)
        finally:
            archive.close()
            logger.debug("Container closed")

    def entry_names(self) -> List[str]:
        """Entry names in archive enumeration order."""
        return self._archive.namelist()

    def has_entry(self, path: str) -> bool:
        try:
            self._archive.getinfo(path)
        except KeyError:
            return False
        return True

    def read_entry(self, path: str) -> Optional[str]:
        """
        Decompress one entry as UTF-8 text.

        Args:
            path: Entry name inside the archive (e.g. 'word/document.xml')

        Returns:
            Entry text, or None if the entry does not exist

        Raises:
            ContainerCorrupt: If the entry exists but cannot be decompressed
        """
        try:
            info = self._archive.getinfo(path)
        except KeyError:
            return None

        try:
            raw = self._archive.read(info)
        except (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError, RuntimeError) as e:
            raise ContainerCorrupt(f"Entry '{path}' could not be decompressed: {e}") from e

        # utf-8-sig drops a leading byte-order mark some producers write
        return raw.decode("utf-8-sig", errors="replace")
