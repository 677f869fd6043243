"""Direct library archive accessor component.

This module provides functionality to list and read entries of a library
archive (JAR/ZIP) without extracting it to disk.
"""

import os
import zipfile
from typing import List, Optional, Pattern


class ArchiveAccessor:
    """Class for reading entry names and text entries of a library archive."""

    def __init__(self, archive_path: str):
        """Initialize with path to archive file and read its entry list.

        Args:
            archive_path: Path to the archive file

        Raises:
            FileNotFoundError: If the archive file doesn't exist
            zipfile.BadZipFile: If the file is not a valid ZIP container
        """
        self.archive_path = archive_path

        if not os.path.exists(archive_path):
            raise FileNotFoundError(f"Archive file '{archive_path}' not found")

        try:
            with zipfile.ZipFile(archive_path, 'r') as zipf:
                self._names = zipf.namelist()
        except zipfile.BadZipFile:
            raise zipfile.BadZipFile(f"'{archive_path}' is not a valid archive")

    def entry_names(self) -> List[str]:
        """Get all entry names in archive order.

        Returns:
            List of entry paths within the archive
        """
        return list(self._names)

    def has_entry(self, name: str) -> bool:
        return name in self._names

    def find_entries(self, pattern: Pattern) -> List[str]:
        """Get entry names matching a compiled regex, in archive order."""
        return [name for name in self._names if pattern.match(name)]

    def read_text(self, name: str, encoding: str = 'utf-8') -> Optional[str]:
        """Read and decode one entry.

        Args:
            name: Entry path within the archive
            encoding: Text encoding of the entry

        Returns:
            Decoded text, or None if the entry doesn't exist

        Raises:
            UnicodeDecodeError: If the entry bytes are not valid text
            zipfile.BadZipFile: If the entry is corrupt in the container
            zlib.error: If the entry's compressed data is damaged
        """
        if name not in self._names:
            return None

        with zipfile.ZipFile(self.archive_path, 'r') as zipf:
            data = zipf.read(name)
        # A byte-order mark is common in hand-edited manifests
        return data.decode(encoding).lstrip('\ufeff')