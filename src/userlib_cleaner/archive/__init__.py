"""
Access to library archive contents.
"""

from userlib_cleaner.archive.archive_accessor import ArchiveAccessor

__all__ = ["ArchiveAccessor"]
