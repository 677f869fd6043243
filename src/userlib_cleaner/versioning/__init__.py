"""
Version ranking utilities.
"""

from userlib_cleaner.versioning.encoder import encode_version, version_components

__all__ = ["encode_version", "version_components"]
