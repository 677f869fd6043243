"""
Data models shared by the extractor, resolvers and cleanup executor.
"""

from userlib_cleaner.schemas.records import (
    ArtifactRecord,
    CleanupReport,
    CleanupResult,
    ExtractedMetadata,
    ExtractionMode,
    is_survivor,
)

__all__ = [
    "ArtifactRecord",
    "CleanupReport",
    "CleanupResult",
    "ExtractedMetadata",
    "ExtractionMode",
    "is_survivor",
]
