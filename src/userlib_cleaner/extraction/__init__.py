"""
Identity extraction for library archives.
"""

from userlib_cleaner.extraction.extractor import MetadataExtractor
from userlib_cleaner.extraction.strategies import (
    AUTO_STRATEGIES,
    STRICT_STRATEGIES,
    ExtractionContext,
    strategies_for,
)

__all__ = [
    "AUTO_STRATEGIES",
    "STRICT_STRATEGIES",
    "ExtractionContext",
    "MetadataExtractor",
    "strategies_for",
]
