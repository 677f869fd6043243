"""
Pydantic schemas for archive records and run results.

An ArtifactRecord is built once per archive by the metadata extractor and is
read-only afterwards: resolvers select among records, they never change one.
The version rank is derived from the raw version string on access, so two
records with the same version text always rank the same.
"""

import os
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, computed_field

from userlib_cleaner.versioning.encoder import encode_version


class ExtractionMode(str, Enum):
    """Which strategies the metadata extractor may use."""
    AUTO = "auto"       # Manifest, descriptor, class-path and filename strategies
    STRICT = "strict"   # Embedded metadata only


class ArtifactRecord(BaseModel):
    """One archive and the logical identity it was assigned."""
    source_path: str
    identity: str = Field(min_length=1)
    version_raw: str = ""
    display_name: Optional[str] = None
    vendor: Optional[str] = None
    license: Optional[str] = None
    strategy: str = "fallback"

    model_config = {"frozen": True}

    @computed_field
    @property
    def file_name(self) -> str:
        return os.path.basename(self.source_path)

    @computed_field
    @property
    def version_rank(self) -> int:
        return encode_version(self.version_raw)

    @property
    def extension(self) -> str:
        return os.path.splitext(self.file_name)[1]

    @property
    def is_canonically_named(self) -> bool:
        """
        True when the file name ends with its own version, e.g. "junit-4.11.jar"
        for version "4.11".
        """
        if not self.version_raw:
            return False
        return self.file_name.endswith(self.version_raw + self.extension)


class ExtractedMetadata(BaseModel):
    """Partial result produced by a single extraction strategy."""
    strategy: str
    identity: str = ""
    version: str = ""
    display_name: Optional[str] = None
    vendor: Optional[str] = None
    license: Optional[str] = None


class CleanupReport(BaseModel):
    """Counts of what a cleanup run removed (or would remove)."""
    dry_run: bool = True
    removed_archives: int = 0
    removed_companions: int = 0
    removed_paths: List[str] = Field(default_factory=list)

    @property
    def total_removed(self) -> int:
        return self.removed_archives + self.removed_companions


class CleanupResult(BaseModel):
    """Everything a run produced, for reporting."""
    resolver: str
    records: List[ArtifactRecord] = Field(default_factory=list)
    survivors: Dict[str, ArtifactRecord] = Field(default_factory=dict)
    report: CleanupReport = Field(default_factory=CleanupReport)

    def evicted(self) -> List[ArtifactRecord]:
        """Records that did not survive resolution, in scan order."""
        return [record for record in self.records if not is_survivor(record, self.survivors)]


def is_survivor(record: ArtifactRecord, survivors: Dict[str, ArtifactRecord]) -> bool:
    """Check whether a record is the one kept for its identity."""
    survivor = survivors.get(record.identity)
    return survivor is not None and survivor.source_path == record.source_path
