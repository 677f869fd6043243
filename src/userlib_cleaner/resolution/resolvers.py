"""
Duplicate resolution strategies.

A resolver reduces the records of one scan to a mapping of identity to the
single record that is kept. Two interchangeable resolvers exist:

1. VersionRankResolver picks the highest version, preferring canonically
   named files on ties and the earliest scanned record after that.
2. EvictionLogResolver trusts an external build log listing evicted files.

build_resolver() turns the --mode value into the right resolver, so callers
never branch on the mode string.
"""

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from userlib_cleaner.core.settings import EVICTED_BY, EVICTED_MARKER, MODE_AUTO, MODE_STRICT
from userlib_cleaner.schemas.records import ArtifactRecord, ExtractionMode

logger = logging.getLogger(__name__)

_PATH_SEPARATORS = re.compile(r"[\\/]")


def group_by_identity(records: Iterable[ArtifactRecord]) -> Dict[str, List[ArtifactRecord]]:
    """Group records by identity, keeping scan order inside and across groups."""
    groups: Dict[str, List[ArtifactRecord]] = {}
    for record in records:
        groups.setdefault(record.identity, []).append(record)
    return groups


class Resolver(ABC):
    """Base class for all resolvers."""

    # Strategies the extractor may use for records fed to this resolver
    extraction_mode: ExtractionMode = ExtractionMode.AUTO

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abstractmethod
    def resolve(self, records: Sequence[ArtifactRecord]) -> Dict[str, ArtifactRecord]:
        """
        Select the survivor of every identity group.

        Args:
            records: Records in a stable scan order

        Returns:
            Mapping of identity to the record that is kept
        """
        pass


class VersionRankResolver(Resolver):
    """Keeps the highest-ranked record of each identity."""

    def __init__(self, extraction_mode: ExtractionMode = ExtractionMode.AUTO):
        self.extraction_mode = extraction_mode

    @staticmethod
    def sort_key(record: ArtifactRecord) -> Tuple[int, bool]:
        return record.version_rank, record.is_canonically_named

    def select(self, candidates: Sequence[ArtifactRecord]) -> ArtifactRecord:
        """
        Fold over one group; a candidate only replaces the current best when
        its key is strictly greater, so the earliest record wins full ties.
        """
        best = candidates[0]
        for candidate in candidates[1:]:
            if self.sort_key(candidate) <= self.sort_key(best):
                continue
            if candidate.version_rank > best.version_rank:
                logger.debug(
                    f"Newer version found for {candidate.identity}: "
                    f"{candidate.file_name} ({candidate.version_raw}) over {best.file_name} ({best.version_raw})"
                )
            else:
                logger.debug(
                    f"Preferring canonically named {candidate.file_name} over {best.file_name}"
                )
            best = candidate
        return best

    def resolve(self, records: Sequence[ArtifactRecord]) -> Dict[str, ArtifactRecord]:
        survivors: Dict[str, ArtifactRecord] = {}
        for identity, candidates in group_by_identity(records).items():
            survivor = self.select(candidates)
            survivors[identity] = survivor
            if len(candidates) > 1:
                logger.info(f"Keeping {survivor.file_name} for {identity} ({len(candidates) - 1} duplicate(s))")
        return survivors


def parse_eviction_log(text: str) -> Set[str]:
    """
    Collect the file names of "Evicted <path> by <other>" lines.

    Paths may use either slash style; only the last segment is kept.
    """
    evicted: Set[str] = set()
    for line in text.splitlines():
        line = line.strip()
        if not line.startswith(EVICTED_MARKER) or EVICTED_BY not in line:
            continue
        token = line[len(EVICTED_MARKER):line.index(EVICTED_BY)].strip()
        name = _PATH_SEPARATORS.split(token)[-1]
        if name:
            evicted.add(name)
    return evicted


class EvictionLogResolver(Resolver):
    """
    Keeps, per identity, the first record the eviction log did not evict.

    The log is ground truth: version ranks are never consulted.
    """

    def __init__(self, evicted_names: Iterable[str]):
        self.evicted_names = frozenset(evicted_names)

    @classmethod
    def from_log_file(cls, log_path: str) -> "EvictionLogResolver":
        """
        Raises:
            FileNotFoundError: If the log file doesn't exist
        """
        path = Path(log_path)
        if not path.is_file():
            raise FileNotFoundError(f"Eviction log '{log_path}' not found")
        evicted = parse_eviction_log(path.read_text(encoding="utf-8", errors="replace"))
        logger.info(f"Loaded {len(evicted)} evicted file name(s) from {log_path}")
        return cls(evicted)

    def resolve(self, records: Sequence[ArtifactRecord]) -> Dict[str, ArtifactRecord]:
        survivors: Dict[str, ArtifactRecord] = {}
        for identity, candidates in group_by_identity(records).items():
            survivor: Optional[ArtifactRecord] = None
            for record in candidates:
                if record.file_name in self.evicted_names:
                    logger.debug(f"{record.file_name} is listed as evicted")
                    continue
                survivor = record
                break

            if survivor is None:
                logger.warning(f"Every archive of {identity} is listed as evicted; none will be kept")
                continue
            survivors[identity] = survivor
        return survivors


def build_resolver(mode: str) -> Resolver:
    """
    Get the resolver for a --mode value.

    Args:
        mode: "auto", "strict", or a path to an eviction log

    Returns:
        A Resolver instance
    """
    if mode == MODE_AUTO:
        return VersionRankResolver(ExtractionMode.AUTO)
    if mode == MODE_STRICT:
        return VersionRankResolver(ExtractionMode.STRICT)
    return EvictionLogResolver.from_log_file(mode)
