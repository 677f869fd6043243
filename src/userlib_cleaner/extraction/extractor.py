"""
Metadata extractor.

Runs the identity strategies for one archive and turns the winning result
into an ArtifactRecord. Archives without any usable metadata get their own
path as identity, so they are never grouped with anything else.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence

from userlib_cleaner.archive.archive_accessor import ArchiveAccessor
from userlib_cleaner.core.config import Settings, settings as default_settings
from userlib_cleaner.extraction.strategies import ExtractionContext, strategies_for
from userlib_cleaner.schemas.records import ArtifactRecord, ExtractionMode

logger = logging.getLogger(__name__)

INFO_FIELDS = ("display_name", "vendor", "license")


class MetadataExtractor:
    """
    Assigns every archive a logical identity and a version string.

    The extractor holds no per-archive state, so one instance can be shared
    by several worker threads.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings

    def extract(
        self,
        archive,
        source_path: str,
        mode: ExtractionMode = ExtractionMode.AUTO
    ) -> ArtifactRecord:
        """
        Build the record for one opened archive.

        Args:
            archive: Opened archive (entry_names() / read_text(name))
            source_path: Absolute path of the archive
            mode: Which strategies may be used

        Returns:
            ArtifactRecord, with the fallback identity if no strategy matched
        """
        context = ExtractionContext(archive, source_path, self.settings)
        info: Dict[str, str] = {}

        for strategy in strategies_for(mode):
            result = strategy(context)
            if result is None:
                continue

            for field in INFO_FIELDS:
                value = getattr(result, field)
                if value and field not in info:
                    info[field] = value

            if result.identity:
                logger.debug(
                    f"{context.file_name}: identity '{result.identity}' "
                    f"version '{result.version}' from {result.strategy}"
                )
                return ArtifactRecord(
                    source_path=source_path,
                    identity=result.identity,
                    version_raw=result.version,
                    strategy=result.strategy,
                    **info
                )

        logger.debug(f"{context.file_name}: no identity found, keeping it apart")
        return ArtifactRecord(
            source_path=source_path,
            identity=source_path,
            strategy="fallback",
            **info
        )

    def extract_path(self, path: str, mode: ExtractionMode = ExtractionMode.AUTO) -> ArtifactRecord:
        """
        Open an archive file and extract its record.

        Raises:
            FileNotFoundError: If the archive doesn't exist
            zipfile.BadZipFile: If the archive can't be opened
        """
        source_path = os.path.abspath(path)
        archive = ArchiveAccessor(source_path)
        return self.extract(archive, source_path, mode)

    def extract_many(
        self,
        paths: Sequence[str],
        mode: ExtractionMode = ExtractionMode.AUTO,
        workers: int = 1
    ) -> List[ArtifactRecord]:
        """
        Extract records for several archives, returned in input order.

        With workers > 1 archives are read on a thread pool; the first
        archive that fails to open aborts the whole call.
        """
        if workers <= 1 or len(paths) <= 1:
            return [self.extract_path(path, mode) for path in paths]

        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(lambda path: self.extract_path(path, mode), paths))
