# userlib_cleaner/pipelines/cleanup_pipeline.py
"""
One cleanup run: enumerate, extract, resolve, remove.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from userlib_cleaner.cleanup.executor import CleanupExecutor
from userlib_cleaner.core.config import Settings, settings as default_settings
from userlib_cleaner.core.settings import MODE_AUTO
from userlib_cleaner.extraction.extractor import MetadataExtractor
from userlib_cleaner.resolution.resolvers import build_resolver
from userlib_cleaner.schemas.records import CleanupResult

logger = logging.getLogger(__name__)


class CleanupOptions(BaseModel):
    """Options for a single run, as given on the command line."""
    target: str = "."
    mode: str = MODE_AUTO
    clean: bool = False
    verbose: bool = False
    workers: Optional[int] = Field(default=None, ge=1)


def list_target_directory(target: str) -> List[str]:
    """
    List the regular files directly inside a directory.

    Returns:
        Sorted absolute paths

    Raises:
        FileNotFoundError: If the directory doesn't exist
        NotADirectoryError: If the target is not a directory
    """
    path = Path(target)
    if not path.exists():
        raise FileNotFoundError(f"Target directory '{target}' not found")
    if not path.is_dir():
        raise NotADirectoryError(f"Target '{target}' is not a directory")

    # Symlinks are kept as links: deleting one must not touch a file outside the target
    return sorted(os.path.abspath(entry) for entry in path.iterdir() if entry.is_file())


def run_cleanup(options: CleanupOptions, settings: Optional[Settings] = None) -> CleanupResult:
    """
    Run the whole cleanup for one directory.

    Nothing is removed unless options.clean is set. Fatal errors (missing
    directory, unreadable archive, missing eviction log) propagate before
    any file is touched.
    """
    settings = settings or default_settings

    listing = list_target_directory(options.target)
    extension = settings.archive_extension.lower()
    archives = [path for path in listing if path.lower().endswith(extension)]
    logger.info(f"Found {len(archives)} archive(s) in {options.target}")

    resolver = build_resolver(options.mode)
    extractor = MetadataExtractor(settings)
    records = extractor.extract_many(
        archives,
        mode=resolver.extraction_mode,
        workers=options.workers or settings.workers,
    )
    for record in records:
        logger.debug(f"Checking {record.source_path} as {record.identity} {record.version_raw}".rstrip())

    survivors = resolver.resolve(records)

    executor = CleanupExecutor(dry_run=not options.clean, verbose=options.verbose)
    report = executor.execute(records, survivors, listing)

    return CleanupResult(
        resolver=resolver.name,
        records=records,
        survivors=survivors,
        report=report,
    )
