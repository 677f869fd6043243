"""
Cleanup executor.

Removes every archive that lost resolution, along with companion files that
share its path as a prefix (e.g. "lib-1.0.jar.RequiredLib").
"""

import logging
import os
from typing import Dict, Sequence

from userlib_cleaner.schemas.records import ArtifactRecord, CleanupReport, is_survivor

logger = logging.getLogger(__name__)


class CleanupExecutor:
    """Deletes non-surviving archives, or only counts them in dry-run mode."""

    def __init__(self, dry_run: bool = True, verbose: bool = False):
        """
        Args:
            dry_run: Report what would be removed without deleting anything
            verbose: Log every removed file at INFO instead of DEBUG
        """
        self.dry_run = dry_run
        self.verbose = verbose

    def _log_file(self, message: str) -> None:
        logger.log(logging.INFO if self.verbose else logging.DEBUG, message)

    def remove_file(self, path: str) -> None:
        """Delete a file; one that is already gone counts as removed."""
        if self.dry_run:
            return
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.debug(f"{path} was already removed")

    def execute(
        self,
        records: Sequence[ArtifactRecord],
        survivors: Dict[str, ArtifactRecord],
        listing: Sequence[str]
    ) -> CleanupReport:
        """
        Remove the complement of the survivor set.

        Args:
            records: Every scanned record
            survivors: Identity -> kept record, as returned by a resolver
            listing: Every file path in the target directory

        Returns:
            CleanupReport with archive and companion counts
        """
        report = CleanupReport(dry_run=self.dry_run)
        action = "Would remove" if self.dry_run else "Removing"

        for record in records:
            if is_survivor(record, survivors):
                continue

            logger.info(f" >> {action} {record.identity} >> {record.source_path}")
            for path in listing:
                if not path.startswith(record.source_path):
                    continue
                self.remove_file(path)
                report.removed_paths.append(path)
                if path == record.source_path:
                    report.removed_archives += 1
                else:
                    report.removed_companions += 1
                    self._log_file(f"    {action.lower()} companion {path}")

        return report
