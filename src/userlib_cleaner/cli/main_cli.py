"""
Command-line entry point: find duplicate archives in a userlib directory and
remove all but one per library.
"""

import logging
import sys
import zipfile
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from userlib_cleaner.core.config import settings
from userlib_cleaner.core.settings import MODE_AUTO
from userlib_cleaner.core.utils import configure_logging
from userlib_cleaner.pipelines.cleanup_pipeline import CleanupOptions, run_cleanup
from userlib_cleaner.schemas.records import CleanupResult, is_survivor

main_app = typer.Typer(help="userlib-cleaner CLI", add_completion=False)
console = Console()
logger = logging.getLogger(__name__)


def print_report(result: CleanupResult) -> None:
    """Print a table of every identity with more than one archive."""
    table = Table(title=f"Duplicate archives ({result.resolver})")
    table.add_column("Identity", style="cyan")
    table.add_column("File")
    table.add_column("Version", style="yellow")
    table.add_column("Source", style="magenta")
    table.add_column("Decision")

    counts = {}
    for record in result.records:
        counts[record.identity] = counts.get(record.identity, 0) + 1

    for record in result.records:
        if counts[record.identity] < 2 and is_survivor(record, result.survivors):
            continue
        decision = "[green]keep[/green]" if is_survivor(record, result.survivors) else "[red]remove[/red]"
        table.add_row(
            record.identity,
            record.file_name,
            record.version_raw or "-",
            record.strategy,
            decision
        )

    console.print(table)


@main_app.command()
def cleanup(
    target: str = typer.Option(".", "--target", help="Directory to scan"),
    clean: bool = typer.Option(False, "--clean", help="Remove files; without it only report what would be removed"),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging"),
    mode: str = typer.Option(MODE_AUTO, "--mode", help="auto, strict, or path to an eviction log"),
    workers: Optional[int] = typer.Option(None, "--workers", min=1, help="Archives to read in parallel"),
    report: bool = typer.Option(False, "--report", help="Print a table of kept and removed archives"),
):
    """Remove duplicate library archives, keeping one per identity."""
    configure_logging(verbose)

    options = CleanupOptions(target=target, mode=mode, clean=clean, verbose=verbose, workers=workers)
    try:
        result = run_cleanup(options, settings)
    except (OSError, zipfile.BadZipFile) as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        sys.exit(1)

    if report:
        print_report(result)

    total = result.report.total_removed
    if result.report.dry_run:
        console.print(f"Total files to be removed: {total} (dry run, use --clean to remove them)")
    else:
        console.print(f"Total files removed: {total}")
    logger.debug(
        f"{result.report.removed_archives} archive(s), "
        f"{result.report.removed_companions} companion file(s)"
    )


def main():
    main_app()


if __name__ == "__main__":
    main()
