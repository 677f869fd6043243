"""
Utility functions shared across modules: logging setup, path helpers.
"""

import logging
import os

from userlib_cleaner.core.settings import LOG_FORMAT


def configure_logging(verbose: bool = False) -> int:
    """
    Configure root logging for a CLI run and return the level in effect.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
    return level


def strip_extension(name: str) -> str:
    """Remove the last extension from a file name ("junit-4.11.jar" -> "junit-4.11")."""
    return os.path.splitext(name)[0]
