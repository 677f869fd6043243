"""
Removal of archives that lost resolution.
"""

from userlib_cleaner.cleanup.executor import CleanupExecutor

__all__ = ["CleanupExecutor"]
