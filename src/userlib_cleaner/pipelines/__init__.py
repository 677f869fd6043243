"""
End-to-end cleanup runs.
"""

from userlib_cleaner.pipelines.cleanup_pipeline import (
    CleanupOptions,
    list_target_directory,
    run_cleanup,
)

__all__ = ["CleanupOptions", "list_target_directory", "run_cleanup"]
