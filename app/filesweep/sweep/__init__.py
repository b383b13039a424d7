"""Directory sweep pipeline.

This module provides the walk, the file filter, and the list, archive
and delete actions applied to matching files.
"""

from filesweep.sweep.actions import AuditLog, archive_file, delete_file, list_file
from filesweep.sweep.filters import extension_of, is_excluded, should_exclude
from filesweep.sweep.models import (
    ActionError,
    ActionKind,
    FileEntry,
    SweepConfig,
    SweepError,
    SweepSummary,
    TraversalError,
)
from filesweep.sweep.walker import Sweeper, plan_actions, run_sweep, walk

__all__ = [
    "ActionError",
    "ActionKind",
    "AuditLog",
    "FileEntry",
    "SweepConfig",
    "SweepError",
    "SweepSummary",
    "Sweeper",
    "TraversalError",
    "archive_file",
    "delete_file",
    "extension_of",
    "is_excluded",
    "list_file",
    "plan_actions",
    "run_sweep",
    "should_exclude",
    "walk",
]
