"""File filter predicate.

Decides whether a walked entry is excluded from all actions based on
its directory flag, extension and size.
"""

import os

from filesweep.sweep.models import FileEntry, SweepConfig


def extension_of(path: str) -> str:
    """Return the extension of the final path segment.

    The extension starts at the last "." of the final segment and
    includes it. A segment without a "." has no extension.

    Args:
        path: Filesystem path.

    Returns:
        Extension including the leading ".", or an empty string.
    """
    name = os.path.basename(path)
    index = name.rfind(".")
    if index == -1:
        return ""
    return name[index:]


def should_exclude(
    path: str,
    extension: str,
    size: int,
    is_dir: bool,
    extension_filter: str,
    min_size: int,
) -> bool:
    """Decide whether an entry is filtered out.

    Directories are always excluded and short-circuit the other checks.
    An extension filter must match exactly (case-sensitive). Files
    strictly smaller than a positive ``min_size`` are excluded.

    Args:
        path: Entry path. Not consulted by the current checks.
        extension: Entry extension including its leading ".".
        size: Entry size in bytes.
        is_dir: Whether the entry is a directory.
        extension_filter: Extension to match; empty matches any.
        min_size: Minimum size in bytes; 0 disables the check.

    Returns:
        True if the entry must be skipped.
    """
    if is_dir:
        return True

    if extension_filter and extension != extension_filter:
        return True

    return min_size > 0 and size < min_size


def is_excluded(entry: FileEntry, config: SweepConfig) -> bool:
    """Apply should_exclude to a walked entry using the run thresholds."""
    return should_exclude(
        entry.path,
        entry.extension,
        entry.size,
        entry.is_dir,
        config.extension_filter,
        config.min_size,
    )
