"""Directory walk and per-file action dispatch.

Walks a tree depth-first in lexicographic order, filters each entry
and applies the configured actions in a fixed precedence. The first
error from the walk or from a handler aborts the whole run; actions
already applied are not rolled back.
"""

import logging
import os
import stat
from collections import Counter
from collections.abc import Callable, Iterable, Iterator
from functools import partial
from pathlib import Path
from typing import TextIO

from filesweep.sweep.actions import AuditLog, archive_file, delete_file, list_file
from filesweep.sweep.filters import extension_of, is_excluded
from filesweep.sweep.models import (
    ActionKind,
    FileEntry,
    SweepConfig,
    SweepSummary,
    TraversalError,
)

logger = logging.getLogger(__name__)


def walk(root: str | Path, skip: Iterable[str | Path] = ()) -> Iterator[FileEntry]:
    """Yield every entry under root, the root itself first.

    Each directory's entries are visited in sorted name order, and a
    subdirectory is fully visited before its next sibling. Entries are
    stat'ed without following symlinks. Directories in ``skip`` are
    yielded but not descended into.

    Args:
        root: Directory (or file) to start from.
        skip: Directories not to descend into.

    Yields:
        FileEntry for each visited path.

    Raises:
        TraversalError: If an entry cannot be stat'ed or a directory listed.
    """
    skip_dirs = {os.path.abspath(p) for p in skip}
    pending: list[Iterator[str]] = [iter([os.fspath(root)])]

    while pending:
        path = next(pending[-1], None)
        if path is None:
            pending.pop()
            continue

        entry = _stat_entry(path)
        yield entry

        if not entry.is_dir:
            continue
        if os.path.abspath(path) in skip_dirs:
            logger.debug("Not descending into %s", path)
            continue
        pending.append(iter(_list_dir(path)))


def _stat_entry(path: str) -> FileEntry:
    """Build a FileEntry from lstat."""
    try:
        st = os.lstat(path)
    except OSError as e:
        raise TraversalError(f"Cannot access {path}: {e}") from e

    return FileEntry(
        path=path,
        is_dir=stat.S_ISDIR(st.st_mode),
        size=st.st_size,
        extension=extension_of(path),
    )


def _list_dir(path: str) -> list[str]:
    """Return the sorted child paths of a directory."""
    try:
        names = sorted(os.listdir(path))
    except OSError as e:
        raise TraversalError(f"Cannot read directory {path}: {e}") from e
    return [os.path.join(path, name) for name in names]


def plan_actions(config: SweepConfig) -> tuple[ActionKind, ...]:
    """Return the actions applied to every matching file, in order.

    Listing alone short-circuits everything else. Archiving runs before
    deleting. When delete is enabled listing never runs, even if it was
    requested. When neither listing nor deleting applies, the path is
    listed as the default observable behaviour.

    Args:
        config: Run configuration.

    Returns:
        Ordered tuple of actions.
    """
    if config.list_enabled and not config.delete_enabled and not config.archive_enabled:
        return (ActionKind.LIST,)

    actions: list[ActionKind] = []
    if config.archive_enabled:
        actions.append(ActionKind.ARCHIVE)
    if config.delete_enabled:
        actions.append(ActionKind.DELETE)
    else:
        actions.append(ActionKind.LIST)
    return tuple(actions)


class Sweeper:
    """Runs one sweep over a directory tree.

    Args:
        config: Run configuration.
        out: Sink receiving listed paths.
        audit: Sink receiving delete audit records. Defaults to ``out``.
    """

    def __init__(self, config: SweepConfig, out: TextIO, audit: TextIO | None = None) -> None:
        self._config = config
        self._out = out
        self._audit = AuditLog(audit if audit is not None else out)
        self._actions = plan_actions(config)
        self._handlers: dict[ActionKind, Callable[[str, FileEntry], None]] = {
            ActionKind.LIST: self._list,
            ActionKind.DELETE: self._delete,
        }
        if config.archive_root is not None:
            self._handlers[ActionKind.ARCHIVE] = partial(self._archive, config.archive_root)

    @property
    def actions(self) -> tuple[ActionKind, ...]:
        """Actions applied to each matching file, in order."""
        return self._actions

    def run(self, root: str | Path) -> SweepSummary:
        """Walk root and apply the configured actions to matching files.

        Args:
            root: Traversal root.

        Returns:
            SweepSummary with the counts of this run.

        Raises:
            TraversalError: If the walk fails.
            ActionError: If a handler fails.
        """
        root = os.fspath(root)
        skip = [self._config.archive_root] if self._config.archive_root is not None else []
        logger.debug("Sweeping %s with actions %s", root, [a.value for a in self._actions])

        visited = 0
        matched = 0
        bytes_matched = 0
        applied: Counter[ActionKind] = Counter()

        for entry in walk(root, skip=skip):
            visited += 1
            if is_excluded(entry, self._config):
                continue

            matched += 1
            bytes_matched += entry.size
            for action in self._actions:
                self._handlers[action](root, entry)
                applied[action] += 1

        return SweepSummary(
            visited=visited,
            matched=matched,
            listed=applied[ActionKind.LIST],
            archived=applied[ActionKind.ARCHIVE],
            deleted=applied[ActionKind.DELETE],
            bytes_matched=bytes_matched,
        )

    def _list(self, root: str, entry: FileEntry) -> None:
        list_file(entry.path, self._out)

    def _archive(self, archive_root: Path, root: str, entry: FileEntry) -> None:
        archive_file(archive_root, root, entry.path)

    def _delete(self, root: str, entry: FileEntry) -> None:
        delete_file(entry.path, self._audit)


def run_sweep(
    root: str | Path,
    out: TextIO,
    config: SweepConfig,
    audit: TextIO | None = None,
) -> SweepSummary:
    """Run a single sweep. See Sweeper.run."""
    return Sweeper(config, out, audit).run(root)
