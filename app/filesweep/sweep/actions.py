"""Action handlers applied to files that pass the filter.

Each handler performs one side effect for a single path and raises
ActionError on failure. Nothing is retried; the caller aborts the run.
"""

import logging
import os
import shutil
from datetime import datetime
from pathlib import Path
from typing import TextIO

from filesweep.sweep.models import ActionError, ActionKind

logger = logging.getLogger(__name__)

# Prefix of every audit record written after a successful delete
AUDIT_PREFIX = "DELETED FILE: "

AUDIT_TIME_FORMAT = "%Y/%m/%d %H:%M:%S"

# Permission mode applied to every archived copy
ARCHIVE_FILE_MODE = 0o644


class AuditLog:
    """Writes one record per deleted file to a text sink.

    Records have the form ``DELETED FILE: 2024/01/15 10:00:00 <path>``.
    The sink is flushed after each record.

    Attributes:
        _sink: Writable text stream receiving the records.
    """

    def __init__(self, sink: TextIO) -> None:
        self._sink = sink

    def record(self, path: str) -> None:
        """Append an audit record for a deleted path."""
        timestamp = datetime.now().strftime(AUDIT_TIME_FORMAT)
        self._sink.write(f"{AUDIT_PREFIX}{timestamp} {path}\n")
        self._sink.flush()


def list_file(path: str, out: TextIO) -> None:
    """Write a path followed by a newline to the output sink.

    Args:
        path: Path to print.
        out: Output sink.

    Raises:
        ActionError: If writing to the sink fails or the sink cannot
            encode the path.
    """
    try:
        out.write(f"{path}\n")
    except (OSError, UnicodeError) as e:
        raise ActionError(ActionKind.LIST, path, f"Cannot write {path}: {e}") from e


def delete_file(path: str, audit: AuditLog) -> None:
    """Remove a file, then record the deletion.

    The audit record is written only once the file is gone, so the
    audit log lists exactly the files that were removed.

    Args:
        path: File to remove.
        audit: Audit log receiving the record.

    Raises:
        ActionError: If the file cannot be removed or the record cannot be written.
    """
    try:
        Path(path).unlink()
    except OSError as e:
        raise ActionError(ActionKind.DELETE, path, f"Cannot delete {path}: {e}") from e

    logger.debug("Deleted %s", path)

    try:
        audit.record(path)
    except (OSError, UnicodeError) as e:
        raise ActionError(
            ActionKind.DELETE, path, f"Deleted {path} but cannot write audit record: {e}"
        ) from e


def archive_file(archive_root: Path, root: str, path: str) -> Path:
    """Copy a file into the archive tree, mirroring its location under root.

    Computes the path relative to the traversal root, joins it onto
    the archive root, creates missing parent directories and copies
    the contents. The destination is created or truncated and its mode
    set to ARCHIVE_FILE_MODE. An interrupted copy may leave a partial
    destination file behind.

    Args:
        archive_root: Destination root of the archive tree.
        root: Traversal root the path was walked from.
        path: File to copy.

    Returns:
        Path of the archived copy.

    Raises:
        ActionError: If the relative path, directories or copy cannot be produced.
    """
    try:
        relative = Path(path).relative_to(root)
    except ValueError as e:
        raise ActionError(
            ActionKind.ARCHIVE, path, f"Cannot archive {path}: not under root {root}"
        ) from e

    dest = archive_root / relative

    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ActionError(
            ActionKind.ARCHIVE, path, f"Cannot create archive directory {dest.parent}: {e}"
        ) from e

    try:
        shutil.copyfile(path, dest)
        os.chmod(dest, ARCHIVE_FILE_MODE)
    except OSError as e:
        raise ActionError(
            ActionKind.ARCHIVE, path, f"Cannot archive {path} to {dest}: {e}"
        ) from e

    logger.debug("Archived %s -> %s", path, dest)
    return dest
