"""Sweep domain models.

This module defines the run configuration, the per-entry file record
produced by the walker, the action kinds a sweep can dispatch, and the
exceptions raised by the pipeline.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ActionKind(str, Enum):
    """Action applied to a file that passes the filter.

    Attributes:
        LIST: Print the path to the output sink.
        ARCHIVE: Copy the file into the mirrored archive tree.
        DELETE: Remove the file and record it in the audit log.
    """

    LIST = "list"
    ARCHIVE = "archive"
    DELETE = "delete"


class SweepError(Exception):
    """Base exception for errors that abort a sweep."""


class TraversalError(SweepError):
    """Raised when the walker cannot stat or list an entry."""


class ActionError(SweepError):
    """Raised when an action handler fails for a path.

    Attributes:
        action: The action that failed.
        path: Path the action was applied to.
    """

    def __init__(self, action: ActionKind, path: str, message: str) -> None:
        super().__init__(message)
        self.action = action
        self.path = path


class SweepConfig(BaseModel):
    """Immutable configuration for a single sweep run.

    Attributes:
        extension_filter: Exact extension to match (e.g. ".log"); empty matches any.
        min_size: Minimum file size in bytes; 0 disables the size check.
        list_enabled: List matching files.
        delete_enabled: Delete matching files.
        archive_root: Destination root for archive copies; None disables archiving.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    extension_filter: Annotated[str, Field(description="Extension to match")] = ""
    min_size: Annotated[int, Field(ge=0, description="Minimum file size in bytes")] = 0
    list_enabled: Annotated[bool, Field(description="List matching files")] = False
    delete_enabled: Annotated[bool, Field(description="Delete matching files")] = False
    archive_root: Annotated[Path | None, Field(description="Archive destination root")] = None

    @field_validator("archive_root", mode="before")
    @classmethod
    def empty_archive_disables(cls, v: object) -> object:
        """Treat an empty archive path as archiving disabled."""
        if v == "":
            return None
        return v

    @property
    def archive_enabled(self) -> bool:
        """Whether archive copies are configured."""
        return self.archive_root is not None


@dataclass(frozen=True, slots=True)
class FileEntry:
    """A single entry produced by the directory walk.

    Attributes:
        path: Path as produced by the walk (joined onto the root).
        is_dir: Whether the entry is a directory.
        size: Size in bytes as reported by lstat.
        extension: Suffix of the final segment from its last ".", or "".
    """

    path: str
    is_dir: bool
    size: int
    extension: str


@dataclass(frozen=True, slots=True)
class SweepSummary:
    """Counters collected over one sweep run.

    Attributes:
        visited: Entries yielded by the walk, directories included.
        matched: Entries that passed the filter.
        listed: Paths written by the list action.
        archived: Files copied into the archive tree.
        deleted: Files removed.
        bytes_matched: Total size of matched files.
    """

    visited: int = 0
    matched: int = 0
    listed: int = 0
    archived: int = 0
    deleted: int = 0
    bytes_matched: int = 0
