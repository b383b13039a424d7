"""Unit tests for sweep models."""

from pathlib import Path

import pytest
from filesweep.sweep.models import (
    ActionError,
    ActionKind,
    FileEntry,
    SweepConfig,
    SweepError,
    SweepSummary,
    TraversalError,
)
from pydantic import ValidationError


class TestSweepConfig:
    """Tests for SweepConfig."""

    def test_defaults(self) -> None:
        """Default config has no filters and no actions."""
        config = SweepConfig()
        assert config.extension_filter == ""
        assert config.min_size == 0
        assert config.list_enabled is False
        assert config.delete_enabled is False
        assert config.archive_root is None
        assert config.archive_enabled is False

    def test_archive_root_coerced_to_path(self) -> None:
        """A string archive root becomes a Path."""
        config = SweepConfig(archive_root="/backup")
        assert config.archive_root == Path("/backup")
        assert config.archive_enabled is True

    def test_empty_archive_root_disables_archiving(self) -> None:
        """An empty archive root means archiving is off."""
        config = SweepConfig(archive_root="")
        assert config.archive_root is None
        assert config.archive_enabled is False

    def test_negative_min_size_rejected(self) -> None:
        """min_size must be zero or positive."""
        with pytest.raises(ValidationError):
            SweepConfig(min_size=-1)

    def test_extra_fields_forbidden(self) -> None:
        """Unknown fields are rejected."""
        with pytest.raises(ValidationError):
            SweepConfig(unknown=True)  # type: ignore[call-arg]

    def test_frozen(self) -> None:
        """SweepConfig is immutable."""
        config = SweepConfig()
        with pytest.raises(ValidationError):
            config.list_enabled = True  # type: ignore[misc]


class TestFileEntry:
    """Tests for FileEntry."""

    def test_frozen(self) -> None:
        """FileEntry is immutable."""
        entry = FileEntry(path="a.log", is_dir=False, size=1, extension=".log")
        with pytest.raises(AttributeError):
            entry.size = 2  # type: ignore[misc]


class TestErrors:
    """Tests for the sweep exception hierarchy."""

    def test_hierarchy(self) -> None:
        """Traversal and action errors share the SweepError base."""
        assert issubclass(TraversalError, SweepError)
        assert issubclass(ActionError, SweepError)

    def test_action_error_attributes(self) -> None:
        """ActionError keeps the failed action and path."""
        error = ActionError(ActionKind.DELETE, "a.log", "Cannot delete a.log")
        assert error.action == ActionKind.DELETE
        assert error.path == "a.log"
        assert str(error) == "Cannot delete a.log"


def test_summary_defaults() -> None:
    """SweepSummary counters start at zero."""
    summary = SweepSummary()
    assert summary.visited == 0
    assert summary.deleted == 0
    assert summary.bytes_matched == 0
