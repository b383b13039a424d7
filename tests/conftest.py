"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config_home(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory so user settings never leak in."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Undo the handlers and propagation the CLI installs on the filesweep logger."""
    yield
    package_logger = logging.getLogger("filesweep")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def testdata(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Build the sample tree and chdir next to it.

    Layout (relative to the working directory)::

        testdata/dir.log          11 bytes
        testdata/dir2/script.sh
    """
    root = tmp_path / "testdata"
    (root / "dir2").mkdir(parents=True)
    (root / "dir.log").write_text("hello world")
    (root / "dir2" / "script.sh").write_text("#!/bin/sh\necho hello\n")
    monkeypatch.chdir(tmp_path)
    return Path("testdata")


@pytest.fixture
def make_files() -> Callable[[Path, dict[str, int]], list[Path]]:
    """Return a helper creating ``count`` files per extension in a directory."""

    def _make(directory: Path, files: dict[str, int]) -> list[Path]:
        directory.mkdir(parents=True, exist_ok=True)
        created: list[Path] = []
        for ext, count in files.items():
            for i in range(count):
                path = directory / f"file{i}{ext}"
                path.write_text("dummy")
                created.append(path)
        return created

    return _make
