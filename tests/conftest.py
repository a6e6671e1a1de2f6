"""Shared test fixtures for Linux Toolbox tests."""

from __future__ import annotations

import stat
from contextlib import contextmanager
from pathlib import Path

import pytest

from linux_toolbox.activity import ActivityLog
from linux_toolbox.catalog import Catalog, Category, Program
from linux_toolbox.preferences import PreferenceStore


def _catalog(layout: dict[str, dict[str, str]], base: Path = Path("/scripts")) -> Catalog:
    return Catalog(
        [
            Category(name, [Program(program, base / script) for program, script in programs.items()])
            for name, programs in layout.items()
        ]
    )


@pytest.fixture
def make_catalog():
    """Factory fixture: build a Catalog from {category: {program: script}}."""
    return _catalog


@pytest.fixture
def sample_catalog() -> Catalog:
    """The Network/Disk catalog used throughout the scenarios."""
    return _catalog(
        {
            "Network": {"ping": "ping.sh"},
            "Disk": {"cleanup": "cleanup.sh", "check": "check.sh"},
        }
    )


@pytest.fixture
def write_script(tmp_path):
    """Factory fixture: write a shell script, executable unless told otherwise."""

    def _write(name: str = "hello.sh", executable: bool = True, body: str = "echo hello\n") -> Path:
        path = tmp_path / name
        path.write_text("#!/bin/sh\n" + body)
        mode = stat.S_IRUSR | stat.S_IWUSR
        if executable:
            mode |= stat.S_IXUSR
        path.chmod(mode)
        return path

    return _write


class FakeTerminal:
    """Records display release/reacquire instead of touching the real terminal."""

    def __init__(self):
        self.events: list[str] = []

    @contextmanager
    def suspend(self):
        self.events.append("release")
        try:
            yield
        finally:
            self.events.append("reacquire")


@pytest.fixture
def fake_terminal() -> FakeTerminal:
    return FakeTerminal()


@pytest.fixture
def preferences(tmp_path) -> PreferenceStore:
    return PreferenceStore(tmp_path / "state" / "theme.json")


@pytest.fixture
def activity(tmp_path):
    log = ActivityLog(tmp_path / "state" / "linuxtoolbox.log")
    yield log
    log.close()
