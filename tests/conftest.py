"""Shared test fixtures and configuration for datepipe tests."""

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Tuple

import pytest
from dateutil import tz

from datepipe.core.config import Config
from datepipe.core.pipe import DatePipe

# CLDR data separates the time from the day period with narrow or
# non-breaking spaces depending on the release
_SPACES = {"\u202f": " ", "\u00a0": " "}


def squash_spaces(text: str) -> str:
    """Replace CLDR special spaces with plain spaces."""
    for special, plain in _SPACES.items():
        text = text.replace(special, plain)
    return text


class RecordingRenderer:
    """Renderer double that records its calls and echoes the pattern."""

    def __init__(self) -> None:
        self.calls: List[Tuple[datetime, str, str]] = []

    def render(self, time: datetime, locale_id: str, pattern: str) -> str:
        self.calls.append((time, locale_id, pattern))
        return f"{pattern}@{time.isoformat()}"


@pytest.fixture(autouse=True)
def restore_package_logger(monkeypatch):
    """Undo handlers and levels the CLI installs on the package logger."""
    logger = logging.getLogger("datepipe")
    handlers, level = logger.handlers[:], logger.level
    monkeypatch.setattr("datepipe.utils.logging._cli_handler", None)
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def squash():
    return squash_spaces


@pytest.fixture
def sample_datetime() -> datetime:
    """2015-06-15 21:43:11, local wall-clock time."""
    return datetime(2015, 6, 15, 21, 43, 11)


@pytest.fixture
def en_pipe() -> DatePipe:
    return DatePipe("en-US")


@pytest.fixture
def recorder() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def recording_pipe(recorder: RecordingRenderer) -> DatePipe:
    return DatePipe("en-US", renderer=recorder)


@pytest.fixture
def fixed_local_zone(monkeypatch):
    """Pin the local timezone used by the normalizer to a given UTC offset."""

    def pin(hours: float):
        zone = tz.tzoffset("TEST", int(hours * 3600))
        monkeypatch.setattr("datepipe.core.normalizer.local_timezone", lambda: zone)
        return zone

    return pin


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch) -> Path:
    """Keep system, user and project configuration out of the test."""
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    for name in ("LC_ALL", "LC_TIME", "LANG"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(Config, "_get_system_config_paths", lambda self: [])
    monkeypatch.chdir(work)
    return work


@pytest.fixture
def sample_config_content() -> str:
    """Sample datepipe configuration content."""
    return """[core]
    locale = de-DE
    format = shortDate
"""
