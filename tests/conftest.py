"""
Pytest configuration for binrecord.

Provides fixtures for:
- Settings isolated from the developer's environment
- Codecs for every layout preset
- Root logger restoration (CLI commands reconfigure logging)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Generator

import pytest

from binrecord.codec import RecordCodec, available_layouts, get_layout
from binrecord.config import Settings, get_settings
from binrecord.domain.models import Record


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Generator[None, None, None]:
    """Undo any `configure_logging` call made during a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[Settings, None, None]:
    """
    Point every configurable path at `tmp_path` and reset the settings cache.
    """
    monkeypatch.setenv("CODEC_LAYOUT", "portable")
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("DEMO_DIR", str(tmp_path / "my_demo_directory"))
    monkeypatch.setenv("RESULTS_DIR", str(tmp_path / "results"))
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_JSON", "false")
    monkeypatch.setenv("BENCH_RECORDS", "50")
    monkeypatch.setenv("BENCH_RUNS", "1")
    get_settings.cache_clear()
    try:
        yield get_settings()
    finally:
        get_settings.cache_clear()


@pytest.fixture(params=available_layouts())
def codec(request: pytest.FixtureRequest) -> RecordCodec:
    """A codec for each layout preset."""
    return RecordCodec(get_layout(request.param))


@pytest.fixture
def portable_codec() -> RecordCodec:
    return RecordCodec(get_layout("portable"))


@pytest.fixture
def alice() -> Record:
    return Record(id=101, name="Alice Smith", gpa=3.85)
