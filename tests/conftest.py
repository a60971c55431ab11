"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def base_uri() -> str:
    """Base URI used by conversion tests."""
    return "http://myrdf.us/mta/mnr"


@pytest.fixture(autouse=True)
def _clear_conversion_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep GTFS_RDF_* variables from the host out of tests."""
    for name in (
        "GTFS_RDF_BASE_URI",
        "GTFS_RDF_INPUT_DIR",
        "GTFS_RDF_LICENSE",
        "GTFS_RDF_SOURCE",
        "GTFS_RDF_SPLIT_SIZE",
        "GTFS_RDF_OUTPUT",
    ):
        monkeypatch.delenv(name, raising=False)
