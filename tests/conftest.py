"""Shared test fixtures for discipline tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
import yaml

from discipline.store import FileBackend, KeyStore, MemoryBackend

TODAY = "2026-10-17"


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with a profile and an empty store."""
    root = tmp_path / "workspace"
    (root / "store").mkdir(parents=True)

    profile = {"timezone": "UTC"}
    (root / "profile.yaml").write_text(
        yaml.dump(profile, default_flow_style=False), encoding="utf-8"
    )

    os.environ["DISCIPLINE_ROOT"] = str(root)
    yield root
    if "DISCIPLINE_ROOT" in os.environ:
        del os.environ["DISCIPLINE_ROOT"]


@pytest.fixture
def store(workspace: Path) -> KeyStore:
    return KeyStore(FileBackend(workspace / "store"))


@pytest.fixture
def mem_store() -> KeyStore:
    return KeyStore(MemoryBackend())


@pytest.fixture
def today():
    """Fixed clock for day-keyed modules."""
    return lambda: TODAY
