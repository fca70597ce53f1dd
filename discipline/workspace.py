"""Workspace root, profile, timezone and path helpers."""

from __future__ import annotations

import os
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from discipline.fileio import read_yaml
from discipline.models import Profile


def workspace_root() -> Path:
    """Get the workspace root directory (contains profile.yaml and store/)."""
    return Path(
        os.environ.get("DISCIPLINE_ROOT", str(Path.home() / "discipline"))
    ).expanduser().resolve()


def profile_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "profile.yaml"


def store_dir(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "store"


def load_profile(root: Path | None = None) -> Profile:
    """Load profile.yaml, falling back to defaults when missing or invalid."""
    return Profile.from_dict(read_yaml(profile_path(root)))


def get_user_timezone(root: Path | None = None) -> ZoneInfo:
    """Reference timezone for day keys, from profile.yaml, defaulting to UTC."""
    profile = load_profile(root)
    try:
        return ZoneInfo(profile.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo("UTC")
