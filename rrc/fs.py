"""Filesystem helpers for rrc."""

from __future__ import annotations

import os
import shutil
from pathlib import Path


def expand_home(path: str | Path) -> Path:
    """Resolve a leading ``~`` against the current user's home directory.

    Only the bare ``~`` and ``~/...`` forms are expanded; ``~other`` is
    returned untouched.
    """

    raw = str(path)
    if raw != "~" and not raw.startswith("~/"):
        return Path(raw)
    home = Path.home()
    if raw == "~":
        return home
    rest = raw[2:]
    if home == Path("/"):
        return Path("/") / rest
    return home / rest


def normalize(path: str | Path) -> Path:
    return Path(os.path.normpath(str(path)))


def ensure_directory(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def remove_tree(path: Path) -> None:
    shutil.rmtree(path)
