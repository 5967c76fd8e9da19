"""Dispatch between the supported version control backends."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from . import git, hg
from .exceptions import BackendDetectionError
from .models import RemoteLocator

logger = logging.getLogger(__name__)


class VcsBackend(Enum):
    """The closed set of version control systems rrc knows how to drive."""

    GIT = "git"
    HG = "hg"

    @property
    def marker(self) -> str:
        return _MODULES[self].MARKER

    def clone(self, locator: RemoteLocator) -> None:
        _MODULES[self].clone(locator)

    def update(self, locator: RemoteLocator) -> None:
        _MODULES[self].pull(locator)


# Detection order matters: git wins over Mercurial.
_MODULES = {
    VcsBackend.GIT: git,
    VcsBackend.HG: hg,
}

MARKERS = {module.MARKER: backend for backend, module in _MODULES.items()}


def detect_from_marker(name: str) -> VcsBackend | None:
    return MARKERS.get(name)


def detect_in_directory(path: Path) -> VcsBackend | None:
    """Return the backend whose marker directory sits directly inside ``path``."""

    for marker, backend in MARKERS.items():
        if (path / marker).is_dir():
            return backend
    return None


def detect_from_remote(identifier: str) -> VcsBackend:
    """Probe each backend in turn; the first that recognises the remote wins."""

    for backend, module in _MODULES.items():
        if module.probe(identifier):
            logger.debug("%s detected as %s", identifier, backend.value)
            return backend
    raise BackendDetectionError(f"failed to detect a vcs backend for {identifier}")


__all__ = [
    "VcsBackend",
    "MARKERS",
    "detect_from_marker",
    "detect_in_directory",
    "detect_from_remote",
]
