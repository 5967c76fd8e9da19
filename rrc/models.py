"""Dataclasses shared across modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Mapping

if TYPE_CHECKING:  # pragma: no cover
    from .vcs import VcsBackend


@dataclass(frozen=True)
class LocalRepository:
    """A working directory discovered under one of the configured roots."""

    path: Path
    relative_path: str
    backend: VcsBackend

    def __str__(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class RemoteLocator:
    """Where a remote lives and where its clone belongs on disk.

    This is everything a backend needs to clone or update a repository.
    ``remote_identifier`` is ``None`` for locators built from a repository
    that was found on disk rather than parsed from user input.
    """

    remote_identifier: str | None
    local_path: Path
    host: str | None = None


@dataclass(frozen=True)
class ScpPath:
    """An scp-like address such as ``git@example.com:acme/widget.git``."""

    user: str
    host: str
    path: str

    def __str__(self) -> str:
        return f"{self.user}@{self.host}:{self.path}.git"


@dataclass(frozen=True)
class ProfileConfig:
    """A named root directory plus per-host root overrides."""

    name: str
    root: str
    hosts: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Config:
    """All profiles loaded for this invocation."""

    profiles: Mapping[str, ProfileConfig]
    source: Path | None = None
