"""Thin wrappers around git CLI commands."""

from __future__ import annotations

from urllib.parse import urlsplit

from .exceptions import ValidationError
from .models import RemoteLocator
from .process import run_quietly, run_streaming

MARKER = ".git"
KNOWN_HOSTS = ("github.com", "gitlab.com")


def probe(identifier: str) -> bool:
    """Return True when ``identifier`` looks like a git remote."""

    parts = urlsplit(identifier)
    if parts.scheme and parts.hostname in KNOWN_HOSTS:
        return True
    return run_quietly(["git", "ls-remote", identifier])


def clone(locator: RemoteLocator) -> None:
    if not locator.remote_identifier:
        raise ValidationError(f"No remote to clone into {locator.local_path}")
    run_streaming(["git", "clone", locator.remote_identifier, str(locator.local_path)])


def pull(locator: RemoteLocator) -> None:
    run_streaming(["git", "pull", "--ff-only"], cwd=locator.local_path)
