"""Thin wrappers around Mercurial CLI commands."""

from __future__ import annotations

from .exceptions import ValidationError
from .models import RemoteLocator
from .process import run_quietly, run_streaming

MARKER = ".hg"


def probe(identifier: str) -> bool:
    return run_quietly(["hg", "identify", identifier])


def clone(locator: RemoteLocator) -> None:
    if not locator.remote_identifier:
        raise ValidationError(f"No remote to clone into {locator.local_path}")
    run_streaming(["hg", "clone", locator.remote_identifier, str(locator.local_path)])


def pull(locator: RemoteLocator) -> None:
    run_streaming(["hg", "pull", "--update"], cwd=locator.local_path)
