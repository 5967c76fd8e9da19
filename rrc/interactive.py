"""Interactive prompt helpers built on InquirerPy."""

from __future__ import annotations

import sys
from typing import Sequence

from InquirerPy import inquirer
from InquirerPy.base.control import Choice

from .exceptions import UserAbort, ValidationError
from .models import LocalRepository


def _ensure_tty() -> None:
    if not sys.stdin.isatty():
        raise ValidationError(
            "Interactive mode requires a TTY. Pass --yes or a more specific query to run non-interactively."
        )


def confirm(message: str, default: bool = False) -> bool:
    _ensure_tty()
    try:
        return bool(inquirer.confirm(message=message, default=default).execute())
    except KeyboardInterrupt as exc:  # pragma: no cover - user cancel
        raise UserAbort("User cancelled the prompt.") from exc


def select_repository(repos: Sequence[LocalRepository]) -> LocalRepository:
    """Let the user fuzzy-pick one of ``repos``."""

    if not repos:
        raise UserAbort("No repositories available for selection.")
    _ensure_tty()
    choices, lookup = build_repository_choices(repos)
    try:
        selection = inquirer.fuzzy(message="Select repository", choices=choices).execute()
    except KeyboardInterrupt as exc:  # pragma: no cover - user cancel
        raise UserAbort("User cancelled the prompt.") from exc
    try:
        return lookup[str(selection)]
    except KeyError as exc:
        raise ValidationError("Selected repository could not be resolved.") from exc


def build_repository_choices(
    repos: Sequence[LocalRepository],
) -> tuple[list[Choice], dict[str, LocalRepository]]:
    """Return the choice list used for prompts plus a lookup keyed by path."""

    lookup: dict[str, LocalRepository] = {}
    choices: list[Choice] = []
    for repo in repos:
        key = str(repo.path)
        if key in lookup:
            continue
        lookup[key] = repo
        choices.append(Choice(value=key, name=f"{repo.relative_path} · {repo.backend.value}"))
    return choices, lookup
