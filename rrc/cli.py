"""Typer-based CLI for rrc."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, NoReturn, Optional, TypeVar

import typer
from rich.console import Console

from . import __version__
from .config import load_config
from .exceptions import RrcError
from .interactive import confirm, select_repository
from .models import Config, LocalRepository
from .process import spawn_shell
from .repositories import RepositoryService

app = typer.Typer(
    help="Manage local clones of remote repositories",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()

T = TypeVar("T")

PROFILE_HELP = "Select profile"
EXACT_HELP = "Only repositories matching this query"


@dataclass
class AppState:
    config: Config
    verbose: bool = False


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"rrc {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (defaults to $RRC_CONFIG or ~/rrc.toml).",
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the rrc version and exit.",
    ),
) -> None:
    _ = version  # handled via callback
    configure_logging(verbose)
    try:
        config = load_config(config_path)
    except RrcError as err:
        _fail(str(err))
    ctx.obj = AppState(config=config, verbose=verbose)


@app.command(help="Clone remote repositories")
def get(
    ctx: typer.Context,
    identifiers: list[str] = typer.Argument(..., metavar="URL...", help="Source repository url"),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help=PROFILE_HELP),
    update: bool = typer.Option(False, "--update", "-u", help="Update local repository if cloned already"),
    look: bool = typer.Option(False, "--look", "-l", help="Open a shell in the repository afterwards"),
) -> None:
    service = _build_service(ctx, profile)

    def fetch(identifier: str) -> None:
        if update:
            target = service.update_or_get(identifier)
        else:
            target = service.get(identifier)
        console.print(f"[green]{target.local_path}[/green]")
        if look:
            spawn_shell(target.local_path)

    _run_batch(identifiers, fetch, label=str)


@app.command(name="list", help="List local repositories")
def list_(
    ctx: typer.Context,
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help=PROFILE_HELP),
    query: str = typer.Option("", "--exact", "-e", help=EXACT_HELP),
    as_json: bool = typer.Option(False, "--json", help="Output JSON for scripting."),
) -> None:
    repos = _search(ctx, profile, query)
    if as_json:
        data = [
            {
                "path": str(repo.path),
                "relative_path": repo.relative_path,
                "backend": repo.backend.value,
            }
            for repo in repos
        ]
        typer.echo(json.dumps(data, indent=2))
        return
    for repo in repos:
        typer.echo(str(repo.path))


@app.command(help="Update local repositories")
def update(
    ctx: typer.Context,
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help=PROFILE_HELP),
    query: str = typer.Option("", "--exact", "-e", help=EXACT_HELP),
) -> None:
    service = _build_service(ctx, profile)
    repos = _search(ctx, profile, query, service=service)

    def pull(repo: LocalRepository) -> None:
        typer.echo(f"update {repo.path}")
        service.update_repository(repo)
        typer.echo("")

    _run_batch(repos, pull, label=lambda repo: str(repo.path))


@app.command(help="Open a shell in the best matching local repository")
def look(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Repository to look for"),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help=PROFILE_HELP),
    select: bool = typer.Option(False, "--select", help="Pick among all matches interactively."),
) -> None:
    repos = _search(ctx, profile, query)
    if not repos:
        _fail(f"{query} not found")
    try:
        target = select_repository(repos) if select else repos[0]
    except RrcError as err:
        _fail(str(err))
    if not spawn_shell(target.path):
        typer.echo(str(target.path))


@app.command(help="Remove local repositories")
def remove(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Repositories to remove"),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help=PROFILE_HELP),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    service = _build_service(ctx, profile)
    repos = _search(ctx, profile, query, service=service)
    if not repos:
        _fail(f"{query} not found")

    def delete(repo: LocalRepository) -> None:
        if not yes and not confirm(f"Remove {repo.path}?"):
            console.print(f"Skipped {repo.path}")
            return
        service.remove_repository(repo)
        console.print(f"Removed {repo.path}")

    _run_batch(repos, delete, label=lambda repo: str(repo.path))


@app.command(help="Execute a command in each local repository")
def each(
    ctx: typer.Context,
    command: list[str] = typer.Argument(..., metavar="-- COMMAND...", help="Command to run"),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help=PROFILE_HELP),
    query: str = typer.Option("", "--exact", "-e", help=EXACT_HELP),
    dry_run: bool = typer.Option(False, "--dry-run", "-d", help="Print the commands without running them."),
) -> None:
    service = _build_service(ctx, profile)
    repos = _search(ctx, profile, query, service=service)
    rendered = " ".join(command)

    def execute(repo: LocalRepository) -> None:
        if dry_run:
            typer.echo(f"{repo.path}: {rendered}")
            return
        console.print(f"[bold]{repo.path}[/bold]")
        service.run_in(repo, command)

    _run_batch(repos, execute, label=lambda repo: str(repo.path))


def _build_service(ctx: typer.Context, profile: str | None) -> RepositoryService:
    state = ctx.obj
    if not isinstance(state, AppState):  # pragma: no cover
        raise typer.Exit(1)
    return RepositoryService(state.config, profile)


def _search(
    ctx: typer.Context,
    profile: str | None,
    query: str,
    *,
    service: RepositoryService | None = None,
) -> list[LocalRepository]:
    service = service or _build_service(ctx, profile)
    try:
        return service.search(query)
    except RrcError as err:
        _fail(str(err))


def _run_batch(items: Iterable[T], action: Callable[[T], None], *, label: Callable[[T], str]) -> None:
    """Apply ``action`` to every item, reporting failures without stopping."""

    failures = 0
    for item in items:
        try:
            action(item)
        except (RrcError, OSError) as err:
            failures += 1
            typer.secho(f"{label(item)}: {err}", err=True, fg=typer.colors.RED)
    if failures:
        raise typer.Exit(1)


def _fail(message: str, code: int = 1) -> NoReturn:
    typer.secho(message, err=True, fg=typer.colors.RED)
    raise typer.Exit(code)


if __name__ == "__main__":
    app()
