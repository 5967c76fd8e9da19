"""Find cloned repositories below a root directory."""

from __future__ import annotations

import logging
import os
import stat
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Iterable

from .exceptions import DiscoveryError
from .models import LocalRepository
from .vcs import MARKERS, VcsBackend, detect_from_marker

logger = logging.getLogger(__name__)


def discover(root: str | Path) -> list[LocalRepository]:
    """Return every repository below ``root``, sorted by relative path.

    Each top-level directory is walked in its own thread. Any I/O error
    fails the whole call; no partial inventory is returned.
    """

    try:
        root_path = Path(root).resolve(strict=True)
        top_level = _subdirectories(root_path)
    except OSError as exc:
        raise DiscoveryError(root, str(exc)) from exc

    if not top_level:
        return []

    logger.debug("walking %d top-level directories under %s", len(top_level), root_path)
    found: list[LocalRepository] = []
    failure: BaseException | None = None
    with ThreadPoolExecutor(max_workers=len(top_level)) as executor:
        futures = {executor.submit(_walk, root_path, path, set()): path for path in top_level}
        for future in as_completed(futures):
            try:
                found.extend(future.result())
            except OSError as exc:
                logger.debug("walk of %s failed: %s", futures[future], exc)
                failure = failure or exc
    if failure is not None:
        raise DiscoveryError(root, str(failure)) from failure

    found.sort(key=lambda repo: repo.relative_path)
    logger.debug("found %d repositories under %s", len(found), root_path)
    return found


def discover_roots(roots: Iterable[str | Path]) -> list[LocalRepository]:
    """Concatenate the inventories of ``roots`` in order.

    A repository reachable from two roots (one root nested in another) is
    kept only at its first occurrence.
    """

    repos: list[LocalRepository] = []
    seen: set[Path] = set()
    for root in roots:
        for repo in discover(root):
            if repo.path in seen:
                continue
            seen.add(repo.path)
            repos.append(repo)
    return repos


def _walk(root: Path, directory: Path, seen: set[str]) -> list[LocalRepository]:
    real = os.path.realpath(directory)
    if real in seen:
        return []
    seen.add(real)

    backend = _marker_backend(directory)
    if backend is not None:
        return [_repository(root, directory, backend)]

    repos: list[LocalRepository] = []
    for child in _subdirectories(directory):
        repos.extend(_walk(root, child, seen))
    return repos


def _marker_backend(directory: Path) -> VcsBackend | None:
    for marker, backend in MARKERS.items():
        candidate = directory / marker
        try:
            if stat.S_ISDIR(os.stat(candidate).st_mode):
                return backend
        except FileNotFoundError:
            continue
    return None


def _subdirectories(directory: Path) -> list[Path]:
    """Directories inside ``directory``, following symlinks.

    Marker directories are never returned; a dangling symlink raises.
    """

    result: list[Path] = []
    with os.scandir(directory) as entries:
        for entry in entries:
            if detect_from_marker(entry.name) is not None:
                continue
            if stat.S_ISDIR(os.stat(entry.path).st_mode):
                result.append(Path(entry.path))
    result.sort()
    return result


def _repository(root: Path, directory: Path, backend: VcsBackend) -> LocalRepository:
    relative = directory.relative_to(root).as_posix()
    return LocalRepository(path=directory, relative_path=relative, backend=backend)


__all__ = ["discover", "discover_roots"]
