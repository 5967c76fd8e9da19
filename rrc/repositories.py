"""High-level orchestration for clone, update and local repository commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from . import locator, ranker, remote, vcs
from .config import configured_roots, get_profile, profile_roots
from .exceptions import RrcError
from .fs import ensure_directory, remove_tree
from .models import Config, LocalRepository, ProfileConfig, RemoteLocator
from .process import run_streaming

logger = logging.getLogger(__name__)


@dataclass
class RepositoryService:
    config: Config
    profile_name: str | None = None

    @property
    def profile(self) -> ProfileConfig:
        return get_profile(self.config, self.profile_name)

    def roots(self) -> list[Path]:
        if self.profile_name:
            return profile_roots(self.profile)
        return configured_roots(self.config)

    def inventory(self) -> list[LocalRepository]:
        return locator.discover_roots(self.roots())

    def search(self, query: str) -> list[LocalRepository]:
        return ranker.rank(self.inventory(), query)

    def locate(self, identifier: str) -> RemoteLocator:
        profile = self.profile
        return remote.resolve(profile, profile.root, identifier)

    def get(self, identifier: str) -> RemoteLocator:
        """Clone ``identifier`` into its canonical location.

        A destination created here is removed again when the clone fails.
        """

        target = self.locate(identifier)
        backend = vcs.detect_from_remote(target.remote_identifier or identifier)
        created = not target.local_path.exists()
        ensure_directory(target.local_path)
        try:
            backend.clone(target)
        except RrcError:
            if created:
                logger.debug("clone failed, removing %s", target.local_path)
                remove_tree(target.local_path)
            raise
        return target

    def update_or_get(self, identifier: str) -> RemoteLocator:
        """Pull the first existing clone of ``identifier``; clone it when there is none."""

        for profile in self._candidate_profiles():
            target = remote.resolve(profile, profile.root, identifier)
            if self.update_clone(target):
                return target
        return self.get(identifier)

    def update_clone(self, target: RemoteLocator) -> bool:
        """Pull ``target`` if it holds a clone; False when there is nothing to pull."""

        backend = vcs.detect_in_directory(target.local_path)
        if backend is None:
            return False
        logger.debug("updating %s with %s", target.local_path, backend.value)
        backend.update(target)
        return True

    def update_repository(self, repo: LocalRepository) -> None:
        repo.backend.update(RemoteLocator(remote_identifier=None, local_path=repo.path))

    def remove_repository(self, repo: LocalRepository) -> None:
        logger.debug("removing %s", repo.path)
        remove_tree(repo.path)

    def run_in(self, repo: LocalRepository, command: Sequence[str]) -> None:
        run_streaming(command, cwd=repo.path)

    def _candidate_profiles(self) -> list[ProfileConfig]:
        if self.profile_name:
            return [self.profile]
        return [self.config.profiles[name] for name in sorted(self.config.profiles)]


__all__ = ["RepositoryService"]
