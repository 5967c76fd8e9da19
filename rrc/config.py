"""Load profiles from the TOML config file and the environment."""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from .exceptions import ConfigError
from .fs import expand_home
from .models import Config, ProfileConfig

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "default"
ROOT_ENV = "RRC_ROOT"
CONFIG_ENV = "RRC_CONFIG"


def default_root() -> str:
    raw = os.environ.get(ROOT_ENV)
    if raw:
        return raw
    return str(Path.home() / "repos")


def default_config_path() -> Path:
    raw = os.environ.get(CONFIG_ENV)
    if raw:
        return Path(raw)
    return Path.home() / "rrc.toml"


def default_config() -> Config:
    profile = ProfileConfig(name=DEFAULT_PROFILE, root=default_root())
    return Config(profiles={DEFAULT_PROFILE: profile})


def load_config(path: Path | None = None) -> Config:
    """Read the config file, falling back to the implicit default profile."""

    config_path = expand_home(path or default_config_path())
    if not config_path.exists():
        logger.debug("no config at %s, using the default profile", config_path)
        return default_config()
    try:
        with config_path.open("rb") as fh:
            data = tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"failed to parse toml. path: {config_path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"failed to read config. path: {config_path}: {exc}") from exc
    profiles = {name: _parse_profile(name, raw, config_path) for name, raw in data.items()}
    logger.debug("loaded profiles %s from %s", sorted(profiles), config_path)
    return Config(profiles=profiles, source=config_path)


def _parse_profile(name: str, raw: Any, source: Path) -> ProfileConfig:
    if not isinstance(raw, dict):
        raise ConfigError(f"profile '{name}' in {source} must be a table")
    root = raw.get("root", default_root())
    if not isinstance(root, str) or not root:
        raise ConfigError(f"profile '{name}' in {source} has an invalid root")
    hosts = raw.get("hosts", {})
    if not isinstance(hosts, dict):
        raise ConfigError(f"profile '{name}' in {source}: hosts must be a table")
    for host, host_root in hosts.items():
        if not isinstance(host_root, str) or not host_root:
            raise ConfigError(f"profile '{name}' in {source}: invalid root for host '{host}'")
    return ProfileConfig(name=name, root=root, hosts=dict(hosts))


def get_profile(config: Config, name: str | None) -> ProfileConfig:
    profile_name = name or DEFAULT_PROFILE
    try:
        return config.profiles[profile_name]
    except KeyError as exc:
        raise ConfigError(f"profile '{profile_name}' not found") from exc


def profile_roots(profile: ProfileConfig) -> list[Path]:
    """The profile root plus every host override root that exists yet.

    Override roots are created by their first clone, so a missing one is
    skipped rather than treated as a broken root.
    """

    roots = {expand_home(profile.root)}
    for raw in profile.hosts.values():
        root = expand_home(raw)
        if root.is_dir():
            roots.add(root)
        else:
            logger.debug("skipping host root %s, it does not exist yet", root)
    return sorted(roots)


def configured_roots(config: Config) -> list[Path]:
    """Every distinct root across all profiles, host overrides included."""

    roots: set[Path] = set()
    for profile in config.profiles.values():
        roots.update(profile_roots(profile))
    return sorted(roots)


__all__ = [
    "DEFAULT_PROFILE",
    "load_config",
    "default_config",
    "default_root",
    "default_config_path",
    "get_profile",
    "profile_roots",
    "configured_roots",
]
