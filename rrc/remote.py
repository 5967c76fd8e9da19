"""Map remote identifiers onto their canonical clone location."""

from __future__ import annotations

import logging
import re
from pathlib import Path, PurePosixPath
from urllib.parse import SplitResult, urlsplit

from .exceptions import RemoteParseError
from .fs import expand_home, normalize
from .models import ProfileConfig, RemoteLocator, ScpPath

logger = logging.getLogger(__name__)

_SCP_RE = re.compile(r"^((?:[^@]+@)?)([^:]+):/?(.+)$")

DEFAULT_USER = "git"
DEFAULT_FORGE = "https://github.com/"
DEFAULT_SCHEME = "https://"
VCS_SUFFIX = ".git"
_DOT_SEGMENTS = (".", "..")


def parse_scp_path(raw: str) -> ScpPath | None:
    """Parse ``[user@]host:path``; returns None when ``raw`` has another shape."""

    match = _SCP_RE.match(raw)
    if not match:
        return None
    user = match.group(1).rstrip("@") or DEFAULT_USER
    host = match.group(2)
    path = _strip_suffix(match.group(3))
    if not path:
        return None
    return ScpPath(user=user, host=host, path=path)


def resolve(config: ProfileConfig, default_root: str | Path, raw_identifier: str) -> RemoteLocator:
    """Resolve ``raw_identifier`` to a clone location.

    Absolute URLs are tried first, then scp-like paths, then shorthand
    (``org/repo`` on the default forge or ``host/org/repo`` over https).
    The root is the host override from ``config`` when there is one,
    otherwise ``default_root``.
    """

    raw = raw_identifier.strip()
    if not raw:
        raise RemoteParseError(raw_identifier, "empty repository identifier")

    parts = _split_url(raw)
    if parts is not None:
        locator = _locate_url(config, default_root, raw, parts)
    else:
        scp = parse_scp_path(raw)
        if scp is not None:
            _check_placement(raw, scp.host, scp.path)
            root = expand_home(config.hosts.get(scp.host, default_root))
            locator = RemoteLocator(
                remote_identifier=raw,
                local_path=normalize(root / scp.host / scp.path),
                host=scp.host,
            )
        else:
            expanded = expand_shorthand(raw)
            parts = _split_url(expanded)
            if parts is None:
                raise RemoteParseError(raw_identifier)
            locator = _locate_url(config, default_root, expanded, parts, original=raw_identifier)
    logger.debug("resolved %s to %s", raw_identifier, locator)
    return locator


def expand_shorthand(raw: str) -> str:
    if raw.count("/") == 1:
        return f"{DEFAULT_FORGE}{raw}"
    return f"{DEFAULT_SCHEME}{raw}"


def _split_url(raw: str) -> SplitResult | None:
    try:
        parts = urlsplit(raw)
        host = parts.hostname
    except ValueError:
        return None
    if not parts.scheme or not host:
        return None
    return parts


def _locate_url(
    config: ProfileConfig,
    default_root: str | Path,
    url: str,
    parts: SplitResult,
    *,
    original: str | None = None,
) -> RemoteLocator:
    host = parts.hostname
    url_path = PurePosixPath(parts.path or "/")
    owner = url_path.parent.name
    name = _strip_suffix(url_path.name)
    if not host or not owner or not name:
        raise RemoteParseError(original or url)
    _check_placement(original or url, host, owner, name)
    root = expand_home(config.hosts.get(host, default_root))
    return RemoteLocator(
        remote_identifier=url,
        local_path=normalize(root / host / owner / name),
        host=host,
    )


def _check_placement(identifier: str, host: str, *segments: str) -> None:
    """Reject hosts and paths that would place a clone outside ``root/host``."""

    if "/" in host or host in _DOT_SEGMENTS:
        raise RemoteParseError(identifier, "invalid host in repository identifier")
    for segment in segments:
        if any(part in _DOT_SEGMENTS for part in segment.split("/")):
            raise RemoteParseError(identifier, "relative path segments are not allowed")


def _strip_suffix(path: str) -> str:
    while path.endswith(VCS_SUFFIX):
        path = path[: -len(VCS_SUFFIX)]
    return path


__all__ = ["parse_scp_path", "resolve", "expand_shorthand"]
