"""Custom error hierarchy for rrc."""

from __future__ import annotations

from pathlib import Path


class RrcError(RuntimeError):
    """Base error for all custom exceptions."""


class ConfigError(RrcError):
    """Raised when the configuration file or a requested profile is invalid."""


class DiscoveryError(RrcError):
    """Raised when a repository root cannot be walked."""

    def __init__(self, root: Path | str, reason: str):
        self.root = Path(root)
        super().__init__(f"failed to discover repositories under {root}: {reason}")


class RemoteParseError(RrcError):
    """Raised when a remote identifier matches none of the accepted shapes."""

    def __init__(self, identifier: str, reason: str = "unrecognized import path"):
        self.identifier = identifier
        super().__init__(f"{reason}: '{identifier}'")


class BackendDetectionError(RrcError):
    """Raised when no version control backend claims a remote or a directory."""


class VcsCommandError(RrcError):
    """Raised when a version control executable exits with a failure."""

    def __init__(self, command: list[str], returncode: int, *, cwd: Path | None = None):
        self.command = command
        self.returncode = returncode
        self.cwd = cwd
        message = f"command failed (exit {returncode}): {' '.join(command)}"
        if cwd is not None:
            message = f"{message} (in {cwd})"
        super().__init__(message)


class ValidationError(RrcError):
    """Raised when user input is invalid."""


class UserAbort(RrcError):
    """Raised when the user cancels an interactive flow."""


__all__ = [
    "RrcError",
    "ConfigError",
    "DiscoveryError",
    "RemoteParseError",
    "BackendDetectionError",
    "VcsCommandError",
    "ValidationError",
    "UserAbort",
]
