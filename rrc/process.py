"""Thin wrappers around subprocess for the version control executables."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Sequence

from .exceptions import VcsCommandError

logger = logging.getLogger(__name__)


def run_quietly(command: Sequence[str]) -> bool:
    """Return True when the command exits successfully.

    A missing executable counts as a failure.
    """

    cmd = list(command)
    logger.debug("probing with %s", " ".join(cmd))
    try:
        proc = subprocess.run(
            cmd,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except FileNotFoundError:
        logger.debug("%s is not installed", cmd[0])
        return False
    return proc.returncode == 0


def run_streaming(command: Sequence[str], *, cwd: Path | None = None) -> None:
    """Run a command with inherited stdio and raise if it fails."""

    cmd = list(command)
    logger.debug("running %s (cwd=%s)", " ".join(cmd), cwd)
    try:
        proc = subprocess.run(cmd, cwd=str(cwd) if cwd else None, check=False)
    except FileNotFoundError as exc:
        raise VcsCommandError(cmd, 127, cwd=cwd) from exc
    if proc.returncode != 0:
        raise VcsCommandError(cmd, proc.returncode, cwd=cwd)


def spawn_shell(directory: Path) -> bool:
    """Open ``$SHELL`` inside ``directory`` and wait for it to exit.

    Returns False when no shell is configured.
    """

    shell = os.environ.get("SHELL")
    if not shell:
        logger.warning("SHELL is not set; cannot open %s", directory)
        return False
    proc = subprocess.run([shell], cwd=str(directory), check=False)
    return proc.returncode == 0


__all__ = ["run_quietly", "run_streaming", "spawn_shell"]
