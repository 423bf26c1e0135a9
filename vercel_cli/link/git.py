"""Git remote discovery for repository linking."""

from __future__ import annotations

import re
import shutil
import subprocess  # nosec B404
from pathlib import Path

from vercel_cli.logging_utils import get_logger

LOGGER = get_logger()

_REMOTE_URL_KEY = re.compile(r"^remote\.(?P<name>.+)\.url$")


def get_remote_urls(git_config_path: Path) -> dict[str, str] | None:
    """Return ``{remote_name: url}`` read from a Git config file.

    Returns ``None`` when git is unavailable or the file cannot be read.
    """
    if not git_config_path.is_file():
        LOGGER.debug("Git config not found at %s", git_config_path)
        return None
    git_path = shutil.which("git")
    if git_path is None:
        LOGGER.debug("git executable not found on PATH.")
        return None
    completed = subprocess.run(  # nosec B603
        [git_path, "config", "--file", str(git_config_path), "--get-regexp", r"^remote\..*\.url$"],
        check=False,
        text=True,
        capture_output=True,
    )
    # Exit status 1 means no remote is configured.
    if completed.returncode not in {0, 1}:
        LOGGER.debug(
            "Failed to read Git remotes",
            extra={"path": str(git_config_path), "stderr": completed.stderr.strip()},
        )
        return None
    return parse_remote_urls(completed.stdout)


def parse_remote_urls(output: str) -> dict[str, str]:
    """Parse ``git config --get-regexp`` output into remote URLs."""
    remotes: dict[str, str] = {}
    for line in output.splitlines():
        key, _, value = line.strip().partition(" ")
        match = _REMOTE_URL_KEY.match(key)
        if match is None or not value.strip():
            continue
        remotes.setdefault(match.group("name"), value.strip())
    return remotes
