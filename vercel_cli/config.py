"""Global CLI configuration resolved from options, environment and config files."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from vercel_cli.config_validation import validate_api_url
from vercel_cli.logging_utils import get_logger

LOGGER = get_logger()

VERCEL_CLI_HOME_ENV = "VERCEL_CLI_HOME"
VERCEL_TOKEN_ENV = "VERCEL_TOKEN"
VERCEL_API_URL_ENV = "VERCEL_API_URL"
VERCEL_ORG_ID_ENV = "VERCEL_ORG_ID"

DEFAULT_API_URL = "https://api.vercel.com"
AUTH_FILE_NAME = "auth.json"
CONFIG_FILE_NAME = "config.json"


@dataclass(frozen=True)
class CliConfig:
    """Resolved settings shared by every command of one CLI invocation."""

    token: str | None
    api_url: str
    current_team: str | None
    global_dir: Path

    @classmethod
    def load(
        cls,
        *,
        token: str | None = None,
        api_url: str | None = None,
        scope: str | None = None,
        global_dir: Path | None = None,
    ) -> CliConfig:
        """Resolve configuration with precedence option > environment > files > defaults."""
        resolved_dir = (global_dir or default_global_dir()).expanduser().resolve()
        auth = _read_json_object(resolved_dir / AUTH_FILE_NAME)
        stored = _read_json_object(resolved_dir / CONFIG_FILE_NAME)

        resolved_token = token or os.environ.get(VERCEL_TOKEN_ENV) or _optional_str(
            auth.get("token")
        )
        resolved_url = (
            api_url
            or os.environ.get(VERCEL_API_URL_ENV)
            or _optional_str(stored.get("apiUrl"))
            or DEFAULT_API_URL
        )
        resolved_team = (
            scope
            or os.environ.get(VERCEL_ORG_ID_ENV)
            or _optional_str(stored.get("currentTeam"))
        )
        return cls(
            token=resolved_token,
            api_url=validate_api_url(resolved_url),
            current_team=resolved_team,
            global_dir=resolved_dir,
        )

    def save_current_team(self, team_id: str | None) -> None:
        """Persist the selected team so later invocations reuse the scope."""
        path = self.global_dir / CONFIG_FILE_NAME
        payload = _read_json_object(path)
        if team_id is None:
            payload.pop("currentTeam", None)
        else:
            payload["currentTeam"] = team_id
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        LOGGER.debug("Saved current team", extra={"team_id": team_id, "path": str(path)})


def default_global_dir() -> Path:
    """Return the global config directory, honoring the environment override."""
    env_value = os.environ.get(VERCEL_CLI_HOME_ENV)
    if env_value:
        return Path(env_value)
    return Path.home() / ".vercel-cli"


def _read_json_object(path: Path) -> dict[str, Any]:
    """Read a JSON object file, treating a missing file as empty."""
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    raw = json.loads(content)
    if not isinstance(raw, dict):
        raise ValueError(f"Expected a JSON object in {path}.")
    return raw


def _optional_str(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
