"""Tests for configuration resolution and validation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from vercel_cli.config import DEFAULT_API_URL, CliConfig, default_global_dir
from vercel_cli.config_validation import require_positive_int, validate_api_url


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("VERCEL_CLI_HOME", "VERCEL_TOKEN", "VERCEL_API_URL", "VERCEL_ORG_ID"):
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_files(tmp_path: Path) -> None:
    config = CliConfig.load(global_dir=tmp_path)
    assert config.token is None
    assert config.api_url == DEFAULT_API_URL
    assert config.current_team is None
    assert config.global_dir == tmp_path.resolve()


def test_precedence_option_env_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "auth.json").write_text(json.dumps({"token": "file-token"}), encoding="utf-8")
    (tmp_path / "config.json").write_text(
        json.dumps({"currentTeam": "team_file", "apiUrl": "https://file.example.test/"}),
        encoding="utf-8",
    )
    config = CliConfig.load(global_dir=tmp_path)
    assert config.token == "file-token"
    assert config.current_team == "team_file"
    assert config.api_url == "https://file.example.test"

    monkeypatch.setenv("VERCEL_TOKEN", "env-token")
    monkeypatch.setenv("VERCEL_ORG_ID", "team_env")
    config = CliConfig.load(global_dir=tmp_path)
    assert config.token == "env-token"
    assert config.current_team == "team_env"

    config = CliConfig.load(token="opt-token", scope="team_opt", global_dir=tmp_path)
    assert config.token == "opt-token"
    assert config.current_team == "team_opt"


def test_global_dir_env_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VERCEL_CLI_HOME", str(tmp_path / "cfg"))
    assert default_global_dir() == tmp_path / "cfg"


def test_non_object_config_is_rejected(tmp_path: Path) -> None:
    (tmp_path / "config.json").write_text("[]", encoding="utf-8")
    with pytest.raises(ValueError, match="JSON object"):
        CliConfig.load(global_dir=tmp_path)


def test_save_current_team_round_trip(tmp_path: Path) -> None:
    config = CliConfig.load(global_dir=tmp_path / "cfg")
    config.save_current_team("team_9")
    assert CliConfig.load(global_dir=tmp_path / "cfg").current_team == "team_9"
    config.save_current_team(None)
    assert CliConfig.load(global_dir=tmp_path / "cfg").current_team is None


def test_validation_helpers() -> None:
    assert require_positive_int(3, "limit") == 3
    with pytest.raises(ValueError, match="limit must be greater than zero"):
        require_positive_int(0, "limit")
    with pytest.raises(ValueError, match="absolute http"):
        validate_api_url("api.vercel.com")
