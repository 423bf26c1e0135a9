"""Tests for repository root discovery and manifest reading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from vercel_cli.errors import ManifestError
from vercel_cli.link import (
    LinkSettings,
    RepoProjectConfig,
    find_repo_root,
    get_repo_link,
    traverse_up_directories,
)


def _git_repo(path: Path) -> Path:
    (path / ".git").mkdir(parents=True)
    (path / ".git" / "config").write_text('[core]\n\tbare = false\n', encoding="utf-8")
    return path


def _write_manifest(root: Path, payload: object) -> Path:
    manifest = root / ".vercel" / "repo.json"
    manifest.parent.mkdir(parents=True, exist_ok=True)
    manifest.write_text(json.dumps(payload), encoding="utf-8")
    return manifest


def test_traverse_up_directories_ends_at_filesystem_root(tmp_path: Path) -> None:
    start = tmp_path / "a" / "b"
    visited = list(traverse_up_directories(start))
    assert visited[0] == start
    assert visited[1] == tmp_path / "a"
    assert visited[-1] == Path(visited[-1].anchor)
    assert len(visited) == len(start.parts)


def test_traverse_up_directories_is_restartable(tmp_path: Path) -> None:
    start = tmp_path / "x" / ".." / "y"
    first = list(traverse_up_directories(start))
    second = list(traverse_up_directories(start))
    assert first == second
    assert first[0] == tmp_path / "y"


def test_find_repo_root_from_nested_directory(tmp_path: Path) -> None:
    home = tmp_path / "home" / "u"
    project = _git_repo(home / "proj")
    start = project / "sub" / "sub2"
    start.mkdir(parents=True)
    assert find_repo_root(start, LinkSettings(home=home)) == project


def test_find_repo_root_never_returns_home(tmp_path: Path) -> None:
    home = _git_repo(tmp_path / "home" / "u")
    assert find_repo_root(home, LinkSettings(home=home)) is None
    nested = home / "notes"
    nested.mkdir()
    assert find_repo_root(nested, LinkSettings(home=home)) is None


def test_manifest_marks_root_before_git_config(tmp_path: Path) -> None:
    home = tmp_path / "home"
    outer = _git_repo(tmp_path / "work" / "mono")
    inner = outer / "apps" / "web"
    inner.mkdir(parents=True)
    _write_manifest(inner, {"orgId": "team_1", "remoteName": "origin", "projects": []})
    assert find_repo_root(inner / "src", LinkSettings(home=home)) == inner


def test_git_worktree_file_is_not_a_repo_marker(tmp_path: Path) -> None:
    home = tmp_path / "home"
    repo = _git_repo(tmp_path / "work" / "repo")
    worktree = repo / "wt"
    worktree.mkdir()
    (worktree / ".git").write_text("gitdir: ../.git/worktrees/wt\n", encoding="utf-8")
    assert find_repo_root(worktree, LinkSettings(home=home)) == repo


def test_get_repo_link_without_manifest(tmp_path: Path) -> None:
    repo = _git_repo(tmp_path / "repo")
    link = get_repo_link(repo / "src", LinkSettings(home=tmp_path / "home"))
    assert link is not None
    assert link.root_path == repo
    assert link.repo_config_path == repo / ".vercel" / "repo.json"
    assert link.repo_config is None


def test_get_repo_link_outside_repository(tmp_path: Path) -> None:
    home = tmp_path / "home"
    start = home / "scratch"
    start.mkdir(parents=True)
    assert get_repo_link(start, LinkSettings(home=home)) is None


def test_get_repo_link_reads_manifest(tmp_path: Path) -> None:
    repo = _git_repo(tmp_path / "repo")
    _write_manifest(
        repo,
        {
            "orgId": "team_1",
            "remoteName": "origin",
            "projects": [
                {"id": "prj_1", "name": "web", "directory": "apps/web"},
                {"id": "prj_2", "name": "site", "directory": ""},
            ],
        },
    )
    link = get_repo_link(repo, LinkSettings(home=tmp_path / "home"))
    assert link is not None
    assert link.repo_config is not None
    assert link.repo_config.org_id == "team_1"
    assert link.repo_config.projects == (
        RepoProjectConfig(id="prj_1", name="web", directory="apps/web"),
        RepoProjectConfig(id="prj_2", name="site", directory="."),
    )


def test_get_repo_link_rejects_malformed_json(tmp_path: Path) -> None:
    repo = _git_repo(tmp_path / "repo")
    manifest = repo / ".vercel" / "repo.json"
    manifest.parent.mkdir()
    manifest.write_text("{not json", encoding="utf-8")
    with pytest.raises(ManifestError):
        get_repo_link(repo, LinkSettings(home=tmp_path / "home"))


def test_get_repo_link_rejects_invalid_shape(tmp_path: Path) -> None:
    repo = _git_repo(tmp_path / "repo")
    _write_manifest(repo, {"orgId": "team_1", "remoteName": "origin", "projects": {}})
    with pytest.raises(ManifestError, match="projects"):
        get_repo_link(repo, LinkSettings(home=tmp_path / "home"))


def test_get_repo_link_propagates_unreadable_manifest(tmp_path: Path) -> None:
    repo = _git_repo(tmp_path / "repo")
    (repo / ".vercel" / "repo.json").mkdir(parents=True)
    with pytest.raises(IsADirectoryError):
        get_repo_link(repo, LinkSettings(home=tmp_path / "home"))
