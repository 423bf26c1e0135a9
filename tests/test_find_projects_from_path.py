"""Tests for longest-prefix resolution of linked projects."""

from __future__ import annotations

from vercel_cli.link import RepoProjectConfig, find_projects_from_path


def _project(directory: str, project_id: str | None = None) -> RepoProjectConfig:
    return RepoProjectConfig(
        id=project_id or f"prj_{directory}",
        name=directory.rsplit("/", 1)[-1],
        directory=directory,
    )


def test_deeper_match_wins_over_repo_root() -> None:
    root = _project(".")
    web = _project("apps/web")
    assert find_projects_from_path([root, web], "apps/web/src") == [web]


def test_shared_prefix_is_not_a_segment_match() -> None:
    web = _project("apps/web")
    admin = _project("apps/web-admin")
    assert find_projects_from_path([web, admin], "apps/web/src") == [web]
    assert find_projects_from_path([web, admin], "apps/web-admin") == [admin]


def test_exact_directory_matches() -> None:
    web = _project("apps/web")
    assert find_projects_from_path([web], "apps/web") == [web]


def test_all_ties_at_deepest_directory_are_returned() -> None:
    first = _project("apps/web", "prj_1")
    second = _project("apps/web", "prj_2")
    root = _project(".")
    assert find_projects_from_path([root, first, second], "apps/web/pages") == [first, second]


def test_root_project_matches_any_path() -> None:
    root = _project(".")
    docs = _project("docs")
    assert find_projects_from_path([root, docs], "packages/ui") == [root]
    assert find_projects_from_path([root, docs], ".") == [root]


def test_root_project_loses_to_single_segment_directory() -> None:
    root = _project(".")
    docs = _project("docs")
    assert find_projects_from_path([root, docs], "docs/guide") == [docs]


def test_nested_project_directories_pick_most_specific() -> None:
    outer = _project("apps")
    inner = _project("apps/web")
    deepest = _project("apps/web/storybook")
    projects = [outer, deepest, inner]
    assert find_projects_from_path(projects, "apps/web/storybook/stories") == [deepest]
    assert find_projects_from_path(projects, "apps/web/src") == [inner]
    assert find_projects_from_path(projects, "apps/api") == [outer]


def test_path_is_normalized_before_matching() -> None:
    web = _project("apps/web")
    assert find_projects_from_path([web], "./apps/web/") == [web]
    assert find_projects_from_path([web], "apps\\web\\src") == [web]
    assert find_projects_from_path([web], "apps/other/../web/src") == [web]


def test_no_match_returns_empty_list() -> None:
    assert find_projects_from_path([_project("apps/web")], "packages/ui") == []


def test_empty_project_list_returns_empty_list() -> None:
    assert find_projects_from_path([], "apps/web") == []
    assert find_projects_from_path((), ".") == []
