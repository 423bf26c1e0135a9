"""Repository linking: root discovery, manifest and path resolution."""

from __future__ import annotations

from vercel_cli.link.detect import detect_projects
from vercel_cli.link.files import add_to_gitignore, read_manifest, write_manifest, write_readme
from vercel_cli.link.git import get_remote_urls
from vercel_cli.link.models import (
    EnsureRepoLinkOptions,
    LinkSettings,
    NewProject,
    RepoLink,
    RepoProjectConfig,
    RepoProjectsConfig,
    normalize_directory,
)
from vercel_cli.link.repo import (
    ensure_repo_link,
    find_projects_from_path,
    find_repo_root,
    get_repo_link,
    traverse_up_directories,
)

__all__ = [
    "EnsureRepoLinkOptions",
    "LinkSettings",
    "NewProject",
    "RepoLink",
    "RepoProjectConfig",
    "RepoProjectsConfig",
    "add_to_gitignore",
    "detect_projects",
    "ensure_repo_link",
    "find_projects_from_path",
    "find_repo_root",
    "get_remote_urls",
    "get_repo_link",
    "normalize_directory",
    "read_manifest",
    "traverse_up_directories",
    "write_manifest",
    "write_readme",
]
