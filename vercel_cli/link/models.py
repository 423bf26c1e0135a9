"""Models for the repository link manifest."""

from __future__ import annotations

import posixpath
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any

from vercel_cli.errors import ManifestError


def normalize_directory(value: str) -> str:
    """Normalize a repo-relative path to POSIX form, ``.`` for the repo root."""
    cleaned = value.replace("\\", "/").strip()
    if not cleaned:
        return "."
    return posixpath.normpath(cleaned)


def _require_string(value: Any, field_name: str) -> str:
    """Validate a non-empty string field."""
    if not isinstance(value, str):
        raise ManifestError(f"Expected '{field_name}' to be a string.")
    cleaned = value.strip()
    if not cleaned:
        raise ManifestError(f"Expected '{field_name}' to be non-empty.")
    return cleaned


@dataclass(frozen=True)
class RepoProjectConfig:
    """One remote project linked to a directory of the repository."""

    id: str
    name: str
    directory: str

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any], *, index: int = 0) -> RepoProjectConfig:
        """Parse and validate one manifest project entry."""
        if not isinstance(payload, Mapping):
            raise ManifestError(f"Expected 'projects[{index}]' to be an object.")
        directory = payload.get("directory")
        if not isinstance(directory, str):
            raise ManifestError(f"Expected 'projects[{index}].directory' to be a string.")
        return cls(
            id=_require_string(payload.get("id"), f"projects[{index}].id"),
            name=_require_string(payload.get("name"), f"projects[{index}].name"),
            directory=normalize_directory(directory),
        )

    def to_dict(self) -> dict[str, str]:
        """Return the manifest representation."""
        return {"id": self.id, "name": self.name, "directory": self.directory}

    @property
    def depth(self) -> int:
        """Return the number of path segments; the repo root has depth zero."""
        if self.directory == ".":
            return 0
        return len(PurePosixPath(self.directory).parts)


@dataclass(frozen=True)
class RepoProjectsConfig:
    """Persisted manifest of the projects linked to one repository."""

    org_id: str
    remote_name: str
    projects: tuple[RepoProjectConfig, ...] = ()

    @classmethod
    def from_dict(cls, payload: Any) -> RepoProjectsConfig:
        """Parse and validate a decoded ``repo.json`` document."""
        if not isinstance(payload, Mapping):
            raise ManifestError("Expected the repository manifest to be a JSON object.")
        raw_projects = payload.get("projects")
        if not isinstance(raw_projects, list):
            raise ManifestError("Expected 'projects' to be a list.")
        return cls(
            org_id=_require_string(payload.get("orgId"), "orgId"),
            remote_name=_require_string(payload.get("remoteName"), "remoteName"),
            projects=tuple(
                RepoProjectConfig.from_dict(item, index=index)
                for index, item in enumerate(raw_projects)
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the manifest representation."""
        return {
            "orgId": self.org_id,
            "remoteName": self.remote_name,
            "projects": [project.to_dict() for project in self.projects],
        }


@dataclass(frozen=True)
class RepoLink:
    """Outcome of searching upward from a working directory."""

    root_path: Path
    repo_config_path: Path
    repo_config: RepoProjectsConfig | None = None


@dataclass(frozen=True)
class EnsureRepoLinkOptions:
    """Flags controlling first-time linking."""

    yes: bool = False
    overwrite: bool = False


@dataclass(frozen=True)
class NewProject:
    """A locally detected directory offered for project creation."""

    root_directory: str
    name: str
    framework: str


@dataclass(frozen=True)
class LinkSettings:
    """File names and home directory used by the resolver."""

    home: Path
    vcs_config: PurePosixPath = PurePosixPath(".git/config")
    manifest_dir: str = ".vercel"
    manifest_name: str = "repo.json"
    readme_name: str = "README.txt"
    gitignore_name: str = ".gitignore"

    @classmethod
    def from_environment(cls) -> LinkSettings:
        """Build settings for the current user."""
        return cls(home=Path.home())

    @property
    def manifest_path(self) -> PurePosixPath:
        """Return the manifest path relative to a repository root."""
        return PurePosixPath(self.manifest_dir) / self.manifest_name
