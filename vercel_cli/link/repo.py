"""Repository root discovery and multi-project linking."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path, PurePosixPath
from typing import Any, Protocol

from rich.console import Console

from vercel_cli.client.orgs import select_org
from vercel_cli.errors import RepoLinkError
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
from vercel_cli.logging_utils import get_logger
from vercel_cli.prompts import Choice, Prompter, Separator

LOGGER = get_logger()


class RepoLinkClient(Protocol):
    """API operations used while linking a repository."""

    current_team: str | None

    def fetch(self, path: str, **kwargs: Any) -> dict[str, Any]: ...

    def fetch_paginated(self, path: str, **kwargs: Any) -> Iterator[dict[str, Any]]: ...

    def create_project(self, name: str, **kwargs: Any) -> dict[str, Any]: ...


def traverse_up_directories(start: Path | str) -> Iterator[Path]:
    """Yield ``start`` and each of its ancestors up to the filesystem root."""
    current: Path | None = Path(os.path.abspath(start))
    while current is not None:
        yield current
        parent = current.parent
        current = parent if len(str(parent)) < len(str(current)) else None


def find_repo_root(start: Path | str, settings: LinkSettings) -> Path | None:
    """Return the closest directory above ``start`` holding a manifest or Git config.

    The search stops at the home directory, which is never treated as a
    repository even when it is tracked by Git.
    """
    home = Path(os.path.abspath(settings.home))
    for current in traverse_up_directories(start):
        if current == home:
            LOGGER.debug("Arrived at home directory")
            break
        if _path_exists(current / settings.manifest_path):
            LOGGER.debug('Found "%s" - detected "%s" as repo root', settings.manifest_path, current)
            return current
        if _path_exists(current / settings.vcs_config):
            LOGGER.debug('Found "%s" - detected "%s" as repo root', settings.vcs_config, current)
            return current
    LOGGER.debug("Aborting search for repo root")
    return None


def get_repo_link(start: Path | str, settings: LinkSettings) -> RepoLink | None:
    """Find the repository root and read its manifest when it is already linked."""
    root_path = find_repo_root(start, settings)
    if root_path is None:
        return None
    repo_config_path = root_path / settings.manifest_path
    return RepoLink(
        root_path=root_path,
        repo_config_path=repo_config_path,
        repo_config=read_manifest(repo_config_path),
    )


def ensure_repo_link(
    client: RepoLinkClient,
    start: Path | str,
    options: EnsureRepoLinkOptions,
    *,
    prompter: Prompter,
    console: Console | None = None,
    settings: LinkSettings | None = None,
    detector: Callable[[Path], dict[str, str]] = detect_projects,
) -> RepoLink | None:
    """Return the repository link, linking the repository first when needed.

    An existing manifest is returned untouched unless ``overwrite`` is set.
    Returns ``None`` when the user cancels or selects no projects.
    """
    settings = settings or LinkSettings.from_environment()
    console = console or Console()
    repo_link = get_repo_link(start, settings)
    if repo_link is None:
        raise RepoLinkError("Could not determine Git repository root directory")
    LOGGER.debug("Found Git repository root directory: %s", repo_link.root_path)
    if repo_link.repo_config is not None and not options.overwrite:
        return repo_link

    root_path = repo_link.root_path
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="vc-detect")
    try:
        # Local detection overlaps with the prompts and the project listing.
        detected_future = executor.submit(detector, root_path)
        return _link_repository(
            client,
            repo_link,
            options,
            prompter=prompter,
            console=console,
            settings=settings,
            detected_future=detected_future,
        )
    finally:
        executor.shutdown(wait=False, cancel_futures=True)


def _link_repository(
    client: RepoLinkClient,
    repo_link: RepoLink,
    options: EnsureRepoLinkOptions,
    *,
    prompter: Prompter,
    console: Console,
    settings: LinkSettings,
    detected_future: Future[dict[str, str]],
) -> RepoLink | None:
    """Prompt for scope, remote and projects, then write the manifest."""
    root_path = repo_link.root_path
    should_link = options.yes or prompter.confirm(
        f'Link Git repository at "{_human_path(root_path, settings.home)}" to your Project(s)?',
        default=True,
    )
    if not should_link:
        console.print("Canceled. Repository not linked.")
        return None

    org = select_org(
        client,
        prompter,
        "Which scope should contain your Project(s)?",
        yes=options.yes,
    )

    remote_urls = get_remote_urls(root_path / settings.vcs_config)
    if not remote_urls:
        raise RepoLinkError("Could not determine Git remote URLs")
    remote_name = _select_remote(remote_urls, prompter)
    repo_url = remote_urls[remote_name]

    projects: list[dict[str, Any]] = []
    with console.status(f"Fetching Projects for {repo_url} under [bold]{org.slug}[/bold]…"):
        for chunk in client.fetch_paginated("/v9/projects", params={"repoUrl": repo_url}):
            projects.extend(chunk.get("projects", []))
    detected = _detected_projects(detected_future)

    if projects:
        console.print(
            f"Found {_plural('Project', len(projects))} linked to {repo_url} "
            f"under [bold]{org.slug}[/bold]"
        )
    else:
        console.print(f"No Projects are linked to {repo_url} under [bold]{org.slug}[/bold].")

    # Directories that already back a remote project are not offered again.
    for project in projects:
        detected.pop(project.get("rootDirectory") or "", None)
    if detected:
        console.print(f"Detected {_plural('new Project', len(detected))} that may be created.")

    selected = prompter.checkbox(
        f"Which Projects should be {'linked to' if projects else 'created'}?",
        _link_choices(org.slug, projects, detected),
    )
    if not selected:
        console.print("No Projects were selected. Repository not linked.")
        return None

    linked: list[RepoProjectConfig] = []
    for selection in selected:
        if isinstance(selection, NewProject):
            created = client.create_project(
                selection.name, root_directory=selection.root_directory
            )
            console.print(f"Created new Project [bold]{org.slug}/{created['name']}[/bold]")
            root_directory = created.get("rootDirectory") or selection.root_directory
            linked.append(_project_config(created, root_directory))
        else:
            linked.append(_project_config(selection, selection.get("rootDirectory")))

    repo_config = RepoProjectsConfig(
        org_id=org.id,
        remote_name=remote_name,
        projects=tuple(linked),
    )
    write_manifest(repo_link.repo_config_path, repo_config)
    write_readme(root_path, settings)
    gitignore_updated = add_to_gitignore(root_path, settings)

    suffix = f" and added it to {settings.gitignore_name}" if gitignore_updated else ""
    console.print(
        f"🔗 Linked to {repo_url} under [bold]{org.slug}[/bold] "
        f"(created {settings.manifest_dir}{suffix})"
    )
    return RepoLink(
        root_path=root_path,
        repo_config_path=repo_link.repo_config_path,
        repo_config=repo_config,
    )


def find_projects_from_path(
    projects: list[RepoProjectConfig] | tuple[RepoProjectConfig, ...],
    path: str,
) -> list[RepoProjectConfig]:
    """Return the linked projects whose root directory contains ``path``.

    ``path`` is relative to the repository root. When several projects match,
    only those with the deepest root directory are returned; equal
    directories are all returned.
    """
    normalized_path = normalize_directory(path)
    matches = sorted(
        (project for project in projects if _contains(project.directory, normalized_path)),
        key=lambda project: project.depth,
        reverse=True,
    )
    if not matches:
        return []
    first_match = matches[0]
    return [match for match in matches if match.directory == first_match.directory]


def _contains(directory: str, path: str) -> bool:
    """Return whether a project directory contains a repo-relative path."""
    # A project without a root directory owns the whole repository.
    if directory == ".":
        return True
    return path == directory or path.startswith(f"{directory}/")


def _path_exists(path: Path) -> bool:
    """Return whether a path exists; a file in a parent position counts as absent."""
    try:
        path.lstat()
    except (FileNotFoundError, NotADirectoryError):
        return False
    return True


def _detected_projects(future: Future[dict[str, str]]) -> dict[str, str]:
    """Return the detection result, or an empty mapping when detection failed."""
    try:
        return dict(future.result())
    except Exception as exc:  # noqa: BLE001
        LOGGER.debug("Failed to detect local projects: %s", exc)
        return {}


def _select_remote(remote_urls: dict[str, str], prompter: Prompter) -> str:
    """Pick the Git remote, prompting only when there is more than one."""
    names = sorted(remote_urls)
    if len(names) == 1:
        return names[0]
    return prompter.select(
        "Which Git remote should be used?",
        names,
        default="origin" if "origin" in remote_urls else None,
    )


def _link_choices(
    org_slug: str,
    projects: list[dict[str, Any]],
    detected: dict[str, str],
) -> list[Choice | Separator]:
    """Build the checkbox entries for existing and detected projects."""
    add_separators = bool(projects) and bool(detected)
    choices: list[Choice | Separator] = []
    if add_separators:
        choices.append(Separator("----- Existing Projects -----"))
    choices.extend(
        Choice(label=f"{org_slug}/{project['name']}", value=project, checked=True)
        for project in projects
    )
    if add_separators:
        choices.append(Separator("----- New Projects to be created -----"))
    for root_directory, framework in detected.items():
        name = PurePosixPath(root_directory).name
        choices.append(
            Choice(
                label=f"{org_slug}/{name} ({framework})",
                value=NewProject(root_directory=root_directory, name=name, framework=framework),
            )
        )
    return choices


def _project_config(project: dict[str, Any], root_directory: str | None) -> RepoProjectConfig:
    """Convert an API project into a manifest entry."""
    return RepoProjectConfig(
        id=str(project["id"]),
        name=str(project["name"]),
        directory=normalize_directory(root_directory or ""),
    )


def _human_path(path: Path, home: Path) -> str:
    """Render a path relative to home as ``~/...`` when possible."""
    try:
        return f"~/{path.relative_to(home).as_posix()}"
    except ValueError:
        return str(path)


def _plural(word: str, count: int) -> str:
    """Return ``count word`` with a plural ``s`` when needed."""
    return f"{count} {word}{'' if count == 1 else 's'}"
