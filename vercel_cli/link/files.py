"""Files written into a repository when it is linked."""

from __future__ import annotations

import json
from pathlib import Path

from vercel_cli.errors import ManifestError
from vercel_cli.link.models import LinkSettings, RepoProjectsConfig
from vercel_cli.logging_utils import get_logger

LOGGER = get_logger()

README_TEXT = """> Why do I have a folder named ".vercel" in my project?
The ".vercel" folder is created when you link a directory to a Vercel project.

> What does the "project.json" file contain?
The "project.json" file contains:
- The ID of the Vercel project that you linked ("projectId")
- The ID of the user or team your Vercel project is owned by ("orgId")

> What does the "repo.json" file contain?
The "repo.json" file contains the ID of the user or team the linked projects
are owned by ("orgId"), the Git remote the repository was linked with
("remoteName") and, for each linked project, its ID, name and root directory.

> Should I commit the ".vercel" folder?
No, you should not share the ".vercel" folder with anyone.
Upon creation, it will be automatically added to your ".gitignore" file.
"""


def read_manifest(path: Path) -> RepoProjectsConfig | None:
    """Read the repository manifest; a missing file means the repo is not linked."""
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    try:
        raw = json.loads(content)
    except ValueError as exc:
        raise ManifestError(f"Could not parse {path}: {exc}") from exc
    return RepoProjectsConfig.from_dict(raw)


def write_manifest(path: Path, config: RepoProjectsConfig) -> None:
    """Overwrite the manifest with the given configuration."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config.to_dict(), indent=2) + "\n", encoding="utf-8")
    LOGGER.info(
        "Wrote repository manifest",
        extra={"path": str(path), "projects": len(config.projects)},
    )


def write_readme(root: Path, settings: LinkSettings) -> Path:
    """Write the explanatory note next to the manifest."""
    readme_path = root / settings.manifest_dir / settings.readme_name
    readme_path.parent.mkdir(parents=True, exist_ok=True)
    readme_path.write_text(README_TEXT.replace(".vercel", settings.manifest_dir), encoding="utf-8")
    return readme_path


def add_to_gitignore(root: Path, settings: LinkSettings) -> bool:
    """Ignore the manifest directory; return whether the ignore file changed."""
    gitignore_path = root / settings.gitignore_name
    try:
        content = gitignore_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        content = ""
    name = settings.manifest_dir
    accepted = {name, f"{name}/", f"/{name}", f"/{name}/"}
    if any(line.strip() in accepted for line in content.splitlines()):
        return False
    separator = "" if not content or content.endswith("\n") else "\n"
    gitignore_path.write_text(f"{content}{separator}{name}\n", encoding="utf-8")
    return True
