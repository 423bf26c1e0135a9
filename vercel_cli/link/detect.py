"""Local framework detection across workspace packages."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from vercel_cli.logging_utils import get_logger

LOGGER = get_logger()


@dataclass(frozen=True)
class Framework:
    """A framework recognized by one of its package dependencies."""

    slug: str
    name: str
    dependency: str


# More specific frameworks come first; several of them also depend on vite or react.
FRAMEWORKS: tuple[Framework, ...] = (
    Framework("nextjs", "Next.js", "next"),
    Framework("nuxtjs", "Nuxt.js", "nuxt"),
    Framework("remix", "Remix", "@remix-run/dev"),
    Framework("sveltekit", "SvelteKit", "@sveltejs/kit"),
    Framework("astro", "Astro", "astro"),
    Framework("gatsby", "Gatsby.js", "gatsby"),
    Framework("angular", "Angular", "@angular/cli"),
    Framework("create-react-app", "Create React App", "react-scripts"),
    Framework("vue", "Vue.js", "@vue/cli-service"),
    Framework("vite", "Vite", "vite"),
)


def detect_projects(root: Path) -> dict[str, str]:
    """Map workspace package directories under ``root`` to detected framework names.

    Keys are POSIX paths relative to ``root``. Repositories without a
    workspace definition yield an empty mapping.
    """
    patterns = workspace_patterns(root)
    if not patterns:
        LOGGER.debug("No workspace definition found in %s", root)
        return {}
    detected: dict[str, str] = {}
    for package_dir in workspace_package_dirs(root, patterns):
        framework = detect_framework(package_dir)
        if framework is None:
            continue
        detected[package_dir.relative_to(root).as_posix()] = framework.name
    LOGGER.debug("Detected local projects", extra={"count": len(detected)})
    return detected


def workspace_patterns(root: Path) -> list[str]:
    """Return package globs from ``package.json`` or ``pnpm-workspace.yaml``."""
    manifest = _read_package_json(root / "package.json")
    workspaces: Any = manifest.get("workspaces") if manifest else None
    if isinstance(workspaces, dict):
        workspaces = workspaces.get("packages")
    if isinstance(workspaces, list):
        return [item for item in workspaces if isinstance(item, str)]

    pnpm_path = root / "pnpm-workspace.yaml"
    if pnpm_path.is_file():
        raw = yaml.safe_load(pnpm_path.read_text(encoding="utf-8")) or {}
        packages = raw.get("packages") if isinstance(raw, dict) else None
        if isinstance(packages, list):
            return [item for item in packages if isinstance(item, str)]
    return []


def workspace_package_dirs(root: Path, patterns: list[str]) -> list[Path]:
    """Expand workspace globs into package directories, honoring ``!`` exclusions."""
    included: set[Path] = set()
    excluded: set[Path] = set()
    for pattern in patterns:
        target = excluded if pattern.startswith("!") else included
        cleaned = pattern.lstrip("!").strip().rstrip("/")
        if cleaned.startswith("./"):
            cleaned = cleaned[2:]
        if not cleaned:
            continue
        for candidate in root.glob(cleaned):
            if "node_modules" in candidate.relative_to(root).parts:
                continue
            if candidate.is_dir() and (candidate / "package.json").is_file():
                target.add(candidate)
    return sorted(included - excluded)


def detect_framework(package_dir: Path) -> Framework | None:
    """Return the first framework whose dependency the package declares."""
    manifest = _read_package_json(package_dir / "package.json")
    if not manifest:
        return None
    dependencies: dict[str, Any] = {}
    for key in ("dependencies", "devDependencies"):
        section = manifest.get(key)
        if isinstance(section, dict):
            dependencies.update(section)
    for framework in FRAMEWORKS:
        if framework.dependency in dependencies:
            return framework
    return None


def _read_package_json(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    raw = json.loads(content)
    return raw if isinstance(raw, dict) else {}
