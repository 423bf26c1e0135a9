"""Command-line interface for the vc deployment client."""

from __future__ import annotations

# ruff: noqa: F401
from vercel_cli.commands import deployments, link, projects, root
from vercel_cli.commands.common import app

if __name__ == "__main__":
    app()
