"""Module entrypoint for python -m vercel_cli."""

from __future__ import annotations

from vercel_cli.cli import app

if __name__ == "__main__":
    app(prog_name="vc")
