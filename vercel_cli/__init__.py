"""Command-line client for linking repositories and streaming deployment events."""

__version__ = "0.3.0"
