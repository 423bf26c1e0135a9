"""Shared configuration validation helpers."""

from __future__ import annotations

from urllib.parse import urlparse


def require_positive_int(value: int, field_name: str) -> int:
    """Validate a positive integer input and return it."""
    if value <= 0:
        raise ValueError(f"{field_name} must be greater than zero.")
    return value


def validate_api_url(value: str) -> str:
    """Validate an API base URL and return it without a trailing slash."""
    parsed = urlparse(value.strip())
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError(f"api_url must be an absolute http(s) URL, got '{value}'.")
    return value.strip().rstrip("/")
