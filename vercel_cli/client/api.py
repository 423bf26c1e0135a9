"""Thin REST client for the deployment platform API."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

import httpx

from vercel_cli import __version__
from vercel_cli.config import DEFAULT_API_URL
from vercel_cli.errors import ApiError
from vercel_cli.logging_utils import get_logger

LOGGER = get_logger()

DEFAULT_TIMEOUT_SECONDS = 30.0


class ApiClient:
    """Authenticated HTTP access to the platform API with team scoping."""

    def __init__(
        self,
        *,
        token: str | None,
        api_url: str = DEFAULT_API_URL,
        current_team: str | None = None,
        transport: httpx.BaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        headers = {"User-Agent": f"vercel-cli-py/{__version__}"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self.current_team = current_team
        self._http = httpx.Client(
            base_url=api_url,
            headers=headers,
            timeout=httpx.Timeout(timeout, read=None),
            transport=transport,
        )

    def close(self) -> None:
        """Release pooled connections."""
        self._http.close()

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def fetch(
        self,
        path: str,
        *,
        method: str = "GET",
        params: Mapping[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Perform one request and return the decoded JSON body."""
        LOGGER.debug("%s %s", method, path)
        response = self._http.request(
            method,
            path,
            params=self._scoped_params(params),
            json=json,
        )
        if not response.is_success:
            raise _api_error(response)
        if not response.content:
            return {}
        payload = response.json()
        if not isinstance(payload, dict):
            raise ApiError(response.status_code, f"Unexpected response body for {path}")
        return payload

    @contextmanager
    def stream(
        self,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
    ) -> Iterator[httpx.Response]:
        """Open a streaming GET; the caller classifies the response status."""
        LOGGER.debug("STREAM %s", path)
        with self._http.stream("GET", path, params=self._scoped_params(params)) as response:
            yield response

    def fetch_paginated(
        self,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
    ) -> Iterator[dict[str, Any]]:
        """Yield result pages, following ``pagination.next`` through ``until``."""
        query = dict(params or {})
        while True:
            chunk = self.fetch(path, params=query)
            yield chunk
            pagination = chunk.get("pagination") or {}
            next_cursor = pagination.get("next")
            if not next_cursor:
                return
            query["until"] = str(next_cursor)

    def create_project(self, name: str, *, root_directory: str | None = None) -> dict[str, Any]:
        """Create a new project and return its API representation."""
        body: dict[str, Any] = {"name": name}
        if root_directory:
            body["rootDirectory"] = root_directory
        return self.fetch("/v1/projects", method="POST", json=body)

    def _scoped_params(self, params: Mapping[str, str] | None) -> dict[str, str]:
        scoped = dict(params or {})
        if self.current_team and "teamId" not in scoped:
            scoped["teamId"] = self.current_team
        return scoped


def _api_error(response: httpx.Response) -> ApiError:
    """Build an API error from an error response body when one is present."""
    message = f"Response {response.status_code}"
    code: str | None = None
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        error = payload["error"]
        message = str(error.get("message") or message)
        code = error.get("code")
    return ApiError(response.status_code, message, code)
