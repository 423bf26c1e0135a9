"""Exception types raised by the vc client layers."""

from __future__ import annotations


class VercelCliError(RuntimeError):
    """Base class for expected, user-facing failures."""


class ApiError(VercelCliError):
    """Raised when the REST API answers with a non-2xx status."""

    def __init__(self, status: int, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.code = code


class EventStreamError(VercelCliError):
    """Raised when the deployment events feed cannot be opened."""

    def __init__(self, status: int) -> None:
        super().__init__(f"Deployment events status {status}")
        self.status = status

    @property
    def retryable(self) -> bool:
        """Return whether another attempt may succeed."""
        return self.status >= 500


class StreamDecodeError(VercelCliError):
    """Raised when a record in the events feed is not valid JSON."""


class PollError(VercelCliError):
    """Raised when the deployment status poll fails."""


class RepoLinkError(VercelCliError):
    """Raised when a repository cannot be linked."""


class ManifestError(VercelCliError):
    """Raised when the repository manifest exists but cannot be parsed."""
