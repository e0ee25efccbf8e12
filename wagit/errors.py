"""Error taxonomy shared by the webhook and the wizard."""

from __future__ import annotations


class WagitError(Exception):
    """Base class for every error wagit raises on purpose."""


class ConfigurationError(WagitError):
    """A required setting is missing. Fatal for the request, never retried."""

    def __init__(self, issues: list[str]) -> None:
        self.issues = list(issues)
        super().__init__("; ".join(self.issues) or "Configuration error")


class UpstreamCallError(WagitError):
    """A third-party HTTP call failed (non-success status or network error)."""

    def __init__(self, message: str, status: int | None = None, upstream_message: str = "") -> None:
        self.status = status
        self.upstream_message = upstream_message
        super().__init__(message)


class ValidationError(WagitError):
    """User input is incomplete. Raised before anything reaches the network."""

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        self.fields = list(fields or [])
        super().__init__(message)
