"""
services/exceptions.py – Structured custom exception hierarchy for Game Hub.

All service-level errors derive from GameHubError so callers can catch broadly
or specifically depending on context.
"""

from typing import Optional


class GameHubError(Exception):
    """Base class for all Game Hub exceptions."""


class ApiError(GameHubError):
    """
    Raised when a backend call fails at the transport / HTTP level.

    Attributes
    ----------
    status : HTTP status code, or None when no response was received
             (connection refused, timeout, …).
    """

    def __init__(self, status: Optional[int], detail: str = "") -> None:
        self.status = status
        self.detail = detail
        if status is None:
            message = f"Network error: {detail}" if detail else "Network error"
        else:
            message = f"HTTP error! status: {status}"
        super().__init__(message)


class ValidationError(GameHubError):
    """Raised when user-supplied form input is rejected before any request."""
