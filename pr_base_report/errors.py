"""Exceptions raised by the open PR report."""

from typing import Optional


class ReportError(Exception):
    """Base class for all report errors."""


class TransportError(ReportError):
    """Any failure talking to the GitHub API.

    Covers network errors, authentication and authorization failures,
    rate limiting and malformed responses. The original ``requests``
    exception, if any, is chained as ``__cause__``.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, url: str = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class ConfigurationError(ReportError):
    """Missing or invalid settings, detected before any API call."""
