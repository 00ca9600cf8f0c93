"""Error types raised by the course core.

Route handlers never build error responses for these by hand; the handlers
registered in ``main.py`` translate them into JSON bodies.
"""


class CourseError(Exception):
    """Base class for errors raised by the course service."""


class ValidationError(CourseError):
    """Required input is missing or empty."""


class ConfigurationError(CourseError):
    """A required setting, such as the provider credential, is missing."""


class UpstreamAuthError(CourseError):
    """The credential exchange with the completion provider failed."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Token exchange failed with status {status_code}")
        self.status_code = status_code
        self.body = body


class UpstreamError(CourseError):
    """The completion provider answered with a non-success status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Completion request failed with status {status_code}")
        self.status_code = status_code
        self.body = body


class StorageError(CourseError):
    """Progress could not be read from or written to storage."""
