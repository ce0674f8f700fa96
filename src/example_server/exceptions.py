"""
Custom exception hierarchy for the example server.

Each exception carries a context dict for structured logging.
"""


class ExampleServerError(Exception):
    """Base exception for all example server errors."""

    def __init__(self, message: str, context: dict = None):
        self.context = context or {}
        super().__init__(message)


class ContentResolutionError(ExampleServerError):
    """Base exception for failures while computing the response body."""
    pass


class ObjectFetchError(ContentResolutionError):
    """Raised when the object store copy fails or cannot be executed."""
    pass


class SharedFileError(ContentResolutionError):
    """Raised when writing or reading the shared filesystem file fails."""
    pass


class ConfigurationError(ExampleServerError):
    """Raised when configuration is invalid."""
    pass
