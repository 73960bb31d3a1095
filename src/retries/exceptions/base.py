"""
Base exception classes for retried operations.

Each exception includes a `retryable` flag. An error whose flag is False is
never retried, even when its class is listed in the rescue set.
"""


class RetriesError(Exception):
    """Base exception for all errors raised by or through the retry helpers."""

    def __init__(self, message: str, *, retryable: bool = False):
        super().__init__(message)
        self.message = message
        self.retryable = retryable

    def __str__(self) -> str:
        return self.message


class ConfigurationError(RetriesError):
    """Raised when retry options are invalid. Never retryable."""

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message, retryable=False)
        self.field = field

    def __str__(self) -> str:
        return f"Error with options to with_retries: {self.message}"


class TransientError(RetriesError):
    """A failure the caller expects to go away on its own. Always retryable."""

    def __init__(self, message: str = "Transient failure", **kwargs):
        super().__init__(message, retryable=True, **kwargs)


class PermanentError(RetriesError):
    """A failure that retrying cannot fix. Not retryable."""

    def __init__(self, message: str = "Permanent failure", **kwargs):
        super().__init__(message, retryable=False, **kwargs)
