"""
Retries - Run a block of code with retries and exponential backoff.

Retry a callable a bounded number of times, sleeping with jittered
exponential backoff between attempts.
"""

from .exceptions import (
    RetriesError,
    ConfigurationError,
    TransientError,
    PermanentError,
)
from .retry import (
    RetryConfig,
    Sleeper,
    get_default_sleeper,
    is_sleep_enabled,
    set_sleep_enabled,
    calculate_backoff,
    with_retries,
    async_with_retries,
    retrying,
    async_retrying,
)

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "RetriesError",
    "ConfigurationError",
    "TransientError",
    "PermanentError",
    # Retry
    "RetryConfig",
    "Sleeper",
    "get_default_sleeper",
    "is_sleep_enabled",
    "set_sleep_enabled",
    "calculate_backoff",
    "with_retries",
    "async_with_retries",
    "retrying",
    "async_retrying",
]
