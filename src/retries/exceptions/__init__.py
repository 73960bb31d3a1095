"""
Retries - Exception Hierarchy.

Configuration errors and retry-aware operation failures.
"""

from .base import (
    RetriesError,
    ConfigurationError,
    TransientError,
    PermanentError,
)

__all__ = [
    "RetriesError",
    "ConfigurationError",
    "TransientError",
    "PermanentError",
]
