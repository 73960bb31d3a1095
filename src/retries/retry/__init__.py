"""
Retries - Retry Logic.

Exponential backoff with jitter, an injectable sleeper, and sync/async executors.
"""

from .config import RetryConfig
from .sleeper import Sleeper, get_default_sleeper, is_sleep_enabled, set_sleep_enabled
from .backoff import (
    calculate_backoff,
    with_retries,
    async_with_retries,
    retrying,
    async_retrying,
)

__all__ = [
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
