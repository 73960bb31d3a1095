"""
Backoff calculation, retry executors and decorators.
"""

import functools
import inspect
import logging
import random
from typing import Any, Awaitable, Callable, ParamSpec, TypeVar

from .config import RetryConfig
from .sleeper import Sleeper, get_default_sleeper
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


def calculate_backoff(
    attempts: int,
    config: RetryConfig,
    rand: Callable[[], float] = random.random,
) -> float:
    """
    Calculate the delay before the next attempt.

    Args:
        attempts: Number of attempts already made (1 after the first failure)
        config: Retry configuration
        rand: Source of uniform values in [0, 1)

    Returns:
        Delay in seconds, between max(base_delay, capped / 2) and capped,
        where capped = min(base_delay * 2 ** (attempts - 1), max_delay)
    """
    delay = min(config.base_delay * (2 ** (attempts - 1)), config.max_delay)

    # Randomize into delay/2 .. delay
    delay *= 0.5 * (1 + rand())

    # Never less than the base delay
    return max(config.base_delay, delay)


def with_retries(
    operation: Callable[..., T] | None = None,
    config: RetryConfig | None = None,
    *,
    sleeper: Sleeper | None = None,
    **options: Any,
) -> T:
    """
    Run `operation`, retrying it with exponential backoff on failure.

    Args:
        operation: Callable taking no arguments or the 1-based attempt number
        config: Retry configuration (default: built from `options`)
        sleeper: Clock and pause provider (default: the process-wide sleeper)
        **options: max_tries, base_sleep_seconds, max_sleep_seconds, handler,
            rescue; only allowed without `config`

    Returns:
        Whatever `operation` returns on its first successful attempt

    Raises:
        ConfigurationError: Before any attempt, if the options are invalid.
        Exception: The last failure, unchanged, once it is not retryable or
            the attempts are used up.
    """
    config = _resolve_config(config, options)
    call = _bind_attempt(operation)
    sleeper = sleeper or get_default_sleeper()

    attempts = 0
    start_time = sleeper.now()
    while True:
        attempts += 1
        try:
            return call(attempts)
        except config.rescue as e:
            if not _should_retry(e, attempts, config):
                raise
            delay = _prepare_retry(e, attempts, start_time, config, sleeper)
            if not sleeper.sleep(delay):
                logger.info(f"Retry pause interrupted after attempt {attempts}: {e}")
                raise


async def async_with_retries(
    operation: Callable[..., Awaitable[T]] | None = None,
    config: RetryConfig | None = None,
    *,
    sleeper: Sleeper | None = None,
    **options: Any,
) -> T:
    """
    Async counterpart of `with_retries` for coroutine functions.

    Pauses with `asyncio.sleep`, so cancelling the task interrupts a pending
    backoff. The `handler`/`on_retry` callback stays synchronous.
    """
    config = _resolve_config(config, options)
    call = _bind_attempt(operation)
    sleeper = sleeper or get_default_sleeper()

    attempts = 0
    start_time = sleeper.now()
    while True:
        attempts += 1
        try:
            pending = call(attempts)
            if not inspect.isawaitable(pending):
                raise ConfigurationError(
                    "async_with_retries must be passed a coroutine function.",
                    field="operation",
                )
            return await pending
        except config.rescue as e:
            if not _should_retry(e, attempts, config):
                raise
            delay = _prepare_retry(e, attempts, start_time, config, sleeper)
            if not await sleeper.async_sleep(delay):
                logger.info(f"Retry pause interrupted after attempt {attempts}: {e}")
                raise


def retrying(
    config: RetryConfig | None = None,
    *,
    sleeper: Sleeper | None = None,
    **options: Any,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Decorator for synchronous functions with retry logic.

    Args:
        config: Retry configuration (default: built from `options`)
        sleeper: Clock and pause provider (default: the process-wide sleeper)
        **options: Same keyword options as `with_retries`

    Returns:
        Decorated function with retry behavior
    """
    config = _resolve_config(config, options)

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return with_retries(lambda: func(*args, **kwargs), config, sleeper=sleeper)

        return wrapper

    return decorator


def async_retrying(
    config: RetryConfig | None = None,
    *,
    sleeper: Sleeper | None = None,
    **options: Any,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Decorator for async functions with retry logic."""
    config = _resolve_config(config, options)

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return await async_with_retries(
                lambda: func(*args, **kwargs), config, sleeper=sleeper
            )

        return wrapper

    return decorator


def _resolve_config(config: RetryConfig | None, options: dict) -> RetryConfig:
    if config is None:
        return RetryConfig.from_options(**options)
    if options:
        raise ConfigurationError(
            "pass either a RetryConfig or keyword options, not both.", field="config"
        )
    if not isinstance(config, RetryConfig):
        raise ConfigurationError("config must be a RetryConfig.", field="config")
    return config


def _bind_attempt(operation: Callable[..., T] | None) -> Callable[[int], T]:
    """Adapt `operation` so it can always be called with the attempt number."""
    if operation is None or not callable(operation):
        raise ConfigurationError(
            "with_retries must be passed a callable.", field="operation"
        )
    try:
        inspect.signature(operation).bind(1)
    except TypeError:
        return lambda attempt: operation()
    except ValueError:
        # No introspectable signature; assume it takes the attempt number.
        pass
    return operation


def _should_retry(error: BaseException, attempts: int, config: RetryConfig) -> bool:
    if not config.is_retryable(error):
        logger.debug(f"Not retrying {type(error).__name__}: {error}")
        return False
    if attempts >= config.max_tries:
        if config.max_tries > 1:
            logger.error(f"All {config.max_tries} attempts failed: {error}")
        return False
    return True


def _prepare_retry(
    error: BaseException,
    attempts: int,
    start_time: float,
    config: RetryConfig,
    sleeper: Sleeper,
) -> float:
    """Notify the handler (or log) and return the delay before the next attempt."""
    if config.on_retry:
        config.on_retry(error, attempts, sleeper.now() - start_time)
    delay = calculate_backoff(attempts, config)
    if not config.on_retry:
        logger.warning(
            f"Retry {attempts}/{config.max_tries - 1}: {error}, "
            f"waiting {delay:.2f}s"
        )
    return delay
