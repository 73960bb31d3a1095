"""
Retry configuration and validation.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Tuple, Type

from ..exceptions import ConfigurationError

RetryHandler = Callable[[BaseException, int, float], Any]

# Original option names accepted by `from_options`, mapped to dataclass fields.
OPTION_NAMES = {
    "max_tries": "max_tries",
    "base_sleep_seconds": "base_delay",
    "max_sleep_seconds": "max_delay",
    "handler": "on_retry",
    "rescue": "rescue",
}


@dataclass
class RetryConfig:
    """
    Configuration for retry behavior.

    Attributes:
        max_tries: Maximum number of times to run the operation (default: 3)
        base_delay: Starting delay between retries, in seconds (default: 0.5)
        max_delay: Ceiling the delay may grow to, in seconds (default: 1.0)
        rescue: Exception class, or collection of classes, to retry on
            (default: Exception)
        on_retry: Optional callback(exception, attempt_number, elapsed_seconds)
            called before each retry

    Raises:
        ConfigurationError: If any option is invalid.
    """

    max_tries: int = 3
    base_delay: float = 0.5
    max_delay: float = 1.0
    rescue: Tuple[Type[BaseException], ...] = field(default=(Exception,))
    on_retry: RetryHandler | None = None

    def __post_init__(self) -> None:
        if (
            isinstance(self.max_tries, bool)
            or not isinstance(self.max_tries, int)
            or self.max_tries <= 0
        ):
            raise ConfigurationError(
                ":max_tries must be greater than 0.", field="max_tries"
            )
        if self.base_delay < 0:
            raise ConfigurationError(
                ":base_sleep_seconds cannot be negative.", field="base_delay"
            )
        if self.base_delay > self.max_delay:
            raise ConfigurationError(
                ":base_sleep_seconds cannot be greater than :max_sleep_seconds.",
                field="base_delay",
            )
        self.rescue = _normalize_rescue(self.rescue)
        if self.on_retry is not None and not callable(self.on_retry):
            raise ConfigurationError(":handler must be callable.", field="on_retry")

    def is_retryable(self, error: BaseException) -> bool:
        """Check if the given exception should trigger a retry."""
        if not isinstance(error, self.rescue):
            return False
        return getattr(error, "retryable", True) is not False

    @classmethod
    def from_options(cls, **options: Any) -> "RetryConfig":
        """Build a config from the original option names (max_tries, handler, ...)."""
        kwargs = {}
        for name, value in options.items():
            if name not in OPTION_NAMES:
                raise ConfigurationError(f"unknown option :{name}.", field=name)
            if value is not None:
                kwargs[OPTION_NAMES[name]] = value
        return cls(**kwargs)

    @classmethod
    def aggressive(cls) -> "RetryConfig":
        """Preset for aggressive retry (more attempts, longer delays)."""
        return cls(
            max_tries=10,
            base_delay=1.0,
            max_delay=30.0,
        )

    @classmethod
    def conservative(cls) -> "RetryConfig":
        """One quick retry, for calls where the caller would rather fail fast."""
        return cls(
            max_tries=2,
            base_delay=0.25,
            max_delay=0.5,
        )

    @classmethod
    def no_retry(cls) -> "RetryConfig":
        """Preset for no retry (single attempt only)."""
        return cls(max_tries=1)


def _normalize_rescue(rescue: Any) -> Tuple[Type[BaseException], ...]:
    if isinstance(rescue, type):
        rescue = (rescue,)
    elif isinstance(rescue, (list, tuple, set, frozenset)):
        rescue = tuple(rescue)
    else:
        raise ConfigurationError(
            ":rescue must be an exception class or a collection of them.",
            field="rescue",
        )
    if not rescue or not all(
        isinstance(kind, type) and issubclass(kind, BaseException) for kind in rescue
    ):
        raise ConfigurationError(
            ":rescue must only contain exception classes.", field="rescue"
        )
    return rescue
