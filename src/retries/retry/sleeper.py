"""
Clock and pause handling for the retry loop.

A `Sleeper` owns the clock used to measure elapsed time and performs the
pauses between attempts. Disabling it skips the pauses while the rest of the
retry logic runs unchanged, which keeps tests fast and deterministic.
"""

import asyncio
import threading
import time

from ..exceptions import ConfigurationError


class Sleeper:
    """Monotonic clock plus interruptible pauses."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._interrupted = threading.Event()

    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> bool:
        """
        Block the calling thread for `seconds`.

        Returns:
            False if the pause was interrupted by `cancel()`, True otherwise
        """
        if not self.enabled:
            return True
        return not self._interrupted.wait(seconds)

    async def async_sleep(self, seconds: float) -> bool:
        """
        Pause the current task. Cancelling the task interrupts the pause.

        Returns:
            False if `cancel()` was called before or during the pause, True otherwise
        """
        if not self.enabled:
            return True
        if self._interrupted.is_set():
            return False
        await asyncio.sleep(seconds)
        return not self._interrupted.is_set()

    def cancel(self) -> None:
        """
        Wake pending pauses and make later ones return immediately.

        Only for sleepers passed explicitly to an executor; the process-wide
        default sleeper is shared by every call and cannot be cancelled.
        """
        if self is _default_sleeper:
            raise ConfigurationError(
                "the default sleeper cannot be cancelled; pass your own Sleeper.",
                field="sleeper",
            )
        self._interrupted.set()

    def reset(self) -> None:
        self._interrupted.clear()

    @property
    def cancelled(self) -> bool:
        return self._interrupted.is_set()


_default_sleeper = Sleeper()


def get_default_sleeper() -> Sleeper:
    """Return the process-wide sleeper used when none is passed explicitly."""
    return _default_sleeper


def is_sleep_enabled() -> bool:
    return _default_sleeper.enabled


def set_sleep_enabled(enabled: bool) -> None:
    """
    Turn pausing on or off for every retry that uses the default sleeper.

    Meant for test setup/teardown; do not flip it while retries are running.
    """
    _default_sleeper.enabled = enabled
