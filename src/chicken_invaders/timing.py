"""
Frame timing helpers: deferred one-shot callbacks and a fixed-step clock.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from mini_arcade_core.utils import logger


@dataclass(order=True)
class _Deferred:
    due: float
    seq: int
    callback: Callable[..., Any] = field(compare=False)
    args: tuple = field(compare=False, default=())


class DeferredCalls:
    """
    One-shot callbacks run after a delay, polled from the frame loop.

    Nothing here runs on its own: ``run_due(now)`` is called once per tick
    with the current time in milliseconds and fires everything that is due,
    oldest first.
    """

    def __init__(self):
        self._pending: list[_Deferred] = []
        self._seq = 0

    def __len__(self) -> int:
        return len(self._pending)

    def call_later(
        self, now: float, delay: float, callback: Callable[..., Any], *args
    ) -> None:
        """
        Schedule ``callback(*args)`` to run ``delay`` ms after ``now``.
        """
        self._seq += 1
        self._pending.append(_Deferred(now + delay, self._seq, callback, args))
        self._pending.sort()
        logger.debug(f"Deferred {callback.__name__} by {delay} ms")

    def run_due(self, now: float) -> int:
        """
        Run every callback whose due time has been reached.

        :param now: Current time in milliseconds.
        :type now: float

        :return: Number of callbacks fired.
        :rtype: int
        """
        fired = 0
        while self._pending and self._pending[0].due <= now:
            deferred = self._pending.pop(0)
            deferred.callback(*deferred.args)
            fired += 1
        return fired


class FixedTimestep:
    """
    Converts wall-clock frame times into a whole number of simulation steps.

    Movement speeds are tuned in units per step, so the app advances the
    world ``steps(elapsed)`` times per display frame instead of once.
    """

    def __init__(self, steps_per_second: int, max_steps: int = 5):
        if steps_per_second <= 0:
            raise ValueError("steps_per_second must be positive")
        self.step_ms = 1000.0 / steps_per_second
        self.max_steps = max_steps
        self._accumulator = 0.0

    def steps(self, elapsed_ms: float) -> int:
        """
        Add ``elapsed_ms`` to the accumulator and return how many steps to run.

        Anything beyond ``max_steps`` is dropped so a long stall does not
        turn into a burst of catch-up frames.
        """
        self._accumulator += elapsed_ms
        count = int(self._accumulator // self.step_ms)
        self._accumulator -= count * self.step_ms
        if count > self.max_steps:
            logger.debug(f"Dropping {count - self.max_steps} late steps")
            count = self.max_steps
            self._accumulator = 0.0
        return count
