"""Application scheduler – Debouncer."""
from __future__ import annotations

from typing import Callable

from vegadmin.application.scheduler.timer import Timer, TimerHandle

__all__ = ["Debouncer"]


class Debouncer:
    """Delay a callback until *delay* seconds pass without another trigger.

    Holds at most one pending timer handle; every :meth:`trigger` cancels the
    previous one before arming a new one.
    """

    def __init__(self, timer: Timer, delay: float) -> None:
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self._timer = timer
        self._delay = delay
        self._handle: TimerHandle | None = None

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self, callback: Callable[[], None]) -> None:
        self.cancel()

        def _fire() -> None:
            self._handle = None
            callback()

        self._handle = self._timer.call_later(self._delay, _fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
