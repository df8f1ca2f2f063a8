"""Testing fakes – ManualTimer driven by virtual time."""
from __future__ import annotations

from typing import Callable

__all__ = ["ManualTimer", "ManualTimerHandle"]


class ManualTimerHandle:
    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualTimer:
    """Timer whose callbacks only run when the test calls :meth:`advance`."""

    def __init__(self) -> None:
        self._now = 0.0
        self._handles: list[ManualTimerHandle] = []

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> list[ManualTimerHandle]:
        return [h for h in self._handles if not h.cancelled and not h.fired]

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimerHandle:
        handle = ManualTimerHandle(self._now + delay, callback)
        self._handles.append(handle)
        return handle

    def advance(self, seconds: float) -> int:
        """Move virtual time forward and fire every due callback; returns the count fired."""
        self._now += seconds
        due = sorted((h for h in self.pending if h.when <= self._now), key=lambda h: h.when)
        fired = 0
        for handle in due:
            if handle.cancelled:
                continue
            handle.fired = True
            handle.callback()
            fired += 1
        self._handles = self.pending
        return fired
