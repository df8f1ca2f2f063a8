"""Application scheduler – Timer port and asyncio implementation."""
from __future__ import annotations

import asyncio
from typing import Callable, Protocol, runtime_checkable

__all__ = ["AsyncioTimer", "Timer", "TimerHandle"]


@runtime_checkable
class TimerHandle(Protocol):
    """A pending delayed call that can be cancelled."""

    def cancel(self) -> None: ...


@runtime_checkable
class Timer(Protocol):
    """Port: schedule a callback after *delay* seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioTimer:
    """Timer backed by the running event loop's ``call_later``."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        loop = asyncio.get_running_loop()
        return loop.call_later(delay, callback)
