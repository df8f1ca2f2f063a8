"""Unit tests – Debouncer and timers."""
from __future__ import annotations

import asyncio

import pytest

from vegadmin.application.scheduler import AsyncioTimer, Debouncer, Timer
from vegadmin.testing.fakes import ManualTimer


class TestManualTimer:
    def test_fires_only_when_due(self):
        timer = ManualTimer()
        fired: list[str] = []
        timer.call_later(0.3, lambda: fired.append("a"))
        assert timer.advance(0.2) == 0
        assert fired == []
        assert timer.advance(0.2) == 1
        assert fired == ["a"]
        assert timer.pending == []

    def test_cancelled_handle_never_fires(self):
        timer = ManualTimer()
        fired: list[str] = []
        handle = timer.call_later(0.1, lambda: fired.append("a"))
        handle.cancel()
        timer.advance(1.0)
        assert fired == []

    def test_satisfies_timer_protocol(self):
        assert isinstance(ManualTimer(), Timer)


class TestDebouncer:
    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError):
            Debouncer(ManualTimer(), -0.1)

    def test_single_trigger_fires_after_delay(self):
        timer = ManualTimer()
        debouncer = Debouncer(timer, 0.3)
        fired: list[int] = []
        debouncer.trigger(lambda: fired.append(1))
        assert debouncer.pending is True
        timer.advance(0.31)
        assert fired == [1]
        assert debouncer.pending is False

    def test_retrigger_restarts_quiet_period(self):
        timer = ManualTimer()
        debouncer = Debouncer(timer, 0.3)
        fired: list[str] = []
        debouncer.trigger(lambda: fired.append("first"))
        timer.advance(0.2)
        debouncer.trigger(lambda: fired.append("second"))
        timer.advance(0.2)
        assert fired == []
        timer.advance(0.2)
        assert fired == ["second"]

    def test_at_most_one_pending_handle(self):
        timer = ManualTimer()
        debouncer = Debouncer(timer, 0.3)
        for _ in range(5):
            debouncer.trigger(lambda: None)
        assert len(timer.pending) == 1

    def test_cancel(self):
        timer = ManualTimer()
        debouncer = Debouncer(timer, 0.3)
        fired: list[int] = []
        debouncer.trigger(lambda: fired.append(1))
        debouncer.cancel()
        timer.advance(1.0)
        assert fired == []
        assert debouncer.pending is False


class TestAsyncioTimer:
    def test_debounce_on_real_loop(self):
        async def run() -> list[str]:
            fired: list[str] = []
            debouncer = Debouncer(AsyncioTimer(), 0.01)
            debouncer.trigger(lambda: fired.append("a"))
            debouncer.trigger(lambda: fired.append("b"))
            await asyncio.sleep(0.05)
            return fired

        assert asyncio.run(run()) == ["b"]

    def test_requires_running_loop(self):
        with pytest.raises(RuntimeError):
            AsyncioTimer().call_later(0.1, lambda: None)
