"""Application scheduler – cancellable timers and debouncing."""
from vegadmin.application.scheduler.debounce import Debouncer
from vegadmin.application.scheduler.timer import AsyncioTimer, Timer, TimerHandle

__all__ = ["AsyncioTimer", "Debouncer", "Timer", "TimerHandle"]
