"""
Turn scheduling - cancellable "next turn" timers
"""
import asyncio
from typing import Any, Callable, Optional, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


# (delay_seconds, callback) -> handle with .cancel()
Scheduler = Callable[[float, Callable[[], Any]], TimerHandle]


class TurnScheduler:
    """Default scheduler backed by the running event loop's call_later"""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], Any]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)

    __call__ = call_later
