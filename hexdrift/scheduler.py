"""Frame callback scheduling.

The host loop owns a :class:`FrameScheduler` and calls :meth:`dispatch`
once per display refresh. Anything that wants a frame requests one, and
must request again from inside its callback to keep animating, so stopping
is just not asking again (plus cancelling whatever is already queued).
"""
from __future__ import annotations

from collections import OrderedDict
from typing import Callable, Optional

FrameCallback = Callable[[float], None]


class FrameScheduler:
    def __init__(self) -> None:
        self._callbacks: "OrderedDict[int, FrameCallback]" = OrderedDict()
        self._next_handle = 1

    @property
    def pending(self) -> int:
        return len(self._callbacks)

    def request(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._callbacks[handle] = callback
        return handle

    def cancel(self, handle: Optional[int]) -> None:
        if handle is not None:
            self._callbacks.pop(handle, None)

    def dispatch(self, timestamp: float) -> int:
        """Run callbacks queued before this call; return how many ran.

        Callbacks requested while dispatching wait for the next dispatch.
        """
        due = list(self._callbacks.items())
        self._callbacks.clear()
        for _handle, callback in due:
            callback(timestamp)
        return len(due)


class FrameTask:
    """A self-rescheduling frame callback with explicit start/stop."""

    def __init__(self, scheduler: FrameScheduler, callback: FrameCallback) -> None:
        self.scheduler = scheduler
        self.callback = callback
        self._handle: Optional[int] = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._handle = self.scheduler.request(self._tick)

    def stop(self) -> None:
        if not self._running and self._handle is None:
            return
        self._running = False
        self.scheduler.cancel(self._handle)
        self._handle = None

    def _tick(self, timestamp: float) -> None:
        self._handle = None
        if not self._running:
            return
        try:
            self.callback(timestamp)
        finally:
            if self._running:
                self._handle = self.scheduler.request(self._tick)


__all__ = ["FrameCallback", "FrameScheduler", "FrameTask"]
