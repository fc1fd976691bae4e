"""Pointer and resize events flowing from the host into the engine."""
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable, Dict, List, Optional, Tuple

LOG = logging.getLogger("hexdrift.interaction")

POINTER_MOVE = "pointermove"
POINTER_LEAVE = "pointerleave"
RESIZE = "resize"

Listener = Callable[..., None]


class EventSource:
    """Minimal listener registry the host emits window events through."""

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)

    def add_listener(self, kind: str, listener: Listener) -> None:
        if listener not in self._listeners[kind]:
            self._listeners[kind].append(listener)

    def remove_listener(self, kind: str, listener: Listener) -> None:
        listeners = self._listeners.get(kind)
        if listeners and listener in listeners:
            listeners.remove(listener)

    def listener_count(self, kind: Optional[str] = None) -> int:
        if kind is not None:
            return len(self._listeners.get(kind, ()))
        return sum(len(v) for v in self._listeners.values())

    def emit(self, kind: str, *args) -> None:
        for listener in list(self._listeners.get(kind, ())):
            listener(*args)


class InteractionAdapter:
    """Maps window-space events onto an engine.

    ``origin`` is the canvas position inside the window, so window
    coordinates become canvas coordinates before reaching the engine.
    """

    def __init__(self, engine, origin: Tuple[float, float] = (0.0, 0.0)) -> None:
        self.engine = engine
        self.origin = origin
        self._source: Optional[EventSource] = None

    @property
    def attached(self) -> bool:
        return self._source is not None

    def attach(self, source: EventSource) -> None:
        if self._source is source:
            return
        self.detach()
        source.add_listener(POINTER_MOVE, self.on_pointer_move)
        source.add_listener(POINTER_LEAVE, self.on_pointer_leave)
        source.add_listener(RESIZE, self.on_resize)
        self._source = source

    def detach(self) -> None:
        if self._source is None:
            return
        self._source.remove_listener(POINTER_MOVE, self.on_pointer_move)
        self._source.remove_listener(POINTER_LEAVE, self.on_pointer_leave)
        self._source.remove_listener(RESIZE, self.on_resize)
        self._source = None

    def on_pointer_move(self, x: float, y: float) -> None:
        self.engine.pointer_move(x - self.origin[0], y - self.origin[1])

    def on_pointer_leave(self) -> None:
        self.engine.pointer_leave()

    def on_resize(self, width: float, height: float) -> None:
        LOG.debug("Container resized to %sx%s", width, height)
        self.engine.resize(width, height)


__all__ = [
    "POINTER_MOVE",
    "POINTER_LEAVE",
    "RESIZE",
    "EventSource",
    "InteractionAdapter",
]
