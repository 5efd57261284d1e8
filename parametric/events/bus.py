"""
Notification Bus

Synchronous in-process publish/subscribe. Listeners run on the caller's
thread of control, in registration order, each one guarded independently.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import structlog

from parametric.events.types import EventType

logger = structlog.get_logger()

Listener = Callable[..., Any]


def _event_name(event: EventType | str) -> str:
    return event.value if isinstance(event, EventType) else str(event)


class NotificationBus:
    """
    Event name -> ordered listener list.

    Emission iterates over a copy of the listener list taken when `emit` is
    called. Listeners that register or remove listeners, or mutate the
    registry that emitted, do so at their own risk: other listeners of the
    same emission may observe the intermediate state.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def on(self, event: EventType | str, listener: Listener) -> None:
        self._listeners.setdefault(_event_name(event), []).append(listener)

    def off(self, event: EventType | str, listener: Listener) -> None:
        """Remove the first registration equal to `listener`."""
        name = _event_name(event)
        listeners = self._listeners.get(name)
        if not listeners:
            return
        for index, registered in enumerate(listeners):
            if registered == listener:
                del listeners[index]
                break
        if not listeners:
            del self._listeners[name]

    def emit(self, event: EventType | str, *args: Any) -> None:
        name = _event_name(event)
        listeners = self._listeners.get(name)
        if not listeners:
            return
        for listener in list(listeners):
            try:
                listener(*args)
            except Exception as exc:
                logger.warning(
                    "Event listener failed",
                    event_name=name,
                    listener=getattr(listener, "__qualname__", repr(listener)),
                    error=str(exc),
                    exc_info=True,
                )

    def listener_count(self, event: EventType | str) -> int:
        return len(self._listeners.get(_event_name(event), ()))

    def clear(self) -> None:
        self._listeners.clear()
