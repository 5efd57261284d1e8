"""
Notification Module

Synchronous publish/subscribe used by the registry and plugin loader for
observability and cross-component decoupling.
"""

from parametric.events.bus import Listener, NotificationBus
from parametric.events.types import EventType

__all__ = [
    "EventType",
    "Listener",
    "NotificationBus",
]
