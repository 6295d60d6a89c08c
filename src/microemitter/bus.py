"""
Shared emitter holder.

`EventBus` is a plain object: build one per application (or per test) and pass
it to the components that need to talk to each other. `get_instance()` and
`reset()` at module level work on a single process-default bus that is only
created the first time it is asked for.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from .emitter import DEFAULT_MAX_LISTENERS, Emitter

logger = logging.getLogger(__name__)


class EventBus:
    """
    Holds at most one Emitter, created on first use.
    """

    def __init__(self, *, max_listeners: int = DEFAULT_MAX_LISTENERS) -> None:
        self._lock = threading.Lock()
        self._max_listeners = max_listeners
        self._instance: Optional[Emitter] = None

    def get_instance(self) -> Emitter:
        """Return the shared Emitter, creating it if needed."""
        with self._lock:
            if self._instance is None:
                self._instance = Emitter(max_listeners=self._max_listeners)
                logger.debug("Created emitter for %r", self)
            return self._instance

    def reset(self) -> None:
        """Drop the shared Emitter and its handlers. The next get_instance() builds a new one."""
        with self._lock:
            instance, self._instance = self._instance, None
        if instance is not None:
            instance.remove_all_listeners()
            logger.debug("Reset emitter for %r", self)


_default_bus: Optional[EventBus] = None
_default_lock = threading.Lock()


def default_bus() -> EventBus:
    """Return the process-default EventBus, creating it on first call."""
    global _default_bus  # pylint: disable=global-statement
    with _default_lock:
        if _default_bus is None:
            _default_bus = EventBus()
        return _default_bus


def get_instance() -> Emitter:
    """Return the process-wide Emitter."""
    return default_bus().get_instance()


def reset() -> None:
    """Discard the process-wide Emitter."""
    default_bus().reset()
