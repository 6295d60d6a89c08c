"""
Microemitter
------------

In-process publish/subscribe for Python with sync + async handlers.

Features:

- `Emitter` with `on()`, `once()`, `off()`, `listeners()`, `listener_count()`, ...
- `emit(event, payload)` is **async**: calls handlers in registration order and
  awaits whatever async work they return before completing.
- A failing handler never stops the others; failures are raised afterwards as `EmitError`.
- Soft `max_listeners` cap per event name, reported through `logging`.
- `TypedEmitter` for annotating event names and payloads.
- `EventBus` / `get_instance()` / `reset()` for a shared emitter.
- MIT licensed. No dependencies.
"""

from .bus import EventBus, get_instance, reset
from .core import (
    emit,
    emit_sync,
    listener_count,
    listeners,
    off,
    on,
    once,
    receiver,
    remove_all_listeners,
)
from .emitter import DEFAULT_MAX_LISTENERS, Emitter, HandlerEntry
from .errors import EmitError, MicroEmitterError
from .typed import TypedEmitter

__all__ = [
    "DEFAULT_MAX_LISTENERS",
    "Emitter",
    "HandlerEntry",
    "TypedEmitter",
    "EventBus",
    "get_instance",
    "reset",
    "EmitError",
    "MicroEmitterError",
    "receiver",
    "emit",
    "emit_sync",
    "on",
    "once",
    "off",
    "remove_all_listeners",
    "listeners",
    "listener_count",
]
