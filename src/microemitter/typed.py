"""
Typed view over an Emitter.

`EventsT` is meant to be a `TypedDict` mapping event names to payload types.
It only documents intent for readers and type checkers; nothing is
validated at runtime and every call is forwarded unchanged.

Example:

    class ShopEvents(TypedDict):
        order_placed: Order
        order_cancelled: str

    shop: TypedEmitter[ShopEvents] = TypedEmitter()
    shop.on("order_placed", notify_warehouse)
"""

from __future__ import annotations

from typing import Any, Generic, List, Optional, TypeVar

from .emitter import DEFAULT_MAX_LISTENERS, Emitter, HandlerEntry, HandlerFunc

EventsT = TypeVar("EventsT")


class TypedEmitter(Generic[EventsT]):
    """Delegates every operation to the Emitter it owns."""

    def __init__(
        self,
        emitter: Optional[Emitter] = None,
        *,
        max_listeners: int = DEFAULT_MAX_LISTENERS,
    ) -> None:
        self._emitter = emitter if emitter is not None else Emitter(max_listeners=max_listeners)

    @property
    def emitter(self) -> Emitter:
        return self._emitter

    def on(self, event: str, handler: HandlerFunc) -> None:
        self._emitter.on(event, handler)

    def once(self, event: str, handler: HandlerFunc) -> None:
        self._emitter.once(event, handler)

    def prepend_listener(self, event: str, handler: HandlerFunc) -> None:
        self._emitter.prepend_listener(event, handler)

    def prepend_once_listener(self, event: str, handler: HandlerFunc) -> None:
        self._emitter.prepend_once_listener(event, handler)

    def off(self, event: str, handler: HandlerFunc) -> int:
        return self._emitter.off(event, handler)

    add_listener = on
    remove_listener = off

    def remove_all_listeners(self, event: Optional[str] = None) -> None:
        self._emitter.remove_all_listeners(event)

    def listener_count(self, event: str) -> int:
        return self._emitter.listener_count(event)

    def event_names(self) -> List[str]:
        return self._emitter.event_names()

    def listeners(self, event: str) -> List[HandlerFunc]:
        return self._emitter.listeners(event)

    def raw_listeners(self, event: str) -> List[HandlerEntry]:
        return self._emitter.raw_listeners(event)

    def set_max_listeners(self, n: int) -> None:
        self._emitter.set_max_listeners(n)

    def get_max_listeners(self) -> int:
        return self._emitter.get_max_listeners()

    def receiver(self, event: str, *, once: bool = False):
        return self._emitter.receiver(event, once=once)

    async def emit(self, event: str, payload: Any = None) -> None:
        await self._emitter.emit(event, payload)

    def emit_sync(self, event: str, payload: Any = None):
        return self._emitter.emit_sync(event, payload)
