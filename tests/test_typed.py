"""Tests for TypedEmitter."""

import asyncio
from typing import TypedDict

import pytest

from microemitter import EmitError, Emitter, TypedEmitter


class ShopEvents(TypedDict):
    order_placed: dict
    order_cancelled: str


def test_typed_emitter_owns_fresh_emitter():
    """Test that a TypedEmitter builds its own Emitter."""
    shop: TypedEmitter[ShopEvents] = TypedEmitter(max_listeners=4)
    assert isinstance(shop.emitter, Emitter)
    assert shop.get_max_listeners() == 4
    assert TypedEmitter().emitter is not shop.emitter


def test_typed_emitter_delegates_registration():
    """Test that registrations land on the wrapped emitter."""
    inner = Emitter()
    shop: TypedEmitter[ShopEvents] = TypedEmitter(inner)
    out = []

    def on_cancel(order_id):
        out.append(order_id)

    shop.on("order_cancelled", on_cancel)
    shop.once("order_placed", out.append)

    assert inner.listeners("order_cancelled") == [on_cancel]
    assert shop.listener_count("order_placed") == 1
    assert shop.event_names() == ["order_cancelled", "order_placed"]
    assert [e.once for e in shop.raw_listeners("order_placed")] == [True]

    shop.emit_sync("order_cancelled", "A-1")
    shop.emit_sync("order_placed", {"id": "A-2"})
    shop.emit_sync("order_placed", {"id": "A-3"})
    assert out == ["A-1", {"id": "A-2"}]

    assert shop.remove_listener("order_cancelled", on_cancel) == 1
    assert shop.listeners("order_cancelled") == []


def test_typed_emitter_prepend_and_remove_all():
    """Test prepend and remove_all on the typed view."""
    shop: TypedEmitter[ShopEvents] = TypedEmitter()
    out = []

    shop.add_listener("order_cancelled", lambda p: out.append("second"))
    shop.prepend_listener("order_cancelled", lambda p: out.append("first"))
    shop.prepend_once_listener("order_cancelled", lambda p: out.append("zeroth"))

    shop.emit_sync("order_cancelled", "x")
    assert out == ["zeroth", "first", "second"]

    shop.remove_all_listeners("order_cancelled")
    assert shop.listener_count("order_cancelled") == 0
    shop.set_max_listeners(1)
    assert shop.emitter.get_max_listeners() == 1


def test_typed_emitter_has_no_runtime_validation():
    """Test that payloads are forwarded without checks."""
    shop: TypedEmitter[ShopEvents] = TypedEmitter()
    out = []

    @shop.receiver("order_cancelled")
    def handler(p):
        out.append(p)

    shop.emit_sync("order_cancelled", 123)
    shop.emit_sync("not_in_schema", "ignored")
    assert out == [123]
    assert shop.off("order_cancelled", handler) == 1


@pytest.mark.asyncio
async def test_typed_emitter_emit_awaits_and_raises():
    """Test that emit keeps the await and error semantics of Emitter."""
    shop: TypedEmitter[ShopEvents] = TypedEmitter()
    out = []

    async def slow(p):
        await asyncio.sleep(0.01)
        out.append(p)

    def failing(p):
        raise ValueError(p)

    shop.on("order_cancelled", failing)
    shop.on("order_cancelled", slow)

    with pytest.raises(EmitError):
        await shop.emit("order_cancelled", "A-9")
    assert out == ["A-9"]
