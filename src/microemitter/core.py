"""
microemitter.core
-----------------

Module-level shortcuts to the process-wide emitter (`microemitter.bus.get_instance()`).
Each call resolves the emitter at call time, so they follow `reset()`.
"""

from typing import Any, Callable, List, Optional

from .bus import get_instance
from .emitter import HandlerFunc, _SupportsPayloadSignature


# Registration
def on(event: str, handler: _SupportsPayloadSignature) -> None:
    """
    Register a handler for an event on the process-wide emitter.
    Handlers run in registration order.

    Args:
        event (str): The event to register the handler for.
        handler (_SupportsPayloadSignature): The handler to register.
    """
    get_instance().on(event, handler)


def once(event: str, handler: _SupportsPayloadSignature) -> None:
    """
    Register a handler that runs on the next dispatch of `event` only.
    """
    get_instance().once(event, handler)


def off(event: str, handler: HandlerFunc) -> int:
    """
    Unregister `handler` from `event`.
    Returns the number of removed registrations.

    Args:
        event (str): The event to unregister the handler from.
        handler (HandlerFunc): The handler to unregister.

    Returns:
        int: The number of removed registrations.
    """
    return get_instance().off(event, handler)


def remove_all_listeners(event: Optional[str] = None) -> None:
    """Remove the handlers of `event`, or of every event if omitted."""
    get_instance().remove_all_listeners(event)


def listeners(event: str) -> List[HandlerFunc]:
    """
    Return a copy of the functions registered for `event`, in dispatch order.

    Args:
        event (str): The event to list handlers for.

    Returns:
        List[HandlerFunc]: The registered functions.
    """
    return get_instance().listeners(event)


def listener_count(event: str) -> int:
    """
    Return the number of handlers registered for `event`.

    Args:
        event (str): The event to count handlers for.

    Returns:
        int: The number of handlers, 0 for unknown events.
    """
    return get_instance().listener_count(event)


# Decorator
def receiver(
    event: str, *, once: bool = False  # pylint: disable=redefined-outer-name
) -> Callable[[HandlerFunc], HandlerFunc]:
    """
    Decorator to register a function as a handler for `event`.
    Handler signature: handler(payload).

    Args:
        event (str): The event to register the handler for.
        once (bool, optional): Whether the handler should be called only once. Defaults to False.

    Returns:
        Callable[[HandlerFunc], HandlerFunc]: The decorator function.

    Example:
    @receiver("user_created", once=True)
    def welcome(user):
        print("welcome", user)
    """
    return get_instance().receiver(event, once=once)


# Dispatch
async def emit(event: str, payload: Any = None) -> None:
    """
    Dispatch `event` to all handlers of the process-wide emitter.

    Raises:
        EmitError: If at least one handler failed.

    Example:
    await emit("user_created", user)
    """
    await get_instance().emit(event, payload)


def emit_sync(event: str, payload: Any = None):
    """
    Convenience to use emit(...) from sync code.

    - If no loop is running, it blocks until done.
    - If a loop is running, schedules and returns an asyncio.Task (fire-and-forget).
      The task fails with `EmitError` when a handler fails, so callers must
      await it or add a done-callback that retrieves its exception.

    Returns:
        None if no loop is running, otherwise an asyncio.Task
    """
    return get_instance().emit_sync(event, payload)
