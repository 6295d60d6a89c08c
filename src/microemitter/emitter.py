"""
Emitter implementation.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol, Set

from .errors import EmitError

logger = logging.getLogger(__name__)

DEFAULT_MAX_LISTENERS = 10

HandlerFunc = Callable[..., Any]
MaybeAwaitable = Any  # result of handler call; may be awaitable


class _SupportsPayloadSignature(Protocol):
    """
    Protocol for event handlers.
    """

    def __call__(self, payload: Any) -> Any: ...


@dataclass(frozen=True, eq=False)
class HandlerEntry:
    """A registered handler and its one-time flag. Compared by identity."""

    func: HandlerFunc
    once: bool = False

    def call(self, payload: Any) -> MaybeAwaitable:
        """
        Call the handler with the given payload.
        """
        return self.func(payload)


class Emitter:
    """
    An isolated event emitter. Thread-safe registration and dispatch.
    """

    def __init__(self, *, max_listeners: int = DEFAULT_MAX_LISTENERS) -> None:
        """
        Initialize a new Emitter instance.

        Args:
            max_listeners (int, optional): Soft cap of listeners per event name.
                                           Defaults to 10. 0 disables the warning.
        """
        self._lock = threading.RLock()
        self._handlers: Dict[str, List[HandlerEntry]] = {}
        self._warned: Set[str] = set()
        self._max_listeners = DEFAULT_MAX_LISTENERS
        self.set_max_listeners(max_listeners)

    # -------------------- registration API --------------------
    def _add(
        self, event: str, handler: _SupportsPayloadSignature, once: bool, prepend: bool
    ) -> None:
        if not callable(handler):
            raise TypeError("handler must be callable")

        entry = HandlerEntry(func=handler, once=once)
        with self._lock:
            lst = self._handlers.setdefault(event, [])
            if prepend:
                lst.insert(0, entry)
            else:
                lst.append(entry)
            count = len(lst)
            limit = self._max_listeners
            warn = 0 < limit < count and event not in self._warned
            if warn:
                self._warned.add(event)

        if warn:
            logger.warning(
                "Possible memory leak detected: %d '%s' listeners added, max is %d. "
                "Use set_max_listeners() to increase the limit.",
                count,
                event,
                limit,
            )

    def on(self, event: str, handler: _SupportsPayloadSignature) -> None:
        """
        Register a handler for an event.
        Handlers run in registration order.

        Args:
            event (str): The event to register the handler for.
            handler (_SupportsPayloadSignature): The handler to register.

        Returns:
            None
        """
        self._add(event, handler, once=False, prepend=False)

    def once(self, event: str, handler: _SupportsPayloadSignature) -> None:
        """
        Register a handler that is removed the first time `event` is dispatched.
        """
        self._add(event, handler, once=True, prepend=False)

    def prepend_listener(self, event: str, handler: _SupportsPayloadSignature) -> None:
        """Register a handler ahead of every handler already registered for `event`."""
        self._add(event, handler, once=False, prepend=True)

    def prepend_once_listener(
        self, event: str, handler: _SupportsPayloadSignature
    ) -> None:
        """Like `prepend_listener`, but the handler only runs once."""
        self._add(event, handler, once=True, prepend=True)

    def _drop_empty(self, event: str) -> None:
        # caller holds the lock
        if not self._handlers.get(event):
            self._handlers.pop(event, None)
            self._warned.discard(event)

    def off(self, event: str, handler: HandlerFunc) -> int:
        """
        Unregister every registration of `handler` for `event`.
        Handlers are matched by identity.

        Args:
            event (str): The event to unregister the handler from.
            handler (HandlerFunc): The handler to unregister.

        Returns:
            int: The number of removed registrations.
        """
        with self._lock:
            lst = self._handlers.get(event, [])
            if not lst:
                return 0
            before = len(lst)
            self._handlers[event] = [h for h in lst if h.func is not handler]
            removed = before - len(self._handlers[event])
            self._drop_empty(event)
            return removed

    add_listener = on
    remove_listener = off

    def remove_all_listeners(self, event: Optional[str] = None) -> None:
        """Remove all handlers for `event`, or for every event if omitted."""
        with self._lock:
            if event is None:
                self._handlers.clear()
                self._warned.clear()
            else:
                self._handlers.pop(event, None)
                self._warned.discard(event)

    # -------------------- introspection --------------------
    def listener_count(self, event: str) -> int:
        """
        Return the number of handlers registered for `event`.

        Args:
            event (str): The event to count handlers for.

        Returns:
            int: The number of handlers, 0 for unknown events.
        """
        with self._lock:
            return len(self._handlers.get(event, []))

    def event_names(self) -> List[str]:
        """Return the event names that currently have handlers."""
        with self._lock:
            return [name for name, lst in self._handlers.items() if lst]

    def listeners(self, event: str) -> List[HandlerFunc]:
        """Return a copy of the functions registered for `event`, in dispatch order."""
        with self._lock:
            return [h.func for h in self._handlers.get(event, [])]

    def raw_listeners(self, event: str) -> List[HandlerEntry]:
        """Like `listeners`, but returns the entries with their `once` flag."""
        with self._lock:
            return list(self._handlers.get(event, []))

    def set_max_listeners(self, n: int) -> None:
        """
        Set the soft cap of listeners per event name. 0 disables the warning.

        Raises:
            ValueError: If `n` is not a non-negative integer.
        """
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise ValueError(f"max_listeners must be a non-negative integer, got {n!r}")
        with self._lock:
            self._max_listeners = n

    def get_max_listeners(self) -> int:
        """
        Return the soft cap of listeners per event name.

        Returns:
            int: The current limit, 0 if the warning is disabled.
        """
        return self._max_listeners

    # -------------------- decorator --------------------
    def receiver(self, event: str, *, once: bool = False):
        """
        Decorator to register a function as a handler for `event`.
        Handler signature: handler(payload).

        Args:
            event (str): The event to register the handler for.
            once (bool, optional): Whether the handler should be called only once.
                                   Defaults to False.

        Returns:
            Callable[[HandlerFunc], HandlerFunc]: The decorator function.
        """

        def wrapper(func: _SupportsPayloadSignature):
            self._add(event, func, once=once, prepend=False)
            return func

        return wrapper

    # -------------------- dispatch --------------------
    async def emit(self, event: str, payload: Any = None) -> None:
        """
        Dispatch `event` to all registered handlers, in registration order.
        Handlers are called one at a time. When one returns an awaitable, it is
        scheduled and given a turn on the loop before the next handler is
        called; all of them are awaited together at the end.

        One-time handlers are removed before any handler of the dispatch runs.
        A failing handler does not stop the others; once everything settled,
        the failures are raised together as an `EmitError`.

        Args:
            event (str): The event to dispatch.
            payload (Any, optional): Passed as the only argument to each handler.

        Raises:
            EmitError: If at least one handler raised or its awaitable failed.
        """
        # snapshot handlers to avoid holding the lock during callbacks
        with self._lock:
            handlers = list(self._handlers.get(event, []))
            if not handlers:
                return
            fired_once = [h for h in handlers if h.once]
            if fired_once:
                self._handlers[event] = [
                    x for x in self._handlers[event] if x not in fired_once
                ]
                self._drop_empty(event)

        errors: List[Optional[BaseException]] = [None] * len(handlers)
        pending: Dict[int, "asyncio.Future[Any]"] = {}
        for idx, h in enumerate(handlers):
            try:
                result = h.call(payload)
            except Exception as exc:  # pylint: disable=broad-exception-caught
                errors[idx] = exc
                continue
            if inspect.isawaitable(result):
                pending[idx] = asyncio.ensure_future(result)
                # let the task run up to its first suspension before the next handler
                await asyncio.sleep(0)

        if pending:
            results = await asyncio.gather(*pending.values(), return_exceptions=True)
            for idx, res in zip(pending, results):
                if isinstance(res, BaseException):
                    errors[idx] = res

        failures = [e for e in errors if e is not None]
        if failures:
            for exc in failures:
                logger.error(
                    "Handler for '%s' failed",
                    event,
                    exc_info=(type(exc), exc, exc.__traceback__),
                )
            raise EmitError(event, failures)

    def emit_sync(self, event: str, payload: Any = None):
        """
        Convenience to use emit(...) from sync code.

        - If no loop is running, it blocks until done.
        - If a loop is running, schedules and returns an asyncio.Task (fire-and-forget).
          The task fails with `EmitError` when a handler fails, so callers must
          await it or add a done-callback that retrieves its exception.

        Args:
            event (str): The event to dispatch.
            payload (Any, optional): Passed as the only argument to each handler.

        Returns:
            None if no loop is running, otherwise an asyncio.Task
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self.emit(event, payload))
            return None
        else:
            return loop.create_task(self.emit(event, payload))
