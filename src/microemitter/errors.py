"""
Exceptions raised by microemitter.
"""

from __future__ import annotations

from typing import List


class MicroEmitterError(Exception):
    """Base class for microemitter errors."""


class EmitError(MicroEmitterError):
    """
    Raised by `Emitter.emit` once every handler of a dispatch has settled
    and at least one of them failed.

    Attributes:
        event (str): The dispatched event name.
        errors (List[BaseException]): Handler failures, in handler order.
    """

    def __init__(self, event: str, errors: List[BaseException]) -> None:
        self.event = event
        self.errors = list(errors)
        super().__init__(
            f"{len(self.errors)} handler(s) failed while emitting '{event}'"
        )
