"""Errors raised by the activity engine."""

from __future__ import annotations

from typing import Any


class ContractViolation(ValueError):
    """Raised when a caller passes input the engine refuses to accept.

    A negative distance delta or an hour outside 0-23 means the host's
    sensor or clock layer is broken.  The engine rejects the call instead
    of clamping the value.
    """

    def __init__(self, field: str, value: Any, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"{field}={value!r}: {reason}")
