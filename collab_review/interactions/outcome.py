"""Explicit handler results consumed by the router's failure boundary."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .replies import (
    GENERIC_ERROR_TEXT,
    NON_CHAT_INPUT_TEXT,
    NOT_STAFF_TEXT,
    OUT_OF_SCOPE_TEXT,
    UNEXPECTED_TYPE_TEXT,
)


class ErrorKind(str, Enum):
    OUT_OF_SCOPE = "out_of_scope"
    UNEXPECTED_TYPE = "unexpected_type"
    NON_CHAT_INPUT = "non_chat_input"
    UNKNOWN_CONTROL = "unknown_control"
    NOT_STAFF = "not_staff"
    UNEXPECTED = "unexpected"


ERROR_MESSAGES = {
    ErrorKind.OUT_OF_SCOPE: OUT_OF_SCOPE_TEXT,
    ErrorKind.UNEXPECTED_TYPE: UNEXPECTED_TYPE_TEXT,
    ErrorKind.NON_CHAT_INPUT: NON_CHAT_INPUT_TEXT,
    ErrorKind.UNKNOWN_CONTROL: GENERIC_ERROR_TEXT,
    ErrorKind.NOT_STAFF: NOT_STAFF_TEXT,
    ErrorKind.UNEXPECTED: GENERIC_ERROR_TEXT,
}


@dataclass(frozen=True)
class HandlerOutcome:
    """What a handler did: the last network result, or the error to report.

    ``responded`` is False when the handler deliberately sent nothing.
    """

    responded: bool = True
    error: ErrorKind | None = None
    result: Any = None

    @classmethod
    def ok(cls, result: Any = None) -> HandlerOutcome:
        return cls(responded=True, result=result)

    @classmethod
    def fail(cls, error: ErrorKind) -> HandlerOutcome:
        return cls(responded=False, error=error)

    @classmethod
    def noop(cls) -> HandlerOutcome:
        return cls(responded=False)

    def __bool__(self) -> bool:
        return self.error is None
