"""Failure capability used to classify error records.

Records built from a failure need three things from it: a type name, a
message and a pre-rendered stack. Python exceptions are adapted through
ExceptionFailure; anything else exposing the same attributes works directly.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class Failure(Protocol):
    """Minimal view of an error value."""

    type_name: str
    message: str
    stack_trace: str


@dataclass(frozen=True)
class ExceptionFailure:
    """Failure view of a Python exception."""

    type_name: str
    message: str
    stack_trace: str
    rendered: str

    @classmethod
    def from_exception(cls, exc: BaseException) -> ExceptionFailure:
        stack = "".join(traceback.format_tb(exc.__traceback__)) if exc.__traceback__ else ""
        return cls(
            type_name=type(exc).__name__,
            message=str(exc),
            stack_trace=stack,
            rendered="".join(traceback.format_exception_only(type(exc), exc)).strip(),
        )

    def __str__(self) -> str:
        return self.rendered


def as_failure(value: BaseException | Failure) -> Failure:
    """Adapt an exception, or pass through an existing Failure."""
    if isinstance(value, BaseException):
        return ExceptionFailure.from_exception(value)
    return value
