"""Runners that execute backend work and report completion on the caller's thread."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

TResult = TypeVar("TResult")


@dataclass(frozen=True)
class OperationResult(Generic[TResult]):
    """Outcome of one background operation."""

    value: Optional[TResult] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class OperationRunnerABC(ABC):
    """Policy boundary for where backend calls execute.

    ``on_done`` must always be invoked exactly once, on the thread that owns
    the editor state.
    """

    @abstractmethod
    def submit(
        self,
        work: Callable[[], TResult],
        on_done: Callable[[OperationResult[TResult]], None],
        *,
        name: str = "operation",
    ) -> None:
        """Run ``work`` and deliver its result to ``on_done``."""


class ImmediateOperationRunner(OperationRunnerABC):
    """Runs work synchronously in the calling thread."""

    def submit(
        self,
        work: Callable[[], TResult],
        on_done: Callable[[OperationResult[TResult]], None],
        *,
        name: str = "operation",
    ) -> None:
        on_done(run_captured(work))


def run_captured(work: Callable[[], TResult]) -> OperationResult[TResult]:
    """Execute ``work`` and capture either its value or the raised exception."""
    try:
        return OperationResult(value=work())
    except Exception as error:
        return OperationResult(error=error)
