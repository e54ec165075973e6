"""Scoped evaluation of expectation thunks.

Each side of an expectation is evaluated inside its own fault-catching
boundary. A raised exception does not abort the case; it is captured as a
:class:`Fault` so that "did this side throw" becomes part of the comparison.
"""

from __future__ import annotations

import inspect
import sysconfig
import traceback
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")

_PACKAGE_DIR = Path(__file__).resolve().parent
_STDLIB_DIRS = tuple(
    Path(p).resolve()
    for p in {sysconfig.get_path("stdlib"), sysconfig.get_path("platstdlib")}
    if p
)
_FRAME_INDENT = " " * 11


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful evaluation of a thunk."""

    value: T


@dataclass(frozen=True)
class Fault:
    """An exception captured while evaluating a thunk.

    Attributes
    ----------
    exception
        The captured exception, with its ``__traceback__`` intact.
    """

    exception: BaseException

    @property
    def type_name(self) -> str:
        return type(self.exception).__name__

    @property
    def message(self) -> str:
        return str(self.exception)

    @property
    def stack_trace(self) -> str:
        return pruned_stack_trace(self.exception)

    def describe(self) -> str:
        """``Type: message`` form used in diagnostics."""
        if self.message:
            return f"{self.type_name}: {self.message}"
        return self.type_name


Outcome = Union[Ok[Any], Fault]


def evaluate(thunk: Callable[[], Any]) -> Outcome:
    """Call ``thunk`` and capture either its value or the exception it raised."""
    try:
        return Ok(thunk())
    except Exception as e:
        return Fault(e)


async def evaluate_async(thunk: Callable[[], Any]) -> Outcome:
    """Like :func:`evaluate`, awaiting the thunk's result when it is awaitable."""
    try:
        value = thunk()
        if inspect.isawaitable(value):
            value = await value
        return Ok(value)
    except Exception as e:
        return Fault(e)


def _is_ignored(filename: str) -> bool:
    if filename.startswith("<"):
        return True
    path = Path(filename).resolve()
    if path.is_relative_to(_PACKAGE_DIR):
        return True
    if "site-packages" in path.parts or "dist-packages" in path.parts:
        return False
    return any(path.is_relative_to(stdlib) for stdlib in _STDLIB_DIRS)


def relevant_frames(error: BaseException) -> list[traceback.FrameSummary]:
    """Frames of ``error``'s traceback that belong to the test author's code.

    Frames from this package, the standard library and frozen/synthetic
    modules are dropped.
    """
    return [
        frame
        for frame in traceback.extract_tb(error.__traceback__)
        if not _is_ignored(frame.filename)
    ]


def pruned_stack_trace(error: BaseException) -> str:
    """Render :func:`relevant_frames` one per line."""
    return "\n".join(
        f"{_FRAME_INDENT}{frame.name} ({Path(frame.filename).name}:{frame.lineno})"
        for frame in relevant_frames(error)
    )
