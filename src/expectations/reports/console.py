"""Console reporter using Rich."""

from __future__ import annotations

import sys
from functools import singledispatchmethod
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.traceback import Traceback

import expectations
from expectations.classify import TRUE
from expectations.reports.base import Reporter
from expectations.results import Error, Fail, Pass, Raw, Summary

if TYPE_CHECKING:
    from expectations.testing.case import TestCase


def raw_str(raw: Raw) -> str | None:
    """``(expect e a)``, or ``(expect a)`` for a truthiness check."""
    if raw is None:
        return None
    expected, actual = raw
    if expected is None or expected == repr(TRUE):
        return f"(expect {actual})"
    return f"(expect {expected} {actual})"


def _labelled(label: str, text: str | None) -> str | None:
    if text is None:
        return None
    return f"{label:>9}: {text}"


def fail_lines(result: Fail) -> list[str]:
    lines = [
        _labelled("raw", raw_str(result.raw)),
        _labelled("result", result.result_text or None),
        _labelled("exp-msg", result.expected_message),
        _labelled("act-msg", result.actual_message),
        _labelled("message", result.message),
    ]
    return [line for line in lines if line is not None]


def error_lines(result: Error) -> list[str]:
    lines = [
        _labelled("raw", raw_str(result.raw)),
        _labelled("exp-msg", result.expected_message),
        _labelled("act-msg", result.actual_message),
        _labelled("threw", result.threw),
    ]
    return [line for line in lines if line is not None]


def summary_text(summary: Summary) -> str:
    return (
        f"Ran {summary.test} tests containing {summary.assertions} assertions.\n"
        f"{summary.fail} failures, {summary.error} errors."
    )


class ConsoleReporter(Reporter):
    """Prints failures, errors and the run summary.

    Verbosity ``-1`` prints only failures and errors, ``0`` adds the summary
    and ``1`` or more also lists every passing case.
    """

    def __init__(
        self,
        console: Console | None = None,
        verbosity: int = 0,
        *,
        show_stack_trace: bool = True,
    ) -> None:
        self.console = console or Console(file=sys.__stdout__)
        self.verbosity = verbosity
        self.show_stack_trace = show_stack_trace

    def _print_failure_header(self, case: TestCase | None, color: str) -> None:
        self.console.print()
        if case is None:
            self.console.print(f"[{color}]failure[/{color}]")
            return
        location = escape(f"({case.meta.location})")
        self.console.print(f"[{color}]failure in {location} : {escape(case.meta.namespace)}[/{color}]")

    def _print_lines(self, lines: list[str]) -> None:
        for line in lines:
            self.console.print(escape(line), highlight=False)

    def _print_stack_trace(self, record: Error) -> None:
        error = record.result
        if error.__traceback__ is not None:
            self.console.print(
                Traceback.from_exception(
                    type(error),
                    error,
                    error.__traceback__,
                    suppress=[expectations],
                    show_locals=self.verbosity >= 2,
                )
            )
        elif record.stack_trace:
            self.console.print(escape(record.stack_trace), highlight=False)

    @singledispatchmethod
    def reported(self, record: object, case: TestCase | None) -> None:
        msg = f"Cannot report {type(record).__name__}"
        raise TypeError(msg)

    @reported.register(Pass)
    def _(self, record: Pass, case: TestCase | None) -> None:
        if self.verbosity >= 1 and case is not None:
            self.console.print(f"  [green]✓[/green] {escape(case.name)}")

    @reported.register(Fail)
    def _(self, record: Fail, case: TestCase | None) -> None:
        self._print_failure_header(case, "red")
        self._print_lines(fail_lines(record))

    @reported.register(Error)
    def _(self, record: Error, case: TestCase | None) -> None:
        self._print_failure_header(case, "yellow")
        self._print_lines(error_lines(record))
        if self.show_stack_trace:
            self._print_stack_trace(record)

    @reported.register(Summary)
    def _(self, record: Summary, case: TestCase | None) -> None:
        if self.verbosity < 0:
            return
        color = "green" if record.ok else "red"
        self.console.print()
        self.console.print(f"[bold {color}]{escape(summary_text(record))}[/bold {color}]")
