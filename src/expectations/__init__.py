"""Expectations - expected/actual comparisons with structural diagnostics."""

from .classify import TRUE, Membership, Strategy, classify, in_
from .compare import compare
from .config import ExpectationsSettings
from .faults import Fault, Ok, evaluate
from .results import Error, Fail, Pass, Summary
from .testing import (
    Runner,
    RunResult,
    TestCase,
    collect,
    disable_run_on_exit,
    expect,
    expect_focused,
    given,
    install_exit_hook,
    run_all_tests,
    run_tests,
)
from .version import __version__


__all__ = [
    # Declaring
    "expect",
    "expect_focused",
    "given",
    "in_",
    "TRUE",
    "Membership",
    # Comparing
    "Strategy",
    "classify",
    "compare",
    "evaluate",
    "Ok",
    "Fault",
    "Pass",
    "Fail",
    "Error",
    "Summary",
    # Running
    "TestCase",
    "Runner",
    "RunResult",
    "ExpectationsSettings",
    "collect",
    "run_tests",
    "run_all_tests",
    "install_exit_hook",
    "disable_run_on_exit",
]
