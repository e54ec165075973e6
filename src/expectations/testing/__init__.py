"""Declaring, discovering and running expectations."""

from .aggregator import Aggregator, Counters
from .case import SourceMeta, TestCase, check, clear_registry, get_registry, namespaces
from .declare import expect, expect_focused, given
from .discovery import collect
from .runner import (
    CaseExecution,
    Runner,
    RunResult,
    run_all_tests,
    run_cases,
    run_tests,
    select_cases,
    test_namespace,
)
from .shutdown import disable_run_on_exit, install_exit_hook


__all__ = [
    "Aggregator",
    "CaseExecution",
    "Counters",
    "RunResult",
    "Runner",
    "SourceMeta",
    "TestCase",
    "check",
    "clear_registry",
    "collect",
    "disable_run_on_exit",
    "expect",
    "expect_focused",
    "get_registry",
    "given",
    "install_exit_hook",
    "namespaces",
    "run_all_tests",
    "run_cases",
    "run_tests",
    "select_cases",
    "test_namespace",
]
