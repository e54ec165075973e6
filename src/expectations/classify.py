"""Comparison strategy selection.

:func:`classify` inspects the evaluated expected/actual pair and picks the
strategy the comparator runs. Guards are checked in a fixed order; the first
match wins.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass
from enum import Enum
from typing import Any

from expectations.faults import Fault, Ok, Outcome


class _TrueMarker:
    """Expected value asking only for a truthy actual value."""

    _instance: _TrueMarker | None = None

    def __new__(cls) -> _TrueMarker:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "TRUE"

    def __reduce__(self) -> str:
        return "TRUE"


TRUE = _TrueMarker()


@dataclass(frozen=True)
class Membership:
    """Actual value asking whether the expected value is contained in ``target``."""

    target: Any

    def __repr__(self) -> str:
        return f"in_({self.target!r})"


def in_(target: Any) -> Membership:
    """Check membership instead of equality.

    ``expect(2, in_([1, 2, 3]))`` passes when ``2`` is an element of the list,
    ``expect(2, in_({1, 2}))`` when it is a member of the set, and
    ``expect({"a": 1}, in_(mapping))`` when ``mapping`` contains the given
    key/value pairs.
    """
    return Membership(target)


class Strategy(Enum):
    """Comparison strategies, in classification precedence order."""

    EXPECT_FAULT = "expect_fault"
    EXPECTED_FAULT = "expected_fault"
    ACTUAL_FAULT = "actual_fault"
    PREDICATE = "predicate"
    TRUTHY = "truthy"
    MEMBERSHIP = "membership"
    MAP_DIFF = "map_diff"
    SET_DIFF = "set_diff"
    SEQUENCE_DIFF = "sequence_diff"
    PATTERN_MATCH = "pattern_match"
    INSTANCE_CHECK = "instance_check"
    EQUALITY = "equality"


def is_map(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_set(value: Any) -> bool:
    return isinstance(value, Set)


def is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def is_pattern(value: Any) -> bool:
    return isinstance(value, re.Pattern)


def is_type(value: Any) -> bool:
    return isinstance(value, type)


def is_predicate(value: Any) -> bool:
    # Classes are callable but select INSTANCE_CHECK or EXPECT_FAULT instead.
    return callable(value) and not is_type(value)


def is_fault_type(value: Any) -> bool:
    return is_type(value) and issubclass(value, BaseException)


def classify(expected: Outcome, actual: Outcome) -> Strategy:
    """Return the comparison strategy for an evaluated expected/actual pair."""
    if isinstance(expected, Ok) and is_fault_type(expected.value):
        return Strategy.EXPECT_FAULT
    if isinstance(expected, Fault):
        return Strategy.EXPECTED_FAULT
    if isinstance(actual, Fault):
        return Strategy.ACTUAL_FAULT

    e, a = expected.value, actual.value
    if is_predicate(e):
        return Strategy.PREDICATE
    if e is TRUE:
        return Strategy.TRUTHY
    if isinstance(a, Membership):
        return Strategy.MEMBERSHIP

    if is_map(e) and is_map(a):
        return Strategy.MAP_DIFF
    if is_set(e) and is_set(a):
        return Strategy.SET_DIFF
    if is_sequence(e) and is_sequence(a):
        return Strategy.SEQUENCE_DIFF
    if is_pattern(e):
        return Strategy.PATTERN_MATCH
    if is_type(e):
        return Strategy.INSTANCE_CHECK
    return Strategy.EQUALITY
