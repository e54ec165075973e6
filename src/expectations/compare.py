"""Comparison strategies.

:func:`compare` classifies an evaluated expected/actual pair and runs the
matching strategy. Strategies are pure: they return a :class:`Pass`,
:class:`Fail` or :class:`Error` record and never touch counters or reporters.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from expectations.classify import Membership, Strategy, classify, is_map, is_sequence, is_set
from expectations.diff import (
    classify_sequence_discrepancy,
    diff_maps,
    nan_equal,
    nan_normalize,
    sequence_difference_message,
    set_difference_message,
)
from expectations.faults import Fault, Ok, Outcome
from expectations.results import ComparisonResult, Error, Fail, Pass, Raw

IN_EXPECTED_NOT_ACTUAL = "are in expected, but not in actual"
IN_ACTUAL_NOT_EXPECTED = "are in actual, but not in expected"
MEMBERSHIP_USAGE = "You must supply a list, set, or map when using in_()"

_LINE_SEPARATOR = "\n           "


def _join_lines(lines: list[str]) -> str | None:
    return _LINE_SEPARATOR.join(lines) if lines else None


def _source(raw: Raw, index: int, value: Any) -> str:
    if raw is not None and raw[index] is not None:
        return raw[index]
    return getattr(value, "__name__", None) or repr(value)


# Plain value strategies


def equality(e: Any, a: Any, raw: Raw) -> ComparisonResult:
    if nan_equal(e, a):
        return Pass(raw)
    return Fail(raw, (repr(e), "does not equal", repr(a)))


def predicate(e: Callable[[Any], Any], a: Any, raw: Raw) -> ComparisonResult:
    try:
        matched = e(a)
    except Exception as exc:
        fault = Fault(exc)
        return Error(
            raw,
            exc,
            stack_trace=fault.stack_trace,
            actual_message=f"exception in predicate: {_source(raw, 0, e)} threw {fault.describe()}",
        )
    if matched:
        return Pass(raw)
    return Fail(raw, (repr(a), "is not", _source(raw, 0, e)))


def truthy(a: Any, raw: Raw) -> ComparisonResult:
    if a:
        return Pass(raw)
    return Fail(raw, (repr(a),))


def instance_check(e: type, a: Any, raw: Raw) -> ComparisonResult:
    if isinstance(a, e):
        return Pass(raw)
    return Fail(raw, (repr(a), "is not an instance of", e.__name__))


def pattern_match(e: Any, a: Any, raw: Raw) -> ComparisonResult:
    matched = False
    if isinstance(a, (str, bytes)):
        try:
            matched = e.search(a) is not None
        except TypeError:
            # str pattern against bytes or the reverse
            matched = False
    if matched:
        return Pass(raw)
    return Fail(raw, ("regex", repr(e.pattern), "not found in", repr(a)))


# Fault strategies


def expect_fault(e: type[BaseException], actual: Outcome, raw: Raw) -> ComparisonResult:
    if isinstance(actual, Fault) and isinstance(actual.exception, e):
        return Pass(raw)
    value = actual.exception if isinstance(actual, Fault) else actual.value
    actual_src = _source(raw, 1, value)
    actual_message = None
    if isinstance(actual, Fault):
        actual_message = f"{actual_src} threw {actual.describe()}"
    return Fail(
        raw,
        (actual_src, "did not throw", _source(raw, 0, e)),
        actual_message=actual_message,
    )


def expected_fault(expected: Fault, raw: Raw) -> ComparisonResult:
    source = raw[0] if raw is not None and raw[0] is not None else "<expected>"
    return Error(
        raw,
        expected.exception,
        stack_trace=expected.stack_trace,
        expected_message=f"exception in expected: {source} threw {expected.describe()}",
    )


def actual_fault(actual: Fault, raw: Raw) -> ComparisonResult:
    source = raw[1] if raw is not None else "<actual>"
    return Error(
        raw,
        actual.exception,
        stack_trace=actual.stack_trace,
        actual_message=f"exception in actual: {source} threw {actual.describe()}",
    )


# Container strategies


def map_diff(
    e: Mapping[Any, Any],
    a: Mapping[Any, Any],
    raw: Raw,
    reported_actual: Mapping[Any, Any] | None = None,
) -> ComparisonResult:
    """Compare two maps; ``reported_actual`` replaces ``a`` in the result line."""
    diff = diff_maps(e, a)
    if diff.equal:
        return Pass(raw)
    shown = a if reported_actual is None else reported_actual
    return Fail(
        raw,
        (repr(e), "are not in", repr(shown)),
        message=_join_lines(diff.mismatches),
        expected_message=_join_lines(diff.missing_in_expected),
        actual_message=_join_lines(diff.missing_in_actual),
    )


def set_diff(e: Any, a: Any, raw: Raw) -> ComparisonResult:
    ne, na = nan_normalize(frozenset(e)), nan_normalize(frozenset(a))
    if ne == na:
        return Pass(raw)
    return Fail(
        raw,
        (repr(e), "does not equal", repr(a)),
        actual_message=set_difference_message(ne, na, IN_EXPECTED_NOT_ACTUAL),
        expected_message=set_difference_message(na, ne, IN_ACTUAL_NOT_EXPECTED),
    )


def sequence_diff(e: Any, a: Any, raw: Raw) -> ComparisonResult:
    if nan_equal(list(e), list(a)):
        return Pass(raw)
    return Fail(
        raw,
        (repr(e), "does not equal", repr(a)),
        message=classify_sequence_discrepancy(e, a),
        actual_message=sequence_difference_message(e, a, IN_EXPECTED_NOT_ACTUAL),
        expected_message=sequence_difference_message(a, e, IN_ACTUAL_NOT_EXPECTED),
    )


def membership(e: Any, wrapper: Membership, raw: Raw) -> ComparisonResult:
    target = wrapper.target
    if is_sequence(target):
        if any(nan_equal(e, item) for item in target):
            return Pass(raw)
        return Fail(raw, ("value", repr(e), "not found in", repr(target)))
    if is_set(target):
        try:
            found = nan_normalize(e) in nan_normalize(frozenset(target))
        except TypeError:
            # unhashable values are never set members
            found = False
        if found:
            return Pass(raw)
        return Fail(raw, ("key", repr(e), "not found in", repr(target)))
    if is_map(target) and is_map(e):
        subset = {k: target[k] for k in e if k in target}
        return map_diff(e, subset, raw, reported_actual=target)
    return Fail(raw, (repr(target),), message=MEMBERSHIP_USAGE)


def compare(expected: Outcome, actual: Outcome, raw: Raw = None) -> ComparisonResult:
    """Classify ``expected``/``actual`` and run the selected strategy.

    Parameters
    ----------
    expected, actual
        Evaluation outcomes, each either :class:`Ok` or :class:`Fault`.
    raw
        ``(expected_source, actual_source)`` used in diagnostics.
    """
    strategy = classify(expected, actual)

    match strategy:
        case Strategy.EXPECT_FAULT:
            return expect_fault(expected.value, actual, raw)  # type: ignore[union-attr]
        case Strategy.EXPECTED_FAULT:
            return expected_fault(expected, raw)  # type: ignore[arg-type]
        case Strategy.ACTUAL_FAULT:
            return actual_fault(actual, raw)  # type: ignore[arg-type]

    assert isinstance(expected, Ok) and isinstance(actual, Ok)
    e, a = expected.value, actual.value

    match strategy:
        case Strategy.PREDICATE:
            return predicate(e, a, raw)
        case Strategy.TRUTHY:
            return truthy(a, raw)
        case Strategy.MEMBERSHIP:
            return membership(e, a, raw)
        case Strategy.MAP_DIFF:
            return map_diff(e, a, raw)
        case Strategy.SET_DIFF:
            return set_diff(e, a, raw)
        case Strategy.SEQUENCE_DIFF:
            return sequence_diff(e, a, raw)
        case Strategy.PATTERN_MATCH:
            return pattern_match(e, a, raw)
        case Strategy.INSTANCE_CHECK:
            return instance_check(e, a, raw)
        case _:
            return equality(e, a, raw)
