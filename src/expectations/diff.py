"""Structural diffing of maps, sets and sequences.

Float NaN never equals itself, which makes ``[nan] == [float("nan")]`` false.
Every comparison here goes through :func:`nan_normalize` first, replacing NaN
leaves with the :data:`NAN` marker so two NaNs compare equal while still
rendering as ``NaN`` in diagnostics.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Set
from dataclasses import dataclass, field
from typing import Any

from expectations.classify import is_map

KeyPath = tuple[Any, ...]


class _NaNMarker:
    """Canonical stand-in for float NaN; equal only to itself."""

    _instance: _NaNMarker | None = None

    def __new__(cls) -> _NaNMarker:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NaN"

    def __hash__(self) -> int:
        return hash("expectations.NaN")

    def __eq__(self, other: object) -> bool:
        return other is self


NAN = _NaNMarker()


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def nan_normalize(value: Any) -> Any:
    """Replace float NaN with :data:`NAN`, recursing into containers.

    Lists, tuples, sets and mappings are rebuilt with normalized members;
    anything else is returned unchanged.
    """
    if _is_nan(value):
        return NAN
    if isinstance(value, Mapping):
        return {k: nan_normalize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [nan_normalize(v) for v in value]
    if isinstance(value, tuple) and not hasattr(value, "_fields"):
        return tuple(nan_normalize(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(nan_normalize(v) for v in value)
    return value


def nan_equal(left: Any, right: Any) -> bool:
    """Equality that treats NaN as equal to NaN."""
    return nan_normalize(left) == nan_normalize(right)


def render_path(path: KeyPath) -> str:
    """``("a", "b")`` -> ``"a {b"``."""
    return " {".join(str(k) for k in path)


def render_items(items: Iterable[Any]) -> str:
    return ", ".join(repr(item) for item in items)


def _ordered(items: Iterable[Any]) -> list[Any]:
    items = list(items)
    try:
        return sorted(items)
    except TypeError:
        return items


def _distinct(items: Iterable[Any]) -> list[Any]:
    # Membership by ==, so unhashable elements (dicts, lists) are fine.
    seen: list[Any] = []
    for item in items:
        if item not in seen:
            seen.append(item)
    return seen


# Maps


def flatten(mapping: Mapping[Any, Any], prefix: KeyPath = ()) -> list[tuple[KeyPath, Any]]:
    """Reduce a nested map to ``(key_path, leaf)`` pairs.

    Non-empty nested maps are descended into; an empty map is itself a leaf so
    that ``{"a": {}}`` and ``{}`` still differ by a key path.
    """
    pairs: list[tuple[KeyPath, Any]] = []
    for key, value in mapping.items():
        path = (*prefix, key)
        if is_map(value) and value:
            pairs.extend(flatten(value, path))
        else:
            pairs.append((path, value))
    return pairs


def missing_paths(left: Mapping[Any, Any], right: Mapping[Any, Any]) -> list[KeyPath]:
    """Key paths reachable in ``left`` but not in ``right``."""
    right_paths = {path for path, _ in flatten(right)}
    return [path for path, _ in flatten(left) if path not in right_paths]


def disagreements(
    expected: Mapping[Any, Any], actual: Mapping[Any, Any], prefix: KeyPath = ()
) -> list[str]:
    """Messages for keys present in both maps whose leaf values differ."""
    messages: list[str] = []
    for key, e_value in expected.items():
        if key not in actual:
            continue
        a_value = actual[key]
        path = (*prefix, key)
        if is_map(e_value) and is_map(a_value):
            messages.extend(disagreements(e_value, a_value, path))
        elif not nan_equal(e_value, a_value):
            messages.append(f"{render_path(path)} expected {e_value!r} but was {a_value!r}")
    return messages


@dataclass
class MapDiff:
    """Outcome of comparing two maps.

    ``missing_in_actual`` and ``missing_in_expected`` hold the rendered key
    path messages, ``mismatches`` the value disagreements. The three lists are
    independent and may overlap in what they describe.
    """

    equal: bool
    missing_in_actual: list[str] = field(default_factory=list)
    missing_in_expected: list[str] = field(default_factory=list)
    mismatches: list[str] = field(default_factory=list)


def diff_maps(expected: Mapping[Any, Any], actual: Mapping[Any, Any]) -> MapDiff:
    if nan_equal(expected, actual):
        return MapDiff(equal=True)
    return MapDiff(
        equal=False,
        missing_in_actual=[
            f"{render_path(path)} is in expected, but not in actual"
            for path in missing_paths(expected, actual)
        ],
        missing_in_expected=[
            f"{render_path(path)} is in actual, but not in expected"
            for path in missing_paths(actual, expected)
        ],
        mismatches=disagreements(expected, actual),
    )


# Sets and sequences


def set_difference_message(left: Set[Any], right: Set[Any], suffix: str) -> str | None:
    """``"1, 2 are in expected, but not in actual"`` or None when nothing differs."""
    items = _ordered(left - right)
    if not items:
        return None
    return f"{render_items(items)} {suffix}"


def sequence_difference(left: Iterable[Any], right: Iterable[Any]) -> list[Any]:
    """Distinct elements of ``left`` that never occur in ``right``, NaN-aware."""
    right_items = nan_normalize(list(right))
    return [
        item
        for item in _distinct(nan_normalize(list(left)))
        if item not in right_items
    ]


def sequence_difference_message(
    left: Iterable[Any], right: Iterable[Any], suffix: str
) -> str | None:
    items = sequence_difference(left, right)
    if not items:
        return None
    return f"{render_items(items)} {suffix}"


SAME_ITEMS_DIFFERENT_ORDER = "lists appear to contain the same items with different ordering"
DUPLICATES_IN_ACTUAL = "some duplicate items in actual not expected"
DUPLICATES_IN_EXPECTED = "some duplicate items in expected not actual"
ACTUAL_LARGER = "actual is larger than expected"
EXPECTED_LARGER = "expected is larger than actual"


def _same_elements(left: list[Any], right: list[Any]) -> bool:
    return all(item in right for item in left) and all(item in left for item in right)


def _same_multiset(left: list[Any], right: list[Any]) -> bool:
    if len(left) != len(right):
        return False
    return all(left.count(item) == right.count(item) for item in _distinct(left))


def classify_sequence_discrepancy(expected: Iterable[Any], actual: Iterable[Any]) -> str | None:
    """Explain why two unequal sequences differ, or None if no rule applies.

    Rules are tried in order: reordering, extra duplicates in actual, extra
    duplicates in expected, then plain length differences.
    """
    e = nan_normalize(list(expected))
    a = nan_normalize(list(actual))
    if _same_multiset(e, a):
        return SAME_ITEMS_DIFFERENT_ORDER
    same_elements = _same_elements(e, a)
    if same_elements and len(e) < len(a):
        return DUPLICATES_IN_ACTUAL
    if same_elements and len(e) > len(a):
        return DUPLICATES_IN_EXPECTED
    if len(e) < len(a):
        return ACTUAL_LARGER
    if len(e) > len(a):
        return EXPECTED_LARGER
    return None
