"""Tests for expectations.diff module."""

import math
from collections import namedtuple

from expectations.diff import (
    ACTUAL_LARGER,
    DUPLICATES_IN_ACTUAL,
    DUPLICATES_IN_EXPECTED,
    EXPECTED_LARGER,
    NAN,
    SAME_ITEMS_DIFFERENT_ORDER,
    classify_sequence_discrepancy,
    diff_maps,
    flatten,
    missing_paths,
    nan_equal,
    nan_normalize,
    render_path,
    sequence_difference,
    set_difference_message,
)


class TestNaN:
    def test_nan_normalizes_to_marker(self):
        assert nan_normalize(float("nan")) is NAN
        assert repr(NAN) == "NaN"

    def test_nested_containers_normalize(self):
        value = {"a": [1.0, math.nan], "b": (math.nan,), "c": {math.nan}}
        assert nan_normalize(value) == {"a": [1.0, NAN], "b": (NAN,), "c": frozenset({NAN})}

    def test_namedtuple_left_alone(self):
        Point = namedtuple("Point", "x y")
        point = Point(1, 2)
        assert nan_normalize(point) is point

    def test_nan_equal(self):
        assert nan_equal([math.nan], [float("nan")])
        assert not nan_equal(math.nan, 0.0)
        assert nan_equal(1, 1.0)


class TestMaps:
    def test_render_path(self):
        assert render_path(("a", "b", "c")) == "a {b {c"
        assert render_path((1,)) == "1"

    def test_flatten(self):
        assert flatten({"a": {"b": 1, "c": {}}, "d": 2}) == [
            (("a", "b"), 1),
            (("a", "c"), {}),
            (("d",), 2),
        ]

    def test_missing_paths(self):
        assert missing_paths({"a": {"b": 1, "c": 2}}, {"a": {"b": 1}}) == [("a", "c")]

    def test_map_replaced_by_leaf_is_missing_both_ways(self):
        diff = diff_maps({"a": {"b": 1}}, {"a": 1})
        assert diff.missing_in_actual == ["a {b is in expected, but not in actual"]
        assert diff.missing_in_expected == ["a is in actual, but not in expected"]

    def test_equal_maps(self):
        assert diff_maps({"a": math.nan}, {"a": math.nan}).equal

    def test_mismatch_messages(self):
        diff = diff_maps({"x": {"y": "a"}}, {"x": {"y": "b"}})
        assert diff.mismatches == ["x {y expected 'a' but was 'b'"]
        assert diff.missing_in_actual == []


class TestSets:
    def test_message_lists_sorted_items(self):
        assert set_difference_message({3, 1, 2}, {2}, "gone") == "1, 3 gone"

    def test_nothing_missing(self):
        assert set_difference_message({1}, {1, 2}, "gone") is None

    def test_unorderable_items(self):
        message = set_difference_message({1, "a"}, set(), "gone")
        assert message in ("1, 'a' gone", "'a', 1 gone")


class TestSequences:
    def test_difference_is_distinct(self):
        assert sequence_difference([1, 1, 2, 3], [3]) == [1, 2]

    def test_difference_with_nan(self):
        assert sequence_difference([math.nan, 1], [float("nan")]) == [1]

    def test_reordering(self):
        assert classify_sequence_discrepancy([1, 2], [2, 1]) == SAME_ITEMS_DIFFERENT_ORDER

    def test_reordering_with_nan(self):
        assert classify_sequence_discrepancy([math.nan, 1], [1, math.nan]) == SAME_ITEMS_DIFFERENT_ORDER

    def test_duplicates(self):
        assert classify_sequence_discrepancy([1], [1, 1]) == DUPLICATES_IN_ACTUAL
        assert classify_sequence_discrepancy([1, 1], [1]) == DUPLICATES_IN_EXPECTED

    def test_lengths(self):
        assert classify_sequence_discrepancy([1], [2, 3]) == ACTUAL_LARGER
        assert classify_sequence_discrepancy([2, 3], [1]) == EXPECTED_LARGER

    def test_no_rule_applies(self):
        assert classify_sequence_discrepancy([1], [2]) is None
