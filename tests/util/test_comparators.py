import math

import numpy as np
import pytest

import javastyle
from javastyle.util import Comparator, Equals
from javastyle.util.comparators import (
    comparing,
    comparing_floats,
    comparing_ints,
    comparing_strings,
    natural_order,
    reverse_order,
)


def sign(value: int) -> int:
    return (value > 0) - (value < 0)


class TestComparators:

    @pytest.mark.parametrize(
        "a, b, expected",
        [(1, 2, -1), (2, 1, 1), (5, 5, 0), (-3, 3, -1), (2**70, 1, 1)]
    )
    def test_comparing_ints(self, a, b, expected):
        assert sign(comparing_ints()(a, b)) == expected

    def test_comparing_ints_numpy_does_not_overflow(self):
        compare = comparing_ints()
        low = np.int64(np.iinfo(np.int64).min)
        high = np.int64(np.iinfo(np.int64).max)
        assert compare(low, high) < 0
        assert compare(high, low) > 0

    @pytest.mark.parametrize(
        "a, b, expected",
        [(0.5, 1.5, -1), (1.5, 0.5, 1), (2.0, 2.0, 0), (-0.0, 0.0, 0)]
    )
    def test_comparing_floats(self, a, b, expected):
        assert comparing_floats()(a, b) == expected

    def test_comparing_floats_nan(self):
        compare = comparing_floats()
        assert compare(math.nan, 1.0) == 0
        assert compare(1.0, math.nan) == 0

    def test_comparing_strings(self):
        compare = comparing_strings()
        assert compare("apple", "banana") == -1
        assert compare("banana", "apple") == 1
        assert compare("kiwi", "kiwi") == 0
        assert compare("Z", "a") == -1

    def test_natural_order(self):
        compare = natural_order()
        assert compare(1, 2) < 0
        assert compare(np.int32(7), np.int32(3)) > 0
        assert compare(1.5, 0.5) == 1
        assert compare(np.float64(0.1), np.float64(0.2)) == -1
        assert compare("a", "b") == -1
        assert compare(True, False) > 0

    def test_natural_order_other_types_are_equal(self):
        compare = natural_order()
        assert compare((1, 2), (3, 4)) == 0
        assert compare(object(), object()) == 0
        assert compare([1], [2]) == 0

    def test_reverse_order(self):
        compare = reverse_order()
        assert compare(1, 2) > 0
        assert compare(2, 1) < 0
        assert compare(3, 3) == 0

        by_length = reverse_order(lambda a, b: len(a) - len(b))
        assert by_length("aaa", "a") < 0

    def test_comparing_key(self):
        compare = comparing(lambda pair: pair[1])
        assert compare(("x", 1), ("y", 2)) < 0
        assert compare(("x", 3), ("y", 2)) > 0

        by_name_desc = comparing(str.lower, reverse_order(comparing_strings()))
        assert by_name_desc("Alpha", "beta") > 0

    @pytest.mark.parametrize(
        "a, b, expected",
        [(1, 1.5, -1), (1.5, 1, 1), (2, 2.0, 0), (np.int64(3), 2.5, 1),
         (np.float32(0.5), 1, -1)]
    )
    def test_natural_order_mixed_numbers(self, a, b, expected):
        compare = natural_order()
        assert compare(a, b) == expected
        assert compare(b, a) == -expected

    def test_natural_order_mismatched_types_are_equal(self):
        compare = natural_order()
        assert compare("a", 1) == 0
        assert compare(1, "a") == 0

    def test_public_aliases(self):
        """Test the comparator aliases are exported at the top level"""
        assert javastyle.Comparator is Comparator
        assert javastyle.Equals is Equals
