from typing import Any, Callable, Optional, TypeVar

import numpy as np

T = TypeVar("T")
K = TypeVar("K")

# Negative if a < b, 0 if a == b, positive if a > b.
Comparator = Callable[[T, T], int]
Equals = Callable[[T, T], bool]


def comparing_ints() -> Comparator[int]:
    """Order integers by subtraction."""
    def compare(a, b) -> int:
        return int(a) - int(b)
    return compare


def comparing_floats() -> Comparator[float]:
    """
    Order floating point values by the sign of their difference.

    NaN is neither smaller nor larger than anything, so it compares as 0
    against every value.
    """
    def compare(a, b) -> int:
        if a < b:
            return -1
        if a > b:
            return 1
        return 0
    return compare


def comparing_strings() -> Comparator[str]:
    """Order strings lexicographically by code point."""
    def compare(a: str, b: str) -> int:
        return (a > b) - (a < b)
    return compare


_INTS = comparing_ints()
_FLOATS = comparing_floats()
_STRINGS = comparing_strings()

_INT_TYPES = (int, np.integer)
_FLOAT_TYPES = (float, np.floating)


def natural_order() -> Comparator[Any]:
    """
    Default comparator used when a queue is built without one.

    Dispatches on the argument types. Two integers (including ``bool`` and
    numpy integers) compare as integers; a float (including numpy floats)
    on either side compares both as floats; two strings compare
    lexicographically. Every other combination compares as equal, so
    callers holding any other element type must supply their own
    comparator.

    Returns
    -------
    Comparator[Any]
        The natural ordering comparator.
    """
    def compare(a, b) -> int:
        a_int = isinstance(a, _INT_TYPES)
        b_int = isinstance(b, _INT_TYPES)
        if a_int and b_int:
            return _INTS(a, b)
        if (a_int or isinstance(a, _FLOAT_TYPES)) and (
            b_int or isinstance(b, _FLOAT_TYPES)
        ):
            return _FLOATS(a, b)
        if isinstance(a, str) and isinstance(b, str):
            return _STRINGS(a, b)
        return 0
    return compare


def reverse_order(comparator: Optional[Comparator[T]] = None) -> Comparator[T]:
    """
    Comparator imposing the reverse of ``comparator``.

    Parameters
    ----------
    comparator : Comparator, optional
        The ordering to reverse, by default the natural ordering.

    Returns
    -------
    Comparator
        A comparator where ``reversed(a, b) == comparator(b, a)``.
    """
    base = comparator if comparator is not None else natural_order()

    def compare(a, b) -> int:
        return base(b, a)
    return compare


def comparing(
    key: Callable[[T], K],
    comparator: Optional[Comparator[K]] = None
) -> Comparator[T]:
    """
    Comparator that orders elements by a sort key extracted with ``key``.

    Parameters
    ----------
    key : Callable
        Function extracting the sort key from an element.
    comparator : Comparator, optional
        Ordering applied to the extracted keys, by default the natural
        ordering.

    Returns
    -------
    Comparator
        The key-based comparator.
    """
    key_comparator = comparator if comparator is not None else natural_order()

    def compare(a, b) -> int:
        return key_comparator(key(a), key(b))
    return compare
