"""
Tests for memoize() and its argument keys.
"""

import pytest

from callgate import memoize
from callgate.decorators import make_key


def test_repeated_argument_computes_once():
    runs = 0

    def double(n):
        nonlocal runs
        runs += 1
        return n * 2

    cached = memoize(double)

    assert cached(3) == 6
    assert cached(3) == 6
    assert runs == 1


def test_distinct_arguments_each_compute():
    seen = []
    cached = memoize(lambda n: seen.append(n) or n + 1)

    assert [cached(1), cached(2), cached(1), cached(2)] == [2, 3, 2, 3]
    assert seen == [1, 2]


@pytest.mark.parametrize("left, right", [(1, "1"), (1, True), (1, 1.0), (0, False), ("", None)])
def test_equal_looking_primitives_do_not_share_a_slot(left, right):
    cached = memoize(lambda value: type(value).__name__)

    assert cached(left) == type(left).__name__
    assert cached(right) == type(right).__name__


def test_arguments_are_spread_into_the_function():
    cached = memoize(lambda a, b, c=0: (a, b, c))

    assert cached(1, 2) == (1, 2, 0)
    assert cached(1, 2, c=3) == (1, 2, 3)
    assert cached(2, 1) == (2, 1, 0)


def test_keyword_order_does_not_matter():
    runs = []
    cached = memoize(lambda **kw: runs.append(kw) or sorted(kw))

    cached(a=1, b=2)
    cached(b=2, a=1)

    assert len(runs) == 1
    assert make_key((), {"a": 1, "b": 2}) == make_key((), {"b": 2, "a": 1})


def test_positional_and_keyword_keys_differ():
    assert make_key(("a", 1), {}) != make_key((), {"a": 1})


def test_exception_is_not_cached():
    attempts = []

    def fragile(n):
        attempts.append(n)
        if len(attempts) == 1:
            raise ValueError("boom")
        return n

    cached = memoize(fragile)

    with pytest.raises(ValueError, match="boom"):
        cached(5)
    assert cached(5) == 5
    assert cached(5) == 5
    assert attempts == [5, 5]


def test_recursive_function_uses_its_own_cache():
    calls = []

    @memoize
    def fib(n):
        calls.append(n)
        return n if n < 2 else fib(n - 1) + fib(n - 2)

    assert fib(30) == 832040
    assert len(calls) == 31


def test_unhashable_argument_raises():
    cached = memoize(len)

    with pytest.raises(TypeError):
        cached([1, 2, 3])


def test_each_wrapper_has_its_own_cache():
    first = memoize(lambda n: ("first", n))
    second = memoize(lambda n: ("second", n))

    assert first(1) == ("first", 1)
    assert second(1) == ("second", 1)


def test_first_stored_value_wins_when_recursion_fills_the_slot():
    calls = []

    @memoize
    def lookup(key):
        calls.append(key)
        if len(calls) == 1:
            lookup(key)
            return "outer"
        return "inner"

    assert lookup("x") == "inner"
    assert lookup("x") == "inner"
    assert calls == ["x", "x"]


def test_nan_arguments_share_one_slot():
    runs = []
    cached = memoize(lambda value: runs.append(value) or "nan")

    assert cached(float("nan")) == "nan"
    assert cached(float("nan")) == "nan"
    assert len(runs) == 1
    assert make_key((float("nan"),), {}) == make_key((float("nan"),), {})
