import pytest

from parley.util import F32_EPSILON, nearly_eq, nearly_zero


def test_equal_values_are_nearly_equal():
    assert nearly_eq(1.5, 1.5) is True


def test_distinct_values_are_not_nearly_equal():
    assert nearly_eq(1.0, 1.1) is False


def test_difference_below_epsilon_counts_as_equal():
    assert nearly_eq(2.0, 2.0 + F32_EPSILON / 2) is True


def test_difference_of_exactly_epsilon_is_not_equal():
    assert nearly_eq(0.0, F32_EPSILON) is False


@pytest.mark.parametrize("x, y", [(3.0, 4.0), (-1.0, 1.0), (0.25, 0.5)])
def test_nearly_eq_is_symmetric(x, y):
    assert nearly_eq(x, y) == nearly_eq(y, x)


def test_nearly_zero():
    assert nearly_zero(0.0) is True
    assert nearly_zero(-0.0) is True
    assert nearly_zero(1e-3) is False