"""Floating point helpers with IEEE-754 semantics. Python's float operators raise where IEEE-754 produces inf or NaN
(`1 / 0`, `(-8) ** (1 / 3)` is complex, `math.floor(inf)` overflows), so arithmetic that can hit those cases goes
through here instead.

Source: https://en.wikipedia.org/wiki/IEEE_754#Exception_handling
"""

import math

from exprsolver.lang.error import LogicError

MAX_FACTORIAL = 170  # 171! overflows a double
MIN_INTEGRAL = 2.0 ** 52  # every double at least this large is an integer


def divide(lhs, rhs):
    """lhs / rhs, giving +-inf for a non-zero lhs and NaN for 0 / 0."""
    if rhs != 0:
        return lhs / rhs
    if lhs == 0 or math.isnan(lhs):
        return math.nan
    return math.copysign(math.inf, lhs) * math.copysign(1.0, rhs)


def _is_odd_integer(num):
    return math.isfinite(num) and num.is_integer() and num % 2 == 1


def power(base, exponent):
    """Real-valued base ^ exponent: NaN for a negative base with a non-integer exponent, inf on overflow."""
    try:
        return math.pow(base, exponent)
    except ValueError:
        if base == 0 and exponent < 0:  # pole
            return math.copysign(math.inf, base) if _is_odd_integer(exponent) else math.inf
        return math.nan
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf


def factorial(num):
    """Factorial of a positive integer held in a float. Values less than 1 and non-integers are domain errors."""
    if num < 1:
        raise LogicError(f"factorial of a value less than 1 ({num:g})")
    if not float(num).is_integer():  # also rejects inf and NaN
        raise LogicError(f"factorial of a non-integer ({num:g})")

    if num > MAX_FACTORIAL:
        return math.inf
    return float(math.factorial(int(num)))


def _if_finite(func):
    """Wraps a rounding function so that inf and NaN pass through unchanged."""
    def wrapper(num):
        return float(func(num)) if math.isfinite(num) else num
    wrapper.__name__ = func.__name__
    return wrapper


@_if_finite
def round_half_away(num):
    """Rounds half away from zero: round_half_away(2.5) == 3, unlike round (banker's rounding).

    Adding 0.5 before flooring is inexact for 0.49999999999999994 and for anything above 2 ** 52, so the fraction is
    compared instead.
    """
    magnitude = abs(num)
    if magnitude >= MIN_INTEGRAL:
        return num

    truncated = math.floor(magnitude)
    if magnitude - truncated >= 0.5:
        truncated += 1
    return math.copysign(truncated, num)


ceil = _if_finite(math.ceil)
floor = _if_finite(math.floor)


def sqrt(num):
    """Square root, NaN for negative numbers."""
    if num < 0:
        return math.nan
    return math.sqrt(num)
