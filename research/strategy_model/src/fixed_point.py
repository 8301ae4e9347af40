"""Basis point arithmetic

Every ratio in the model is an int scaled by BPS_SCALE (10000 = 100%).
Division truncates toward zero, never rounds, so results match the
integer math of the deployed vault bit for bit.
"""
from .constants import BPS_SCALE, PERCENT_SCALE, WORD_MAX
from .errors import FixedPointOverflowError


def checked_mul(a: int, b: int) -> int:
    """Multiply with overflow checking"""
    result = a * b
    if result > WORD_MAX:
        raise FixedPointOverflowError("Arithmetic overflow in multiplication")
    return result


def checked_add(a: int, b: int) -> int:
    """Add with overflow checking"""
    result = a + b
    if result > WORD_MAX:
        raise FixedPointOverflowError("Arithmetic overflow in addition")
    return result


def trunc_div(a: int, b: int) -> int:
    """Integer division truncating toward zero

    Python's // floors, which differs from truncation for negative operands.
    """
    if b == 0:
        raise ZeroDivisionError("Division by zero")
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def mul_div(a: int, b: int, denominator: int) -> int:
    """a * b / denominator with a single truncation"""
    return trunc_div(checked_mul(a, b), denominator)


def apply_bps(amount: int, bps: int) -> int:
    """Scale amount by a basis point factor, e.g. apply_bps(500, 2000) == 100"""
    return mul_div(amount, bps, BPS_SCALE)


def to_bps_ratio(numerator: int, denominator: int) -> int:
    """numerator / denominator expressed in basis points"""
    return mul_div(numerator, BPS_SCALE, denominator)


def bps_to_percent(bps: int) -> int:
    """Whole percent units, truncating: 799 bps -> 7"""
    return trunc_div(bps, PERCENT_SCALE)
