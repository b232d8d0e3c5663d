"""WAD (18-decimal) fixed-point math.

Prices, ratios and decay rates in the auction ledger are integers scaled by
10^18. The exponential is the digit-extraction + Taylor series construction
used by Balancer's LogExpMath.sol, which keeps every intermediate value an
integer so results are reproducible bit for bit.
"""

from __future__ import annotations

__all__ = [
    # Errors
    "FixedPointError",
    "InvalidExponent",
    # Functions
    "exp",
    "exp_or_zero",
    "mul_down",
    "div_down",
    # Constants
    "WAD",
    "ONE_18",
    "ONE_20",
    "MAX_NATURAL_EXPONENT",
    "MIN_NATURAL_EXPONENT",
]

# =============================================================================
# Constants
# =============================================================================

ONE_18 = 10**18
ONE_20 = 10**20

WAD = ONE_18

MAX_NATURAL_EXPONENT = 130 * ONE_18
MIN_NATURAL_EXPONENT = -41 * ONE_18  # e^-41 rounds to zero at 18 decimals

# x_n are powers of two, a_n = e^x_n
X_18 = {
    0: 128 * ONE_18,
    1: 64 * ONE_18,
}
A_18 = {
    0: 38877084059945950922200000000000000000000000000000000000,  # e^128
    1: 6235149080811616882910000000,  # e^64
}

X_20 = {
    2: 32 * ONE_20,
    3: 16 * ONE_20,
    4: 8 * ONE_20,
    5: 4 * ONE_20,
    6: 2 * ONE_20,
    7: 1 * ONE_20,
    8: ONE_20 // 2,
    9: ONE_20 // 4,
}
A_20 = {
    2: 7_896_296_018_268_069_516_100_000_000_000_000,  # e^32
    3: 888_611_052_050_787_263_676_000_000,  # e^16
    4: 298_095_798_704_172_827_474_000,  # e^8
    5: 5_459_815_003_314_423_907_810,  # e^4
    6: 738_905_609_893_065_022_723,  # e^2
    7: 271_828_182_845_904_523_536,  # e^1
    8: 164_872_127_070_012_814_685,  # e^0.5
    9: 128_402_541_668_774_148_407,  # e^0.25
}


# =============================================================================
# Errors
# =============================================================================


class FixedPointError(ArithmeticError):
    """Base error for fixed-point operations."""

    pass


class InvalidExponent(FixedPointError):
    """Exponent is outside [MIN_NATURAL_EXPONENT, MAX_NATURAL_EXPONENT]."""

    pass


# =============================================================================
# Arithmetic
# =============================================================================


def mul_down(a: int, b: int) -> int:
    """Multiply two WAD values, truncating toward zero.

    Both operands are unsigned in the ledger, so floor division is
    truncation.
    """
    if a < 0 or b < 0:
        raise FixedPointError(f"mul_down requires non-negative operands: {a}, {b}")
    return (a * b) // WAD


def div_down(a: int, b: int) -> int:
    """Divide two WAD values, truncating toward zero."""
    if b == 0:
        raise ZeroDivisionError("WAD division by zero")
    if a < 0 or b < 0:
        raise FixedPointError(f"div_down requires non-negative operands: {a}, {b}")
    return (a * WAD) // b


def exp(x: int) -> int:
    """Compute e^x where x is 18-decimal fixed-point.

    Args:
        x: Exponent in 18-decimal fixed-point (can be negative).

    Returns:
        e^x as 18-decimal fixed-point integer.

    Raises:
        InvalidExponent: If x is outside [MIN_NATURAL_EXPONENT, MAX_NATURAL_EXPONENT]
    """
    if not (MIN_NATURAL_EXPONENT <= x <= MAX_NATURAL_EXPONENT):
        raise InvalidExponent(f"Exponent {x} outside valid range")

    if x < 0:
        # e^-x = 1 / e^x
        return (ONE_18 * ONE_18) // exp(-x)

    if x >= X_18[0]:
        x -= X_18[0]
        first_an = A_18[0]
    elif x >= X_18[1]:
        x -= X_18[1]
        first_an = A_18[1]
    else:
        first_an = 1

    # Work at 20 decimals for the remaining digits
    x *= 100

    product = ONE_20
    for i in range(2, 10):
        if x >= X_20[i]:
            x -= X_20[i]
            product = (product * A_20[i]) // ONE_20

    # Taylor series up to x^12/12!
    series_sum = ONE_20 + x
    term = x
    for i in range(2, 13):
        term = ((term * x) // ONE_20) // i
        series_sum += term

    return (((product * series_sum) // ONE_20) * first_an) // 100


def exp_or_zero(x: int) -> int:
    """e^x, saturating to zero below MIN_NATURAL_EXPONENT.

    Decay factors e^(-rate * elapsed) underflow after long idle periods; at
    18 decimals those factors are indistinguishable from zero.
    """
    if x < MIN_NATURAL_EXPONENT:
        return 0
    return exp(x)
