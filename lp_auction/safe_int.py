"""Checked integer arithmetic for token amounts.

Token amounts in the auction never go negative. SafeInt makes that an
invariant instead of a convention:
- Subtraction underflow raises Underflow
- Division by zero raises DivisionByZero
- Square roots are floored, matching the integer sqrt of the pool contracts

Usage pattern:
    from lp_auction.safe_int import S

    def balance_after(balance: int, spent: int) -> int:
        return (S(balance) - S(spent)).value
"""

from __future__ import annotations

import math


class SafeIntError(ArithmeticError):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class Underflow(SafeIntError):
    """Result would be negative."""

    pass


class SafeInt:
    """Non-negative integer with checked arithmetic.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            if value < 0:
                raise Underflow(f"SafeInt cannot hold a negative value: {value}")
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __hash__(self) -> int:
        return hash(self._value)

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _extract_value(other))

    __radd__ = __add__

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    __rmul__ = __mul__

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    def __pow__(self, exponent: int) -> SafeInt:
        return SafeInt(self._value**exponent)

    def isqrt(self) -> SafeInt:
        """Floor of the square root."""
        return SafeInt(math.isqrt(self._value))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt | int):
            return self._value == _extract_value(other)
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)


def _extract_value(other: SafeInt | int) -> int:
    if isinstance(other, SafeInt):
        return other._value
    if isinstance(other, int):
        return other
    raise TypeError(f"Expected int or SafeInt, got {type(other).__name__}")


# Short alias, mirrors the wrap-at-entry style used across the math layer
S = SafeInt
