"""Amounts of storage with a unit, convertible between units like durations."""

from __future__ import annotations

from fractions import Fraction
from numbers import Real
from typing import Union

KB = 1024
MB = KB * 1024
GB = MB * 1024
TB = GB * 1024

Number = Union[int, float]


def _trunc_div(a: int, b: int) -> int:
    """Integer division that rounds toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _as_period(period) -> Fraction:
    if isinstance(period, bool) or not isinstance(period, (int, Fraction)):
        raise TypeError(f"period must be an int or Fraction, not {type(period).__name__}")
    value = Fraction(period)
    if value <= 0:
        raise ValueError("period must be positive")
    return value


def _convert(count: Number, from_period: Fraction, to_period: Fraction) -> Number:
    ratio = from_period / to_period
    if isinstance(count, int):
        return _trunc_div(count * ratio.numerator, ratio.denominator)
    return float(count) * ratio.numerator / ratio.denominator


class Space:
    """A count of units, each unit being ``period`` bytes."""

    __slots__ = ("_count", "_period")

    def __init__(self, count: Number = 0, period=1) -> None:
        if isinstance(count, bool) or not isinstance(count, Real):
            raise TypeError(f"count must be a number, not {type(count).__name__}")
        self._count = count if isinstance(count, int) else float(count)
        self._period = _as_period(period)

    @property
    def count(self) -> Number:
        return self._count

    @property
    def period(self) -> Fraction:
        return self._period

    def cast(self, period) -> "Space":
        """Return this amount expressed in units of ``period`` bytes (truncating ints)."""
        target = _as_period(period)
        return Space(_convert(self._count, self._period, target), target)

    def _common(self, other: "Space") -> tuple[Number, Number, Fraction]:
        period = min(self._period, other._period)
        return self.cast(period)._count, other.cast(period)._count, period

    def __add__(self, other):
        if isinstance(other, Space):
            a, b, period = self._common(other)
            return Space(a + b, period)
        if isinstance(other, Real) and not isinstance(other, bool):
            return Space(self._count + other, self._period)
        return NotImplemented

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        if isinstance(other, Space):
            a, b, period = self._common(other)
            return Space(a - b, period)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, Real) and not isinstance(other, bool):
            return Space(self._count * other, self._period)
        return NotImplemented

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        if isinstance(other, Space):
            period = min(self._period, other._period)
            a = _convert(float(self._count), self._period, period)
            b = _convert(float(other._count), other._period, period)
            return a / b
        if isinstance(other, Real) and not isinstance(other, bool):
            if isinstance(self._count, int) and isinstance(other, int):
                return Space(_trunc_div(self._count, other), self._period)
            return Space(self._count / other, self._period)
        return NotImplemented

    def __mod__(self, other):
        if isinstance(other, Space):
            a, b, period = self._common(other)
        elif isinstance(other, int) and not isinstance(other, bool):
            a, b, period = self._count, other, self._period
        else:
            return NotImplemented
        if not (isinstance(a, int) and isinstance(b, int)):
            raise TypeError("modulo needs integer counts")
        return Space(a - b * _trunc_div(a, b), period)

    def __neg__(self) -> "Space":
        return Space(-self._count, self._period)

    def __pos__(self) -> "Space":
        return Space(self._count, self._period)

    def __eq__(self, other):
        if not isinstance(other, Space):
            return NotImplemented
        a, b, _ = self._common(other)
        return a == b

    def __lt__(self, other):
        if not isinstance(other, Space):
            return NotImplemented
        a, b, _ = self._common(other)
        return a < b

    def __gt__(self, other):
        if not isinstance(other, Space):
            return NotImplemented
        return other < self

    def __le__(self, other):
        if not isinstance(other, Space):
            return NotImplemented
        return not self > other

    def __ge__(self, other):
        if not isinstance(other, Space):
            return NotImplemented
        return not self < other

    def __hash__(self) -> int:
        if isinstance(self._count, int):
            return hash(Fraction(self._count) * self._period)
        return hash(self._count * float(self._period))

    def __repr__(self) -> str:
        return f"Space({self._count!r}, {self._period})"


def space_cast(value: Space, period) -> Space:
    """Express ``value`` in units of ``period`` bytes."""
    return value.cast(period)


def bytes_(count: Number) -> Space:
    return Space(count, 1)


def kilobytes(count: Number) -> Space:
    return Space(count, KB)


def megabytes(count: Number) -> Space:
    return Space(count, MB)


def gigabytes(count: Number) -> Space:
    return Space(count, GB)


def terabytes(count: Number) -> Space:
    return Space(count, TB)