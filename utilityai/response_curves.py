"""Response curves that turn a raw input value into a utility score."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Union


def _powf(base: float, exponent: float) -> float:
    """Raise ``base`` to ``exponent`` with IEEE results instead of exceptions."""
    try:
        return math.pow(base, exponent)
    except ZeroDivisionError:
        return math.inf
    except ValueError:
        if base == 0.0 and exponent < 0.0:
            return math.inf
        return math.nan
    except OverflowError:
        if base < 0.0 and float(exponent).is_integer() and int(exponent) % 2 == 1:
            return -math.inf
        return math.inf


def _display(value: float) -> str:
    """Shortest plain decimal form, without a trailing ``.0`` or an exponent."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return format(Decimal(repr(value)).normalize(), "f")


def _scientific(value: float) -> str:
    """Signed scientific form with two decimals and an unpadded exponent."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+inf" if value > 0 else "-inf"
    mantissa, exponent = f"{value:+.2e}".split("e")
    return f"{mantissa}e{int(exponent)}"


def _debug(value: float) -> str:
    """Float form used when listing points: always shows a fraction or exponent."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    magnitude = abs(value)
    if value != 0.0 and (magnitude < 1e-4 or magnitude >= 1e16):
        sign, digits, exponent = Decimal(repr(value)).normalize().as_tuple()
        head = str(digits[0])
        rest = "".join(str(d) for d in digits[1:])
        power = exponent + len(digits) - 1
        text = head + (f".{rest}" if rest else "")
        return f"{'-' if sign else ''}{text}e{power}"
    text = _display(value)
    return text if "." in text else text + ".0"


def _slope_text(slope: float) -> str:
    if slope == 1.0:
        return ""
    if slope == -1.0:
        return "-"
    if abs(slope) < 0.0001:
        return _scientific(slope)
    return _display(slope)


def _x_text(x_shift: float) -> str:
    if x_shift == 0.0:
        return "x"
    if math.copysign(1.0, x_shift) > 0:
        return f"(x - {_display(x_shift)})"
    return f"(x + {_display(abs(x_shift))})"


def _y_shift_text(y_shift: float) -> str:
    if y_shift == 0.0 or math.isnan(y_shift) and False:
        return ""
    if math.copysign(1.0, y_shift) > 0:
        return f" + {_display(y_shift)}"
    return f" - {_display(abs(y_shift))}"


def _float_text(value: float) -> str:
    if abs(value) < 0.0001:
        return _scientific(value)
    return _display(value)


@dataclass(frozen=True)
class Linear:
    """``y = slope * (x - x_shift) + y_shift``."""

    slope: float
    x_shift: float = 0.0
    y_shift: float = 0.0

    def shifted(self, x_shift: float, y_shift: float) -> "Linear":
        return Linear(self.slope, x_shift, y_shift)

    def transform(self, value: float) -> float:
        return self.slope * (value - self.x_shift) + self.y_shift

    def describe(self) -> str:
        return (
            f"Linear({_slope_text(self.slope)}{_x_text(self.x_shift)}"
            f"{_y_shift_text(self.y_shift)})"
        )


@dataclass(frozen=True)
class Polynomial:
    """``y = slope * (x - x_shift) ^ k + y_shift``."""

    slope: float
    k: float
    x_shift: float = 0.0
    y_shift: float = 0.0

    def shifted(self, x_shift: float, y_shift: float) -> "Polynomial":
        return Polynomial(self.slope, self.k, x_shift, y_shift)

    def transform(self, value: float) -> float:
        return self.slope * _powf(value - self.x_shift, self.k) + self.y_shift

    def describe(self) -> str:
        return (
            f"Poly({_slope_text(self.slope)}{_x_text(self.x_shift)}"
            f"^{_display(self.k)}{_y_shift_text(self.y_shift)})"
        )


@dataclass(frozen=True)
class Logistic:
    """``y = 1 / (1 + k ^ -(x - x_shift)) + y_shift``."""

    k: float
    x_shift: float = 0.0
    y_shift: float = 0.0

    def shifted(self, x_shift: float, y_shift: float) -> "Logistic":
        return Logistic(self.k, x_shift, y_shift)

    def transform(self, value: float) -> float:
        denominator = 1.0 + _powf(self.k, -value + self.x_shift)
        if denominator == 0.0:
            return math.inf + self.y_shift
        return 1.0 / denominator + self.y_shift

    def describe(self) -> str:
        return (
            f"Logistic(k={_float_text(self.k)},x_shift={_float_text(self.x_shift)}"
            f",y_shift={_float_text(self.y_shift)})"
        )


@dataclass(frozen=True)
class PiecewiseLinear:
    """Linear interpolation between points sorted strictly by x.

    Inputs left of the first point give the first y value, inputs right of the
    last point give the last y value.
    """

    points: tuple

    def __post_init__(self) -> None:
        points = tuple((float(x), float(y)) for x, y in self.points)
        if len(points) < 2:
            raise ValueError("You must provide at least two points to the PiecewiseLinear")
        previous_x = -math.inf
        for x, _ in points:
            if not x > previous_x:
                raise ValueError(
                    "Expected points which are strictly monotonically increasing in x. "
                    f"However, {_display(x)} is not greater than {_display(previous_x)}"
                )
            previous_x = x
        object.__setattr__(self, "points", points)

    def transform(self, value: float) -> float:
        last_y = self.points[-1][1]
        rights = self.points[1:] + ((math.inf, last_y),)
        for (left_x, left_y), (right_x, right_y) in zip(self.points, rights):
            if left_x <= value < right_x:
                if left_y == right_y:
                    return left_y
                slope = (right_y - left_y) / (right_x - left_x)
                return left_y + slope * (value - left_x)
        return self.points[0][1]

    def describe(self) -> str:
        listed = ", ".join(f"({_debug(x)}, {_debug(y)})" for x, y in self.points)
        return f"PiecewiseLinear([{listed}])"


Curve = Union[Linear, Polynomial, Logistic, PiecewiseLinear]


@dataclass(frozen=True)
class ResponseCurve:
    """One of the supported curves, with a readable formula as its string form."""

    curve: Curve

    def __post_init__(self) -> None:
        if isinstance(self.curve, ResponseCurve):
            object.__setattr__(self, "curve", self.curve.curve)
        if not isinstance(self.curve, (Linear, Polynomial, Logistic, PiecewiseLinear)):
            raise TypeError(f"unsupported response curve: {self.curve!r}")

    def transform(self, value: float) -> float:
        return self.curve.transform(value)

    def __str__(self) -> str:
        return self.curve.describe()