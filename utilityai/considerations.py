"""Considerations: scored, curve-shaped views on an input."""

from __future__ import annotations

import enum
import math
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Hashable

from .response_curves import Linear, ResponseCurve
from .utils import trim_type_name, type_id_of, type_name_of


class ConsiderationType(enum.Enum):
    SIMPLE = "simple"
    TARGETED = "targeted"


def _as_curve(curve: Any) -> ResponseCurve:
    return curve if isinstance(curve, ResponseCurve) else ResponseCurve(curve)


@dataclass
class Consideration:
    """An input together with the curve and bounds used to score it."""

    name: str
    input: Hashable
    input_name: str
    consideration_type: ConsiderationType
    system: Callable[..., Any] | None
    response_curve: ResponseCurve = field(default_factory=lambda: ResponseCurve(Linear(1.0)))
    lower_bound: float = 0.0
    upper_bound: float = 1.0
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def _construct(cls, system: Callable[..., Any], kind: ConsiderationType) -> "Consideration":
        input_name = trim_type_name(type_name_of(system))
        curve = ResponseCurve(Linear(1.0))
        return cls(
            name=f"{input_name} - {curve}",
            input=type_id_of(system),
            input_name=input_name,
            consideration_type=kind,
            system=system,
            response_curve=curve,
        )

    @classmethod
    def simple(cls, input: Callable[..., Any]) -> "Consideration":
        """A consideration over an input that scores the entity alone."""
        return cls._construct(input, ConsiderationType.SIMPLE)

    @classmethod
    def targeted(cls, input: Callable[..., Any]) -> "Consideration":
        """A consideration over an input that scores the entity against targets."""
        return cls._construct(input, ConsiderationType.TARGETED)

    def calculate_score(self, input_score: float) -> float:
        score = self.response_curve.transform(input_score)
        if math.isnan(score):
            return score
        return min(max(score, self.lower_bound), self.upper_bound)

    def with_response_curve(self, response_curve: Any) -> "Consideration":
        curve = _as_curve(response_curve)
        return replace(self, response_curve=curve, name=f"{self.input_name} - {curve}")

    def with_bounds(self, lower: float, upper: float) -> "Consideration":
        """Set the score bounds; the defaults are 0.0 and 1.0."""
        if lower < 0.0:
            raise ValueError("Consideration's lower bound must be >= 0.0")
        if lower >= upper:
            raise ValueError("The lower bound must be less than the upper bound")
        return replace(self, lower_bound=lower, upper_bound=upper)

    def with_name(self, name: str) -> "Consideration":
        return replace(self, name=str(name))