"""Events reporting the scores calculated while making decisions."""

from __future__ import annotations

import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class InputCalculatedEvent:
    """An input's score for an entity, and a target if the input is targeted."""

    entity: int
    input: str
    target: int | None
    score: float


@dataclass(frozen=True)
class ConsiderationCalculatedEvent:
    """A consideration's score for an entity within one decision."""

    entity: int
    consideration: uuid.UUID
    decision: uuid.UUID
    target: int | None
    score: float


@dataclass(frozen=True)
class DecisionCalculatedEvent:
    """A decision's total score for an entity, and a target if it is targeted."""

    entity: int
    decision: uuid.UUID
    target: int | None
    score: float