"""AI definitions, their input requirements and per-entity AI state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable, Iterable

from .decisions import Filter


@dataclass(frozen=True)
class FilterDefinition:
    """Which targets a targeted input must score.

    ``groups`` is ``None`` when any target will do. Otherwise it holds one
    group of filters per decision that uses the input; a target is needed if
    it matches every filter of at least one group.
    """

    groups: tuple[tuple[Filter, ...], ...] | None = None

    @classmethod
    def any(cls) -> "FilterDefinition":
        return cls(None)

    @classmethod
    def filtered(cls, groups: Iterable[Iterable[Filter]]) -> "FilterDefinition":
        return cls(tuple(tuple(group) for group in groups))

    @property
    def is_any(self) -> bool:
        return self.groups is None

    def merge(self, other: "FilterDefinition") -> "FilterDefinition":
        """Combine two requirements; any unfiltered side makes the result unfiltered."""
        if self.groups is None or other.groups is None:
            return FilterDefinition.any()
        return FilterDefinition(self.groups + other.groups)


@dataclass
class TargetedInputRequirements:
    """What an AI needs from one targeted input."""

    target_filter: FilterDefinition = field(default_factory=FilterDefinition.any)


@dataclass
class AIDefinition:
    """A registered AI: its decisions and the inputs those decisions use."""

    name: str
    marker_type: type
    default_inertia: float = 0.0
    decisions: list = field(default_factory=list)
    simple_inputs: set = field(default_factory=set)
    targeted_inputs: dict = field(default_factory=dict)

    def requires_targeted_input(self, input: Hashable) -> bool:
        return input in self.targeted_inputs

    def requires_simple_input(self, input: Hashable) -> bool:
        return input in self.simple_inputs

    def get_targeted_input_requirements(self, input: Hashable) -> TargetedInputRequirements:
        """Requirements for a targeted input; ``KeyError`` if the AI does not use it."""
        return self.targeted_inputs[input]


@dataclass
class AIDefinitions:
    """All registered AIs, keyed by their marker component type."""

    map: dict = field(default_factory=dict)


@dataclass
class ActionTarget:
    """Component holding the entity targeted by the current action."""

    target: int


@dataclass
class AIMeta:
    """Component holding the AI state of one entity."""

    ai_definition: type
    input_scores: dict = field(default_factory=dict)
    targeted_input_scores: dict = field(default_factory=dict)
    current_action: Any = None
    current_action_score: float = -1.0
    current_action_name: str = ""
    current_target: int | None = None

    @classmethod
    def for_marker(cls, marker: type) -> "AIMeta":
        """Fresh state for an entity driven by the AI registered under ``marker``."""
        return cls(ai_definition=marker)