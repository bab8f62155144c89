"""Builder that declares an AI as a set of decisions and registers it."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from typing import Any

from .considerations import ConsiderationType
from .decisions import Decision
from .definitions import (
    AIDefinition,
    AIDefinitions,
    FilterDefinition,
    TargetedInputRequirements,
)
from .systems import ensure_entity_has_ai_meta, handle_ai_marker_removed
from .utils import trim_type_name, type_name_of
from .world import App, UtilityAISet


@dataclass
class UtilityAISettings:
    """The schedule that AIs run in unless they choose another."""

    default_schedule: str


@dataclass
class AddedSystemTracker:
    """Inputs whose systems are already added, so each is added only once."""

    systems: set = field(default_factory=set)


class DefineUtilityAI:
    """Collects decisions for the AI keyed by ``marker`` and registers it on an app."""

    def __init__(self, marker: type) -> None:
        self.marker = marker
        self.name = trim_type_name(type_name_of(marker))
        self.decisions: list[Decision] = []
        self.simple_inputs: set = set()
        self.targeted_inputs: dict[Any, TargetedInputRequirements] = {}
        self.default_inertia = 0.0
        self.schedule: str | None = None

    def add_decision(self, decision: Decision) -> "DefineUtilityAI":
        for consideration in decision.considerations:
            if consideration.consideration_type is ConsiderationType.SIMPLE:
                self.simple_inputs.add(consideration.input)
                continue
            if decision.target_filters:
                wanted = FilterDefinition.filtered([decision.target_filters])
            else:
                wanted = FilterDefinition.any()
            requirements = self.targeted_inputs.get(consideration.input)
            if requirements is None:
                self.targeted_inputs[consideration.input] = TargetedInputRequirements(wanted)
            else:
                requirements.target_filter = requirements.target_filter.merge(wanted)
        self.decisions.append(decision)
        return self

    def use_schedule(self, schedule: str) -> "DefineUtilityAI":
        self.schedule = schedule
        return self

    def set_default_inertia(self, value: float) -> "DefineUtilityAI":
        if not 0.0 <= value < 1.0:
            raise ValueError("value must be between 0.0 and 1.0")
        self.default_inertia = value
        return self

    def register(self, app: App) -> None:
        """Add this AI's systems to the app and record its definition."""
        world = app.world
        tracker = world.remove_resource(AddedSystemTracker)
        if tracker is None:
            raise RuntimeError(
                "Make sure the plugin is added to the app before calls to DefineAI"
            )

        schedule = self.schedule
        if schedule is None:
            schedule = world.resource(UtilityAISettings).default_schedule

        app.add_systems(
            schedule, UtilityAISet.PREPARE, partial(ensure_entity_has_ai_meta, marker=self.marker)
        )
        app.add_systems(
            schedule, UtilityAISet.TIDYUP, partial(handle_ai_marker_removed, marker=self.marker)
        )

        for decision in self.decisions:
            for consideration in decision.considerations:
                system = consideration.system
                if system is None:
                    raise RuntimeError(
                        f"Consideration '{consideration.name}' has already been registered"
                    )
                consideration.system = None
                if consideration.input not in tracker.systems:
                    app.add_systems(schedule, UtilityAISet.CALCULATE_INPUTS, system)
                    tracker.systems.add(consideration.input)

        world.insert_resource(tracker)

        definitions = world.resource(AIDefinitions)
        if self.marker in definitions.map:
            raise ValueError("AI is already defined for this marker component!")
        definitions.map[self.marker] = AIDefinition(
            name=self.name,
            marker_type=self.marker,
            default_inertia=self.default_inertia,
            decisions=self.decisions,
            simple_inputs=self.simple_inputs,
            targeted_inputs=self.targeted_inputs,
        )