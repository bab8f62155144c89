"""Score histories and selection state behind the AI dashboard."""

from __future__ import annotations

import enum
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Hashable

from .definitions import AIDefinition, AIDefinitions
from .events import (
    ConsiderationCalculatedEvent,
    DecisionCalculatedEvent,
    InputCalculatedEvent,
)
from .world import PRE_UPDATE, UPDATE, App, World

GRAPH_HISTORY_SIZE = 256
INPUT_HISTORY_LIMIT = 1000


class ViewMode(enum.Enum):
    """What the dashboard shows for the selected entities."""

    DECISIONS = "Decisions"
    CONSIDERATIONS = "Considerations"
    INPUTS = "Inputs"
    RESPONSE_CURVES = "Response Curves"


@dataclass(frozen=True)
class ViewAIDefinition:
    """The marker type and name of a registered AI, as listed for selection."""

    id: type
    name: str

    @classmethod
    def from_ai_definition(cls, ai_definition: AIDefinition) -> "ViewAIDefinition":
        return cls(ai_definition.marker_type, ai_definition.name)


@dataclass
class DashboardData:
    """Registered AIs, their entities and the recorded score histories."""

    ai_definitions: list = field(default_factory=list)
    entities: list = field(default_factory=list)
    entity_input_scores: dict = field(default_factory=dict)
    input_scores: dict = field(default_factory=dict)
    consideration_scores: dict = field(default_factory=dict)
    decision_scores: dict = field(default_factory=dict)

    def clear(self) -> None:
        """Forget entities and score histories; the list of AIs is kept."""
        self.entities.clear()
        self.entity_input_scores.clear()
        self.consideration_scores.clear()
        self.decision_scores.clear()
        self.input_scores.clear()


@dataclass
class DashboardState:
    """What the user has selected on the dashboard."""

    view_mode: ViewMode = ViewMode.DECISIONS
    selected_ai_definition: ViewAIDefinition | None = None
    selected_entities: set = field(default_factory=set)
    paused: bool = False

    def reset(self) -> None:
        self.selected_entities = set()

    def autoselect(self, data: DashboardData) -> None:
        """Select the first AI and the first entity when nothing is selected."""
        if self.selected_ai_definition is None and data.ai_definitions:
            self.selected_ai_definition = data.ai_definitions[0]
        if not self.selected_entities and data.entities:
            self.selected_entities.add(data.entities[0])


@dataclass
class _PreviousSelection:
    marker: Any = None


def sync_dashboard_data(world: World) -> None:
    """Refresh the AI list and the entities driven by the selected AI."""
    data = world.resource(DashboardData)
    state = world.resource(DashboardState)
    if state.paused:
        return

    previous = world.get_resource(_PreviousSelection)
    if previous is None:
        previous = _PreviousSelection()
        world.insert_resource(previous)

    definitions = world.resource(AIDefinitions)
    data.ai_definitions = [
        ViewAIDefinition.from_ai_definition(definition)
        for definition in definitions.map.values()
    ]

    selection = state.selected_ai_definition
    selected = selection.id if selection is not None else None
    changed = selected != previous.marker
    if changed:
        data.clear()

    if selected is None:
        data.entities.clear()
    else:
        data.entities = sorted(entity for entity, _ in world.query(selected))

    previous.marker = selected
    if changed:
        state.reset()


def _shift_histories(store: dict) -> None:
    for per_entity in store.values():
        for history in per_entity.values():
            history.popleft()
            history.append(0.0)


def _record_history(store: dict, entity: int, key: Hashable, score: float) -> None:
    per_entity = store.setdefault(entity, {})
    history = per_entity.get(key)
    if history is None:
        history = per_entity[key] = deque([0.0] * GRAPH_HISTORY_SIZE)
    history.pop()
    history.append(score)


def _record_tick(store: dict, events: list, state: DashboardState, key_of) -> None:
    # Every history moves on a step even without an event, so series stay aligned.
    if events:
        _shift_histories(store)
    for event in events:
        if event.entity in state.selected_entities:
            _record_history(store, event.entity, key_of(event), event.score)


def record_input_scores(world: World) -> None:
    """Record input scores for selected entities and for the selected AI."""
    data = world.resource(DashboardData)
    state = world.resource(DashboardState)
    if state.paused:
        return
    events = world.events(InputCalculatedEvent)
    _record_tick(
        data.entity_input_scores, events, state, lambda event: (event.input, event.target)
    )
    for event in events:
        if event.entity in data.entities:
            history = data.input_scores.setdefault(event.input, deque())
            if len(history) > INPUT_HISTORY_LIMIT:
                history.popleft()
            history.append(event.score)


def record_consideration_scores(world: World) -> None:
    """Record consideration scores for the selected entities."""
    data = world.resource(DashboardData)
    state = world.resource(DashboardState)
    if state.paused:
        return
    _record_tick(
        data.consideration_scores,
        world.events(ConsiderationCalculatedEvent),
        state,
        lambda event: (event.consideration, event.target),
    )


def record_decision_scores(world: World) -> None:
    """Record decision scores for the selected entities."""
    data = world.resource(DashboardData)
    state = world.resource(DashboardState)
    if state.paused:
        return
    _record_tick(
        data.decision_scores,
        world.events(DecisionCalculatedEvent),
        state,
        lambda event: (event.decision, event.target),
    )


def _autoselect(world: World) -> None:
    world.resource(DashboardState).autoselect(world.resource(DashboardData))


class UtilityAIDashboardPlugin:
    """Adds the dashboard resources and the systems that keep them current."""

    def build(self, app: App) -> None:
        world = app.world
        if world.get_resource(DashboardData) is None:
            world.insert_resource(DashboardData())
        if world.get_resource(DashboardState) is None:
            world.insert_resource(DashboardState())
        app.add_systems(PRE_UPDATE, None, sync_dashboard_data)
        app.add_systems(
            UPDATE,
            None,
            _autoselect,
            record_input_scores,
            record_consideration_scores,
            record_decision_scores,
        )