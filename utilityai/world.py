"""A small entity-component store and an app that runs systems on it."""

from __future__ import annotations

import enum
import itertools
from collections import defaultdict
from typing import Any, Callable, Iterator

STARTUP = "Startup"
FIRST = "First"
PRE_UPDATE = "PreUpdate"
UPDATE = "Update"
POST_UPDATE = "PostUpdate"
LAST = "Last"

_FRAME_SCHEDULES = (FIRST, PRE_UPDATE, UPDATE, POST_UPDATE, LAST)

System = Callable[["World"], Any]


class UtilityAISet(enum.Enum):
    """Phases of a schedule, run in the order they are declared."""

    PREPARE = enum.auto()
    CALCULATE_INPUTS = enum.auto()
    MAKE_DECISIONS = enum.auto()
    UPDATE_ACTIONS = enum.auto()
    TIDYUP = enum.auto()


class World:
    """Entities with typed components, resources, events and removal logs.

    Entities are integers. Each entity holds at most one component per type.
    """

    def __init__(self) -> None:
        self._entities: dict[int, dict[type, Any]] = {}
        self._ids: Iterator[int] = itertools.count()
        self._removed: defaultdict[type, list[int]] = defaultdict(list)
        self._resources: dict[type, Any] = {}
        self._events: defaultdict[type, list[Any]] = defaultdict(list)

    def _components(self, entity: int) -> dict[type, Any]:
        try:
            return self._entities[entity]
        except KeyError:
            raise KeyError(f"entity {entity} does not exist") from None

    def spawn(self, *args: Any) -> int:
        """Create an entity holding the given components and return its id."""
        entity = next(self._ids)
        self._entities[entity] = {}
        self.insert(entity, *args)
        return entity

    def despawn(self, entity: int) -> bool:
        """Delete an entity; its components are logged as removed."""
        components = self._entities.pop(entity, None)
        if components is None:
            return False
        for component_type in components:
            self._removed[component_type].append(entity)
        return True

    def contains(self, entity: int) -> bool:
        return entity in self._entities

    def insert(self, entity: int, *args: Any) -> None:
        """Add components to an entity, replacing any of the same type."""
        components = self._components(entity)
        for component in args:
            components[type(component)] = component

    def remove(self, entity: int, component_type: type) -> Any:
        """Remove and return a component, or return ``None`` if it was absent."""
        component = self._components(entity).pop(component_type, None)
        if component is not None:
            self._removed[component_type].append(entity)
        return component

    def get(self, entity: int, component_type: type) -> Any:
        return self._components(entity).get(component_type)

    def has(self, entity: int, component_type: type) -> bool:
        return component_type in self._entities.get(entity, ())

    def query(self, *args: type) -> list[tuple]:
        """Tuples of an entity id and its components, for entities holding all types."""
        return [
            (entity, *(components[t] for t in args))
            for entity, components in sorted(self._entities.items())
            if all(t in components for t in args)
        ]

    def drain_removed(self, component_type: type) -> list[int]:
        """Entities that lost a component of this type since the last drain."""
        return self._removed.pop(component_type, [])

    def _clear_removed(self) -> None:
        self._removed.clear()

    def insert_resource(self, resource: Any) -> None:
        self._resources[type(resource)] = resource

    def resource(self, resource_type: type) -> Any:
        try:
            return self._resources[resource_type]
        except KeyError:
            raise KeyError(f"resource {resource_type.__name__} does not exist") from None

    def get_resource(self, resource_type: type) -> Any:
        return self._resources.get(resource_type)

    def remove_resource(self, resource_type: type) -> Any:
        return self._resources.pop(resource_type, None)

    def send(self, event: Any) -> None:
        self._events[type(event)].append(event)

    def events(self, event_type: type) -> list[Any]:
        return list(self._events.get(event_type, ()))

    def drain_events(self, event_type: type) -> list[Any]:
        return self._events.pop(event_type, [])

    def clear_events(self) -> None:
        self._events.clear()


def _set_rank(system_set: UtilityAISet | None) -> int:
    members = list(UtilityAISet)
    return members.index(system_set) if system_set is not None else len(members)


class App:
    """Holds a world and runs its systems by schedule.

    Within a schedule, systems run in the order of their set, then in the order
    they were added; systems without a set run last. Events last until the
    start of the next update.
    """

    def __init__(self) -> None:
        self.world = World()
        self._schedules: defaultdict[str, list[tuple[UtilityAISet | None, System]]] = (
            defaultdict(list)
        )
        self._started = False

    def add_systems(
        self, schedule: str, system_set: UtilityAISet | None, *args: System
    ) -> "App":
        if system_set is not None and not isinstance(system_set, UtilityAISet):
            raise TypeError(f"not a system set: {system_set!r}")
        self._schedules[schedule].extend((system_set, system) for system in args)
        return self

    def add_plugin(self, plugin: Any) -> "App":
        plugin.build(self)
        return self

    def run_schedule(self, schedule: str) -> None:
        systems = sorted(self._schedules.get(schedule, ()), key=lambda s: _set_rank(s[0]))
        for _, system in systems:
            system(self.world)

    def update(self) -> None:
        """Run one frame: startup on the first call, then the frame schedules."""
        self.world.clear_events()
        if not self._started:
            self._started = True
            self.run_schedule(STARTUP)
        for schedule in _FRAME_SCHEDULES:
            self.run_schedule(schedule)
        self.world._clear_removed()