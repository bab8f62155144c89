"""Systems that keep AI state in step with AI marker components."""

from __future__ import annotations

from .definitions import AIMeta
from .world import World


def ensure_entity_has_ai_meta(world: World, marker: type) -> None:
    """Give every entity carrying ``marker`` an AI state if it has none."""
    for entity, _ in world.query(marker):
        if not world.has(entity, AIMeta):
            world.insert(entity, AIMeta.for_marker(marker))


def handle_ai_marker_removed(world: World, marker: type) -> None:
    """Drop the AI state of entities that lost ``marker``."""
    for entity in world.drain_removed(marker):
        if world.contains(entity):
            world.remove(entity, AIMeta)