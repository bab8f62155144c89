"""System that swaps action and target components after decisions change."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .definitions import ActionTarget
from .world import World

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateEntityActionInternalEvent:
    """Request to move an entity from one action and target to another."""

    entity_id: int
    old_action: Any
    new_action: Any
    old_target: int | None
    new_target: int | None


def _create_action(action: Any) -> Any:
    try:
        return action()
    except TypeError as error:
        raise TypeError(
            f"An Action Component could not be created with default values: {action!r}"
        ) from error


def update_actions_sys(world: World) -> None:
    """Apply every pending action change to the entities' components."""
    events = world.drain_events(UpdateEntityActionInternalEvent)
    if not events:
        return
    logger.debug("%d Events to process", len(events))

    for event in events:
        entity = event.entity_id
        if not world.contains(entity):
            logger.debug("Unable to update Entity %s as it does not exist", entity)
            continue

        if event.old_action != event.new_action:
            if event.old_action is not None:
                world.remove(entity, event.old_action)
                logger.debug("Removed Action %r", event.old_action)
            world.insert(entity, _create_action(event.new_action))
            logger.debug("Added Action %r", event.new_action)
        else:
            logger.debug("Action is the same as current action")

        if event.old_target != event.new_target:
            if world.has(entity, ActionTarget):
                world.remove(entity, ActionTarget)
                logger.debug("Removed Target")
            if event.new_target is not None:
                world.insert(entity, ActionTarget(event.new_target))
                logger.debug("Added Target %s", event.new_target)