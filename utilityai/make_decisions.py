"""System that scores every decision for every AI entity and picks the best."""

from __future__ import annotations

import logging
import math
import struct
from dataclasses import dataclass

from .considerations import ConsiderationType
from .decisions import Filter, FilterKind
from .definitions import AIDefinitions, AIMeta
from .events import ConsiderationCalculatedEvent, DecisionCalculatedEvent
from .update_action import UpdateEntityActionInternalEvent
from .world import World

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntityActionChangedEvent:
    """An entity's action or target changed; the action may stay the same."""

    entity_id: int
    prev_action: str
    new_action: str
    prev_target: int | None
    new_target: int | None
    prev_score: float
    new_score: float


def entity_matches_component_filter(component_filter: Filter, world: World, entity: int) -> bool:
    """Whether the entity passes an inclusive or exclusive component filter."""
    present = world.has(entity, component_filter.component_type)
    if component_filter.kind is FilterKind.INCLUSIVE:
        return present
    return not present


def _total_order(value: float) -> int:
    """Integer key ordering floats totally, NaNs included."""
    bits = struct.unpack("<q", struct.pack("<d", value))[0]
    return bits ^ 0x7FFF_FFFF_FFFF_FFFF if bits < 0 else bits


def _evaluate(world, entity, meta, definition):
    """Yield ``(decision index, target, score)`` for every scorable decision."""
    for idx, decision in enumerate(definition.decisions):
        if not all(
            entity_matches_component_filter(f, world, entity) for f in decision.subject_filters
        ):
            logger.debug("Skipped %s as entity does not match subject_filter", decision.name)
            continue

        decision_score = decision.base_score

        for consideration in decision.considerations:
            if consideration.consideration_type is not ConsiderationType.SIMPLE:
                continue
            input_score = meta.input_scores.get(consideration.input)
            if input_score is None:
                logger.debug(
                    "It looks like input system for '%s' hasn't run, an entity might "
                    "have components missing?",
                    consideration.name,
                )
                continue
            score = consideration.calculate_score(input_score)
            if math.isnan(score):
                logger.warning(
                    "consideration %s response curve returned NaN for input %.2f",
                    consideration.name,
                    input_score,
                )
                score = 0.0
            logger.debug(
                "Consideration '%s' scored: %.2f (raw %.2f)",
                consideration.name,
                score,
                input_score,
            )
            world.send(
                ConsiderationCalculatedEvent(
                    entity=entity,
                    consideration=consideration.id,
                    decision=decision.id,
                    target=None,
                    score=score,
                )
            )
            decision_score *= score

        if not decision.is_targeted:
            logger.debug("Decision score: %.2f", decision_score)
            world.send(
                DecisionCalculatedEvent(
                    entity=entity, decision=decision.id, target=None, score=decision_score
                )
            )
            yield idx, None, decision_score
            continue

        targeted_scores: dict[int, float] = {}
        for consideration in decision.considerations:
            if consideration.consideration_type is not ConsiderationType.TARGETED:
                continue
            score_map = meta.targeted_input_scores.get(consideration.input)
            if score_map is None:
                logger.debug(
                    "No scores calculated yet for targeted input system %s, skipping",
                    consideration.input_name,
                )
                continue
            defunct = []
            for target, input_score in score_map.items():
                if not world.contains(target):
                    defunct.append(target)
                    continue
                if not all(
                    entity_matches_component_filter(f, world, target)
                    for f in decision.target_filters
                ):
                    logger.debug("Skipped as target entity does not match target_filter")
                    continue
                score = consideration.calculate_score(input_score)
                logger.debug(
                    "Consideration '%s' for entity %s scored: %.2f (raw %.2f)",
                    consideration.name,
                    target,
                    score,
                    input_score,
                )
                world.send(
                    ConsiderationCalculatedEvent(
                        entity=entity,
                        consideration=consideration.id,
                        decision=decision.id,
                        target=target,
                        score=score,
                    )
                )
                targeted_scores[target] = targeted_scores.get(target, decision_score) * score
            for target in defunct:
                del score_map[target]

        for target, score in targeted_scores.items():
            logger.debug("Decision score for entity %s: %.2f", target, score)
            world.send(
                DecisionCalculatedEvent(
                    entity=entity, decision=decision.id, target=target, score=score
                )
            )
            yield idx, target, score


def _apply_inertia(evaluated, meta, definition) -> None:
    current_idx = next(
        (
            idx
            for idx, decision in enumerate(definition.decisions)
            if decision.action == meta.current_action
        ),
        None,
    )
    if current_idx is None:
        return
    inertia = definition.decisions[current_idx].inertia
    if inertia is None:
        inertia = definition.default_inertia
    if inertia < 0.0:
        return
    for position, (idx, target, score) in enumerate(evaluated):
        if idx == current_idx and target == meta.current_target:
            evaluated[position] = (idx, target, score + inertia)
            return


def make_decisions_sys(world: World) -> None:
    """Pick the best decision for each AI entity and request action changes."""
    definitions = world.resource(AIDefinitions)

    for entity, meta in world.query(AIMeta):
        definition = definitions.map[meta.ai_definition]
        evaluated = list(_evaluate(world, entity, meta, definition))
        if not evaluated:
            logger.debug("No scorable considerations for entity %s, skipping", entity)
            continue

        _apply_inertia(evaluated, meta, definition)
        evaluated.sort(key=lambda item: _total_order(item[2]), reverse=True)
        decision_idx, target, score = evaluated[0]
        decision = definition.decisions[decision_idx]

        if decision.action == meta.current_action and target == meta.current_target:
            meta.current_action_score = score
            continue

        world.send(
            UpdateEntityActionInternalEvent(
                entity_id=entity,
                old_action=meta.current_action,
                new_action=decision.action,
                old_target=meta.current_target,
                new_target=target,
            )
        )
        world.send(
            EntityActionChangedEvent(
                entity_id=entity,
                prev_action=meta.current_action_name,
                new_action=decision.action_name,
                prev_target=meta.current_target,
                new_target=target,
                prev_score=meta.current_action_score,
                new_score=score,
            )
        )
        meta.current_action = decision.action
        meta.current_action_name = decision.action_name
        meta.current_action_score = score
        meta.current_target = target