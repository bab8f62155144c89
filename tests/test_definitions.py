import pytest

from utilityai.decisions import Filter
from utilityai.definitions import (
    ActionTarget,
    AIDefinition,
    AIDefinitions,
    AIMeta,
    FilterDefinition,
    TargetedInputRequirements,
)


class Enemy:
    pass


class Ally:
    pass


class Marker:
    pass


def test_any_merged_with_any_is_any():
    merged = FilterDefinition.any().merge(FilterDefinition.any())
    assert merged.is_any


def test_any_wins_over_filtered_either_side():
    filtered = FilterDefinition.filtered([[Filter.inclusive(Enemy)]])
    assert filtered.merge(FilterDefinition.any()).is_any
    assert FilterDefinition.any().merge(filtered).is_any


def test_filtered_merge_joins_groups_in_order():
    left = FilterDefinition.filtered([[Filter.inclusive(Enemy)]])
    right = FilterDefinition.filtered([[Filter.exclusive(Ally)]])
    merged = left.merge(right)
    assert merged == FilterDefinition.filtered(
        [[Filter.inclusive(Enemy)], [Filter.exclusive(Ally)]]
    )
    assert not merged.is_any


def test_merge_leaves_operands_unchanged():
    left = FilterDefinition.filtered([[Filter.inclusive(Enemy)]])
    right = FilterDefinition.filtered([[Filter.exclusive(Ally)]])
    left.merge(right)
    assert left.groups == ((Filter.inclusive(Enemy),),)
    assert right.groups == ((Filter.exclusive(Ally),),)


def test_requirements_default_to_any():
    assert TargetedInputRequirements().target_filter.is_any


def test_ai_definition_input_lookups():
    def hunger(world):
        pass

    def distance(world):
        pass

    requirements = TargetedInputRequirements(FilterDefinition.any())
    definition = AIDefinition(
        name="Marker",
        marker_type=Marker,
        simple_inputs={hunger},
        targeted_inputs={distance: requirements},
    )
    assert definition.requires_simple_input(hunger)
    assert not definition.requires_simple_input(distance)
    assert definition.requires_targeted_input(distance)
    assert not definition.requires_targeted_input(hunger)
    assert definition.get_targeted_input_requirements(distance) is requirements


def test_missing_targeted_requirements_raise():
    definition = AIDefinition(name="Marker", marker_type=Marker)
    with pytest.raises(KeyError):
        definition.get_targeted_input_requirements(object())


def test_ai_definitions_start_empty():
    assert AIDefinitions().map == {}


def test_ai_meta_for_marker_defaults():
    meta = AIMeta.for_marker(Marker)
    assert meta.ai_definition is Marker
    assert meta.current_action is None
    assert meta.current_action_score == -1.0
    assert meta.current_action_name == ""
    assert meta.current_target is None
    assert meta.input_scores == {}
    assert meta.targeted_input_scores == {}


def test_ai_meta_instances_do_not_share_scores():
    first = AIMeta.for_marker(Marker)
    second = AIMeta.for_marker(Marker)
    first.input_scores["hunger"] = 0.5
    assert second.input_scores == {}


def test_action_target_holds_entity():
    assert ActionTarget(target=7).target == 7