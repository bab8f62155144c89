import string

import pytest

from utilityai.considerations import Consideration
from utilityai.decisions import Decision, Filter, FilterKind


class Eat:
    pass


class Hungry:
    pass


class Asleep:
    pass


def hunger(world):
    return world


def distance_to(world):
    return world


def test_simple_decision_defaults():
    decision = Decision.simple(Eat)
    assert decision.action is Eat
    assert decision.action_name == Eat.__name__
    assert decision.is_targeted is False
    assert decision.base_score == 1.0
    assert decision.inertia is None
    assert decision.considerations == []
    assert decision.subject_filters == []
    assert decision.target_filters == []


def test_generated_name_has_lowercase_tag():
    decision = Decision.simple(Eat)
    prefix, _, tag = decision.name.rpartition("_")
    assert prefix == Eat.__name__
    assert len(tag) == 5
    assert set(tag) <= set(string.ascii_lowercase + string.digits)


def test_targeted_decision():
    assert Decision.targeted(Eat).is_targeted is True


def test_add_consideration_keeps_order():
    first = Consideration.simple(hunger)
    second = Consideration.targeted(distance_to)
    decision = Decision.targeted(Eat).add_consideration(first).add_consideration(second)
    assert decision.considerations == [first, second]


def test_targeted_consideration_rejected_by_simple_decision():
    with pytest.raises(ValueError):
        Decision.simple(Eat).add_consideration(Consideration.targeted(distance_to))


def test_subject_filters():
    decision = Decision.simple(Eat).subject_filter_include(Hungry).subject_filter_exclude(Asleep)
    assert decision.subject_filters == [Filter.inclusive(Hungry), Filter.exclusive(Asleep)]


def test_target_filters_on_targeted_decision():
    decision = Decision.targeted(Eat).target_filter_include(Hungry).target_filter_exclude(Asleep)
    assert decision.target_filters == [Filter.inclusive(Hungry), Filter.exclusive(Asleep)]


@pytest.mark.parametrize("method", ["target_filter_include", "target_filter_exclude"])
def test_target_filters_rejected_on_simple_decision(method):
    with pytest.raises(ValueError):
        getattr(Decision.simple(Eat), method)(Hungry)


def test_filter_kinds():
    assert Filter.inclusive(Hungry).kind is FilterKind.INCLUSIVE
    assert Filter.exclusive(Hungry).kind is FilterKind.EXCLUSIVE
    assert Filter.exclusive(Hungry).component_type is Hungry


@pytest.mark.parametrize("score", [0.0, -1.0, 10.0, 12.5])
def test_invalid_base_score(score):
    with pytest.raises(ValueError):
        Decision.simple(Eat).set_base_score(score)


def test_set_base_score():
    assert Decision.simple(Eat).set_base_score(2.5).base_score == 2.5


@pytest.mark.parametrize("inertia", [-0.1, 1.0, 3.0])
def test_invalid_inertia(inertia):
    with pytest.raises(ValueError):
        Decision.simple(Eat).set_inertia(inertia)


def test_set_inertia():
    assert Decision.simple(Eat).set_inertia(0.0).inertia == 0.0
    assert Decision.simple(Eat).set_inertia(0.3).inertia == 0.3


def test_with_name():
    decision = Decision.simple(Eat).with_name("eat food")
    assert decision.name == "eat food"
    assert decision.action_name == Eat.__name__