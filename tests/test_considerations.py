import pytest

from utilityai.considerations import Consideration, ConsiderationType
from utilityai.response_curves import Linear, Polynomial, ResponseCurve


def hunger(world):
    return world


def distance_to(world):
    return world


def test_simple_consideration_defaults():
    consideration = Consideration.simple(hunger)
    assert consideration.consideration_type is ConsiderationType.SIMPLE
    assert consideration.input is hunger
    assert consideration.system is hunger
    assert consideration.input_name == hunger.__name__
    assert consideration.lower_bound == 0.0
    assert consideration.upper_bound == 1.0
    assert consideration.response_curve == ResponseCurve(Linear(1.0))


def test_default_name_combines_input_and_curve():
    consideration = Consideration.simple(hunger)
    assert consideration.name == f"{hunger.__name__} - {ResponseCurve(Linear(1.0))}"


def test_targeted_consideration():
    consideration = Consideration.targeted(distance_to)
    assert consideration.consideration_type is ConsiderationType.TARGETED
    assert consideration.input is distance_to


def test_each_consideration_gets_its_own_id():
    first = Consideration.simple(hunger)
    second = Consideration.simple(hunger)
    assert len({first.id, second.id}) == 2


def test_score_inside_bounds_follows_curve():
    curve = Linear(0.5)
    consideration = Consideration.simple(hunger).with_response_curve(curve)
    assert consideration.calculate_score(0.6) == curve.transform(0.6)


def test_score_is_clamped_to_default_bounds():
    consideration = Consideration.simple(hunger)
    assert consideration.calculate_score(10.0) == 1.0
    assert consideration.calculate_score(-10.0) == 0.0


def test_score_is_clamped_to_custom_bounds():
    consideration = Consideration.simple(hunger).with_bounds(0.2, 0.8)
    assert consideration.calculate_score(100.0) == 0.8
    assert consideration.calculate_score(-100.0) == 0.2


def test_nan_score_passes_through():
    consideration = Consideration.simple(hunger).with_response_curve(Polynomial(1.0, 0.5))
    score = consideration.calculate_score(-1.0)
    assert str(score) == "nan"


def test_with_response_curve_updates_name_and_keeps_id():
    original = Consideration.simple(hunger)
    curve = ResponseCurve(Polynomial(1.0, 2.0))
    changed = original.with_response_curve(curve)
    assert changed.response_curve == curve
    assert changed.name == f"{hunger.__name__} - {curve}"
    assert changed.id == original.id


def test_with_response_curve_wraps_plain_curve():
    changed = Consideration.simple(hunger).with_response_curve(Linear(0.25))
    assert changed.response_curve == ResponseCurve(Linear(0.25))


@pytest.mark.parametrize("lower, upper", [(-0.1, 1.0), (0.5, 0.5), (0.8, 0.2)])
def test_invalid_bounds_raise(lower, upper):
    with pytest.raises(ValueError):
        Consideration.simple(hunger).with_bounds(lower, upper)


def test_with_bounds_stores_values():
    consideration = Consideration.simple(hunger).with_bounds(0.1, 2.5)
    assert (consideration.lower_bound, consideration.upper_bound) == (0.1, 2.5)


def test_with_name():
    consideration = Consideration.simple(hunger).with_name("hunger level")
    assert consideration.name == "hunger level"
    assert consideration.input_name == hunger.__name__