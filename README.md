# utilityai

A utility AI toolkit for simulations and games. An agent picks its next action
by scoring every *decision* available to it. A decision's score is its base
score multiplied by the scores of its *considerations*. Each consideration is
an input value passed through a *response curve* and clamped to bounds.

The package has no dependencies outside the standard library.

## Install

```
pip install utilityai
pip install "utilityai[test]"   # with pytest, to run the test suite
```

## Concepts

- **Response curves** (`utilityai.response_curves`): `Linear`, `Polynomial`,
  `Logistic` and `PiecewiseLinear`. Each maps a raw input to a score with
  `transform(value)`. `Linear`, `Polynomial` and `Logistic` can be moved with
  `shifted(x_shift, y_shift)`. `PiecewiseLinear` takes at least two points,
  strictly increasing in x, and raises `ValueError` otherwise. Wrapping a
  curve in `ResponseCurve` gives it a readable formula as its `str()`, for
  example `Linear(-(x - 1))`.
- **Considerations** (`utilityai.considerations`): `Consideration.simple(input)`
  or `Consideration.targeted(input)`, where `input` is the input system
  function. Refine them with `with_response_curve`, `with_bounds` (defaults
  0.0 and 1.0) and `with_name`. `calculate_score` applies the curve and clamps
  the result to the bounds.
- **Decisions** (`utilityai.decisions`): `Decision.simple(action)` or
  `Decision.targeted(action)`, where `action` is a component class that can be
  created with no arguments. Add considerations with `add_consideration`.
  Restrict the entities a decision applies to with `subject_filter_include` /
  `subject_filter_exclude`, and restrict its targets with
  `target_filter_include` / `target_filter_exclude`. Weight it with
  `set_base_score` (strictly between 0 and 10) and `set_inertia` (0 up to,
  but not including, 1). Inertia is added to the score of the decision that
  is currently active.
- **Defining an AI** (`utilityai.define_ai`): `DefineUtilityAI(marker)`
  collects decisions. `set_default_inertia` and `use_schedule` adjust it, and
  `register(app)` adds it to an `App`. Registering needs `UtilityAIPlugin` on
  the app first. Registering a second AI for the same marker raises
  `ValueError`.
- **Running** (`utilityai.world`, `utilityai.plugin`): an `App` holds a `World`
  of integer entities, typed components, resources and events. Add
  `UtilityAIPlugin` to the app, then call `app.update()` once per tick. Within
  a schedule, systems run in the order of `UtilityAISet`:

  1. `PREPARE`: entities with a marker get an `AIMeta`.
  2. `CALCULATE_INPUTS`: the input systems run.
  3. `MAKE_DECISIONS`: decisions are scored.
  4. `UPDATE_ACTIONS`: action and `ActionTarget` components are swapped.
  5. `TIDYUP`: `AIMeta` is removed from entities that lost their marker.

  The schedule names are the constants `STARTUP`, `FIRST`, `PRE_UPDATE`,
  `UPDATE`, `POST_UPDATE` and `LAST` in `utilityai.world`. The plugin uses
  `UPDATE` unless it is given another schedule.

## Input systems

An input system is a function that takes the world. It writes each entity's
score into that entity's `AIMeta` (`utilityai.definitions`), keyed by the
input system function itself:

- A simple input writes `meta.input_scores[system] = score`.
- A targeted input writes `meta.targeted_input_scores[system][target] = score`.

If a simple input has no score for an entity, the consideration is skipped
for that entity. Targets that no longer exist are dropped from the score map.

## Example

```python
from utilityai.considerations import Consideration
from utilityai.decisions import Decision
from utilityai.define_ai import DefineUtilityAI
from utilityai.definitions import AIMeta
from utilityai.make_decisions import EntityActionChangedEvent
from utilityai.plugin import UtilityAIPlugin
from utilityai.response_curves import Linear
from utilityai.world import App


class Villager:        # marker component for the AI
    pass


class Hunger:
    def __init__(self, value):
        self.value = value


class Eat:             # action components
    pass


class Idle:
    pass


def hunger_input(world):
    for entity, meta, hunger in world.query(AIMeta, Hunger):
        meta.input_scores[hunger_input] = hunger.value


app = App()
app.add_plugin(UtilityAIPlugin())

(
    DefineUtilityAI(Villager)
    .add_decision(
        Decision.simple(Eat).add_consideration(
            Consideration.simple(hunger_input).with_response_curve(Linear(1.0))
        )
    )
    .add_decision(Decision.simple(Idle).set_base_score(0.1))
    .register(app)
)

agent = app.world.spawn(Villager(), Hunger(0.8))
app.update()

assert app.world.has(agent, Eat)
changes = app.world.events(EntityActionChangedEvent)
```

On each tick the agent receives the action component of the decision that
scored highest. When that action or its target changes, an
`EntityActionChangedEvent` (`utilityai.make_decisions`) is sent. Each scored
consideration also sends a `ConsiderationCalculatedEvent`, and each scored
decision sends a `DecisionCalculatedEvent` (`utilityai.events`). Events last
until the start of the next `update()`. Scoring details are logged at debug
level through the standard `logging` module.

## Dashboard data

`utilityai.dashboard` keeps rolling score histories, each 256 values long, for
the selected entities. It records inputs, considerations and decisions. For
each input it also keeps up to about 1000 recent scores across all entities of
the selected AI. `UtilityAIDashboardPlugin` adds the `DashboardData` and
`DashboardState` resources and the systems that fill them. Input scores are
recorded only from `InputCalculatedEvent`s, which your input systems send
themselves with `world.send(...)`.

`utilityai.curve_view` prepares the data for drawing a response curve against
observed inputs:

- `plot_range(values)` picks the x range.
- `curve_points(curve, x_lower, x_upper, count)` samples the curve, with
  scores clamped to [0, 1].
- `generate_histogram(sorted_values)` returns ten bins between the 5th and
  95th percentiles.

## What it does not do

- The dashboard module holds data and selection state only. It opens no
  window and draws no plots or widgets.
- There is no command-line program. The package is a library to be driven
  from your own code.