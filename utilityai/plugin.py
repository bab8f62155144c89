"""Plugin that installs the decision-making systems on an app."""

from __future__ import annotations

from .define_ai import AddedSystemTracker, UtilityAISettings
from .definitions import AIDefinitions
from .make_decisions import make_decisions_sys
from .update_action import update_actions_sys
from .world import UPDATE, App, UtilityAISet


class UtilityAIPlugin:
    """Adds the AI resources and systems to the given schedule of an app."""

    def __init__(self, schedule: str = UPDATE) -> None:
        self.schedule = schedule

    def build(self, app: App) -> None:
        world = app.world
        world.insert_resource(UtilityAISettings(default_schedule=self.schedule))
        if world.get_resource(AIDefinitions) is None:
            world.insert_resource(AIDefinitions())
        if world.get_resource(AddedSystemTracker) is None:
            world.insert_resource(AddedSystemTracker())
        app.add_systems(self.schedule, UtilityAISet.MAKE_DECISIONS, make_decisions_sys)
        app.add_systems(self.schedule, UtilityAISet.UPDATE_ACTIONS, update_actions_sys)