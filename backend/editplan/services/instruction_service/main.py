"""Service factory for obtaining instruction planners."""

from typing import Callable

from editplan.config.settings import Settings
from editplan.services.instruction_service.planner import InstructionPlanner


class InstructionPlanning:
    """Factory wrapper used as a FastAPI dependency.

    Hands the route a builder instead of a planner so that construction
    (and any ConfigurationError) happens inside the route's error handling.
    """

    @staticmethod
    def get_planner_factory() -> Callable[[], InstructionPlanner]:
        """Provide a callable that builds a planner from the environment."""
        return lambda: InstructionPlanner(Settings.from_env())
