"""ORM models - import all so Base.metadata is complete for migrations."""

from app.models.fasting_session import FastingSession
from app.models.food_log import FoodLog
from app.models.user import User
from app.models.weight import WeightGoal, WeightLog

__all__ = [
    "FastingSession",
    "FoodLog",
    "User",
    "WeightGoal",
    "WeightLog",
]
