"""Shared enums for models and API."""

from enum import Enum


class FastingStatus(str, Enum):
    """Lifecycle state of a fasting session. Only ACTIVE is non-terminal."""

    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(str, Enum):
    """Daily activity level; drives the TDEE multiplier."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class WeightGoalType(str, Enum):
    """What the user wants to do with their weight; drives the calorie adjustment."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


class MealType(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"
