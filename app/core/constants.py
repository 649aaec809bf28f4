"""Application constants."""

# Metabolic stats (Mifflin-St Jeor + activity / goal tables)
ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = ACTIVITY_MULTIPLIERS["moderate"]

GOAL_CALORIE_ADJUSTMENTS: dict[str, int] = {
    "lose": -500,
    "maintain": 0,
    "gain": 300,
}

# BMI brackets: (exclusive upper bound, label); anything above the last bound is "Obese"
BMI_CATEGORIES: tuple[tuple[float, str], ...] = (
    (18.5, "Underweight"),
    (25.0, "Normal weight"),
    (30.0, "Overweight"),
)
BMI_TOP_CATEGORY = "Obese"

SECONDS_PER_HOUR = 3600

# Weight goal screen: number of weight entries returned with the goal
WEIGHT_LOGS_LIMIT = 60
