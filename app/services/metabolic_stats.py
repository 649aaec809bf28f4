"""Profile-derived metabolic statistics: BMI, BMR, TDEE and daily calorie target.

Pure functions, no I/O. Missing profile fields never raise: the stats that need
them are simply left out of the result, and callers must read an absent key as
"unknown", not zero.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Optional

from app.core.constants import (
    ACTIVITY_MULTIPLIERS,
    BMI_CATEGORIES,
    BMI_TOP_CATEGORY,
    DEFAULT_ACTIVITY_MULTIPLIER,
    GOAL_CALORIE_ADJUSTMENTS,
)


def _round_half_up(value: float, ndigits: int = 0) -> float:
    """Round half away from zero for positives (2.5 -> 3), unlike Python's banker's round()."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def _present(value: Any) -> bool:
    # 0 / "" count as missing: a zero height or age is never a real measurement
    return bool(value)


# ── Core formulas ────────────────────────────────────────────────────────

def calc_bmi(weight_kg: float, height_cm: float) -> float:
    """Body-mass index rounded to one decimal."""
    height_m = height_cm / 100
    return _round_half_up(weight_kg / (height_m ** 2), 1)


def bmi_category(bmi: float) -> str:
    """Each threshold belongs to the next bracket up (25.0 is Overweight)."""
    for upper, label in BMI_CATEGORIES:
        if bmi < upper:
            return label
    return BMI_TOP_CATEGORY


def calc_bmr(weight_kg: float, height_cm: float, age: int, gender: str) -> float:
    """Mifflin-St Jeor BMR equation (kcal/day), unrounded. Anything but female uses the male constant."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    return base - 161 if gender == "female" else base + 5


def activity_multiplier(activity: Optional[str]) -> float:
    return ACTIVITY_MULTIPLIERS.get(activity or "", DEFAULT_ACTIVITY_MULTIPLIER)


def goal_adjustment(goal: Optional[str]) -> int:
    return GOAL_CALORIE_ADJUSTMENTS.get(goal or "", 0)


# ── Master compute function ─────────────────────────────────────────────

def compute_stats(profile: Mapping[str, Any]) -> dict[str, Any]:
    """Derive {bmi, bmi_category, bmr, tdee, calorie_target} from a profile mapping.

    Keys read: age, weight (kg), height (cm), gender, activity, goal.
    """
    age = profile.get("age")
    weight = profile.get("weight")
    height = profile.get("height")
    gender = profile.get("gender")

    stats: dict[str, Any] = {}

    if _present(weight) and _present(height):
        bmi = calc_bmi(float(weight), float(height))
        stats["bmi"] = bmi
        stats["bmi_category"] = bmi_category(bmi)

    if _present(age) and _present(weight) and _present(height) and _present(gender):
        bmr = calc_bmr(float(weight), float(height), int(age), str(gender))
        tdee = int(_round_half_up(bmr * activity_multiplier(profile.get("activity"))))
        stats["bmr"] = int(_round_half_up(bmr))
        stats["tdee"] = tdee
        stats["calorie_target"] = tdee + goal_adjustment(profile.get("goal"))

    return stats


def profile_of(user: Any) -> dict[str, Any]:
    """Pick the stats inputs off an ORM user (or any object with the same attributes)."""
    return {
        "age": user.age,
        "weight": user.weight,
        "height": user.height,
        "gender": user.gender,
        "activity": user.activity,
        "goal": user.goal,
    }
