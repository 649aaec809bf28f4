import pytest

from app.services.metabolic_stats import bmi_category, calc_bmr, compute_stats


def test_full_profile_tdee_scenario():
    stats = compute_stats(
        {"age": 30, "weight": 70, "height": 175, "gender": "male", "activity": "moderate", "goal": "lose"}
    )
    assert stats["bmr"] == 1649
    assert stats["tdee"] == 2556
    assert stats["calorie_target"] == 2056
    assert stats["bmi"] == 22.9
    assert stats["bmi_category"] == "Normal weight"


def test_female_uses_minus_161():
    assert calc_bmr(60, 165, 25, "female") == pytest.approx(600 + 1031.25 - 125 - 161)


def test_other_gender_uses_male_constant():
    assert calc_bmr(70, 175, 30, "other") == calc_bmr(70, 175, 30, "male")


@pytest.mark.parametrize(
    "weight, expected_bmi, expected_category",
    [
        (75.0, 33.3, "Obese"),
        (55.575, 24.7, "Normal weight"),
        (56.25, 25.0, "Overweight"),
        (41.625, 18.5, "Normal weight"),
        (67.5, 30.0, "Obese"),
        (40.0, 17.8, "Underweight"),
    ],
)
def test_bmi_boundaries(weight, expected_bmi, expected_category):
    stats = compute_stats({"weight": weight, "height": 150})
    assert stats["bmi"] == expected_bmi
    assert stats["bmi_category"] == expected_category


def test_category_thresholds_go_to_next_bracket():
    assert bmi_category(18.4) == "Underweight"
    assert bmi_category(18.5) == "Normal weight"
    assert bmi_category(25.0) == "Overweight"
    assert bmi_category(30.0) == "Obese"


def test_missing_height_omits_everything():
    assert compute_stats({"age": 30, "weight": 70, "gender": "male"}) == {}


def test_missing_age_keeps_bmi_only():
    stats = compute_stats({"weight": 70, "height": 175, "gender": "male"})
    assert set(stats) == {"bmi", "bmi_category"}


def test_missing_gender_omits_energy_fields():
    stats = compute_stats({"age": 30, "weight": 70, "height": 175})
    assert "bmr" not in stats and "tdee" not in stats and "calorie_target" not in stats


@pytest.mark.parametrize(
    "activity, multiplier",
    [("sedentary", 1.2), ("light", 1.375), ("active", 1.725), ("very_active", 1.9), ("couch", 1.55), (None, 1.55)],
)
def test_activity_multipliers(activity, multiplier):
    profile = {"age": 30, "weight": 70, "height": 175, "gender": "male", "activity": activity}
    stats = compute_stats(profile)
    assert stats["tdee"] == int(1648.75 * multiplier + 0.5)


@pytest.mark.parametrize("goal, adjustment", [("lose", -500), ("maintain", 0), ("gain", 300), ("bulk", 0), (None, 0)])
def test_goal_adjustments(goal, adjustment):
    profile = {"age": 30, "weight": 70, "height": 175, "gender": "male", "activity": "moderate", "goal": goal}
    stats = compute_stats(profile)
    assert stats["calorie_target"] == stats["tdee"] + adjustment


def test_bmr_rounds_half_up():
    # 10*60 + 6.25*170 - 5*30 + 5 = 1517.5
    stats = compute_stats({"age": 30, "weight": 60, "height": 170, "gender": "male"})
    assert stats["bmr"] == 1518
