# app/services/biometrics.py
from typing import Dict

from app.errors import ValidationError
from app.models.nutrition import NutritionTargets, UserProfile, normalize_diet

INCH_TO_CM = 2.54
LB_TO_KG = 0.453592

ACTIVITY_MULTIPLIERS: Dict[str, float] = {
    "sedentary": 1.15,
    "light": 1.35,
    "moderate": 1.55,
    "active": 1.75,
    "veryActive": 1.95,
}

GOAL_CALORIE_ADJUSTMENT: Dict[str, int] = {"lose": -500, "gain": 500}

REQUIRED_FIELDS = (
    ("age", "age"),
    ("gender", "gender"),
    ("weight", "weight"),
    ("height", "height"),
    ("activity_level", "activityLevel"),
    ("goal", "goal"),
)


def require_fields(profile: UserProfile) -> None:
    missing = [wire for attr, wire in REQUIRED_FIELDS if getattr(profile, attr) in (None, "")]
    if missing:
        raise ValidationError(missing)


def mifflin_st_jeor(weight_kg: float, height_cm: float, age: int, gender: str) -> float:
    """Basal metabolic rate in kcal/day.

    Only "male" gets the +5 constant; "female" and "other" both take -161.
    """
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender == "male":
        return base + 5
    return base - 161


def macro_ratios(goal: str, diet: str) -> Dict[str, float]:
    diet = normalize_diet(diet)
    if goal == "gain":
        # plant-based diets get a reachable protein share
        if diet in ("vegetarian", "vegan"):
            return {"protein": 0.25, "carbs": 0.45, "fats": 0.30}
        return {"protein": 0.35, "carbs": 0.35, "fats": 0.30}
    if goal == "lose":
        return {"protein": 0.35, "carbs": 0.40, "fats": 0.25}
    return {"protein": 0.30, "carbs": 0.40, "fats": 0.30}


def calculate_targets(profile: UserProfile) -> NutritionTargets:
    """Energy and macro targets for a profile. Pure and deterministic."""
    require_fields(profile)

    multiplier = ACTIVITY_MULTIPLIERS.get(profile.activity_level)
    if multiplier is None:
        raise ValidationError(["activityLevel"], message="Unrecognized activity level.")

    height_cm = profile.height * INCH_TO_CM
    height_m = height_cm / 100
    weight_kg = profile.weight * LB_TO_KG

    bmi = round(weight_kg / (height_m * height_m), 1)
    bmr = mifflin_st_jeor(weight_kg, height_cm, profile.age, profile.gender)
    tdee = round(bmr * multiplier)
    target_calories = tdee + GOAL_CALORIE_ADJUSTMENT.get(profile.goal, 0)
    if target_calories <= 0:
        raise ValidationError(
            ["weight", "height", "age"],
            message="Profile yields a non-positive calorie target; check weight, height and age.",
        )

    ratios = macro_ratios(profile.goal, profile.dietary_preferences)
    return NutritionTargets(
        bmi=bmi,
        bmr=round(bmr, 1),
        tdee=tdee,
        target_calories=target_calories,
        protein_grams=round(target_calories * ratios["protein"] / 4),
        carbs_grams=round(target_calories * ratios["carbs"] / 4),
        fats_grams=round(target_calories * ratios["fats"] / 9),
    )
