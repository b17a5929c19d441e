from app.models.nutrition import KnowledgeSnippet, Recipe
from app.services.biometrics import calculate_targets
from app.services.fallback_recipes import FALLBACK_RECIPES
from app.services.plan_assembler import build_plan_prompt, diet_display, goal_phrase


def _snippets(n):
    return [KnowledgeSnippet(title=f"Article {i}", content=f"Body {i}", source="Wikipedia") for i in range(1, n + 1)]


def _recipes(n):
    return [
        Recipe(title=f"Meal {i}", nutrients={"Calories": 400.4, "Protein": 30.6, "Carbohydrates": 41, "Fat": 12})
        for i in range(1, n + 1)
    ]


def test_prompt_contains_targets_research_and_recipes(profile):
    targets = calculate_targets(profile)
    prompt = build_plan_prompt(profile, targets, _snippets(2), list(FALLBACK_RECIPES["none"]))

    assert f"Target Daily Calories: ~{targets.target_calories} kcal" in prompt
    assert f"Protein: ~{targets.protein_grams}g" in prompt
    assert f"Fats: ~{targets.fats_grams}g" in prompt
    assert "1. Article 1\nBody 1" in prompt
    assert "Steak and Sweet Potato" in prompt
    assert "Calories: ~580 kcal | Protein: ~44g | Carbs: ~42g | Fats: ~24g" in prompt
    assert "lose weight" in prompt
    assert "Dietary Preferences: No restrictions" in prompt


def test_caps_snippets_and_recipes(profile):
    targets = calculate_targets(profile)
    prompt = build_plan_prompt(profile, targets, _snippets(5), _recipes(20))

    assert "Article 3" in prompt
    assert "Article 4" not in prompt
    assert "15. Meal 15" in prompt
    assert "Meal 16" not in prompt
    assert "Calories: ~400 kcal | Protein: ~31g | Carbs: ~41g | Fats: ~12g" in prompt


def test_tolerates_empty_inputs(profile):
    prompt = build_plan_prompt(profile, calculate_targets(profile), [], [])

    assert "No research articles were retrieved" in prompt
    assert "No verified recipes are available" in prompt


def test_optional_lines(profile):
    targets = calculate_targets(profile)
    plain = build_plan_prompt(profile, targets, [], [])
    assert "Aim to reach" not in plain
    assert "Allergies/Intolerances" not in plain
    assert "**Snack:**" not in plain

    detailed = profile.model_copy(update={"goal_weight": 165, "allergies": ["peanut", "shellfish"], "meals_per_day": 4})
    prompt = build_plan_prompt(detailed, targets, [], [])
    assert "Aim to reach 165 lbs" in prompt
    assert "Allergies/Intolerances: peanut, shellfish" in prompt
    assert "**Snack:**" in prompt
    assert "breakfast, lunch, dinner, and a snack" in prompt


def test_phrases():
    assert goal_phrase("gain") == "gain weight"
    assert goal_phrase("maintain") == "maintain your weight"
    assert diet_display("keto") == "keto"
    assert diet_display("none") == "No restrictions"
