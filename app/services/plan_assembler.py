# app/services/plan_assembler.py
from typing import List, Sequence

from app.models.nutrition import KnowledgeSnippet, NutritionTargets, Recipe, UserProfile

MAX_SNIPPETS = 3
MAX_RECIPES = 15

GOAL_PHRASES = {
    "lose": "lose weight",
    "gain": "gain weight",
}


def goal_phrase(goal: str) -> str:
    return GOAL_PHRASES.get(goal, "maintain your weight")


def diet_display(diet: str) -> str:
    if not diet or diet == "none":
        return "No restrictions"
    return diet


def render_targets(targets: NutritionTargets) -> str:
    return (
        "**DAILY TARGETS:**\n"
        f"- BMI: {targets.bmi}\n"
        f"- BMR: ~{round(targets.bmr)} kcal\n"
        f"- TDEE: ~{targets.tdee} kcal\n"
        f"- Target Daily Calories: ~{targets.target_calories} kcal\n"
        f"- Protein: ~{targets.protein_grams}g\n"
        f"- Carbohydrates: ~{targets.carbs_grams}g\n"
        f"- Fats: ~{targets.fats_grams}g\n"
    )


def render_research(snippets: Sequence[KnowledgeSnippet]) -> str:
    section = "**RESEARCH-BACKED NUTRITION KNOWLEDGE:**\n"
    shown = list(snippets)[:MAX_SNIPPETS]
    if not shown:
        return section + "\nNo research articles were retrieved. Rely on established nutrition guidelines.\n"
    for i, s in enumerate(shown, start=1):
        section += f"\n{i}. {s.title}\n{s.content}\n"
        if s.source:
            section += f"   Source: {s.source}{f' ({s.url})' if s.url else ''}\n"
    return section


def render_recipes(recipes: Sequence[Recipe]) -> str:
    section = "**REAL RECIPES AVAILABLE:**\n"
    shown = list(recipes)[:MAX_RECIPES]
    if not shown:
        return section + "\nNo verified recipes are available. Suggest simple whole-food meals instead.\n"
    for i, r in enumerate(shown, start=1):
        section += f"\n{i}. {r.title}\n"
        section += (
            f"   - Calories: ~{round(r.amount('Calories'))} kcal | "
            f"Protein: ~{round(r.amount('Protein'))}g | "
            f"Carbs: ~{round(r.amount('Carbohydrates'))}g | "
            f"Fats: ~{round(r.amount('Fat'))}g\n"
        )
    return section


def _user_details(profile: UserProfile, targets: NutritionTargets) -> List[str]:
    lines = [
        f"- Age: {profile.age}",
        f"- Gender: {profile.gender}",
        f"- Weight: {profile.weight} lbs",
        f"- Height: {profile.height} inches",
    ]
    if profile.goal_weight:
        lines.append(f"- Goal: Aim to reach {profile.goal_weight} lbs")
    lines += [
        f"- Activity Level: {profile.activity_level}",
        f"- Goal: {goal_phrase(profile.goal)}",
        f"- Dietary Preferences: {diet_display(profile.dietary_preferences)}",
    ]
    if profile.allergies:
        lines.append(f"- Allergies/Intolerances: {', '.join(profile.allergies)}")
    lines += [
        f"- Target Daily Calories: ~{targets.target_calories} kcal",
        f"- Meals Per Day: {profile.meals_per_day}",
    ]
    return lines


def build_plan_prompt(
    profile: UserProfile,
    targets: NutritionTargets,
    snippets: Sequence[KnowledgeSnippet],
    recipes: Sequence[Recipe],
) -> str:
    """Single prompt combining targets, research and ranked recipes."""
    phrase = goal_phrase(profile.goal)
    wants_snack = profile.meals_per_day > 3
    meals = "breakfast, lunch, dinner, and a snack" if wants_snack else "breakfast, lunch, and dinner"
    snack_block = (
        "**Snack:** [Meal name]\n"
        "- Calories: ~XXX | Protein: XXg | Carbs: XXg | Fats: XXg\n\n"
        if wants_snack else ""
    )
    details = "\n".join(_user_details(profile, targets))

    return f"""You are a certified nutritionist and dietitian. Generate the response using **proper Markdown formatting** for headings, bold text, and lists.

Using the information provided, create a personalized daily nutrition plan.

{render_targets(targets)}
{render_research(snippets)}
{render_recipes(recipes)}
User Details:
{details}

Macronutrient Breakdown:
- Protein: ~{targets.protein_grams}g
- Carbohydrates: ~{targets.carbs_grams}g
- Fats: ~{targets.fats_grams}g

**Instructions:**
1. Create a daily meal plan with {meals}.
2. Each meal should include a recipe from the provided recipes list.
3. Ensure the total daily calories align with the target of ~{targets.target_calories} kcal.
4. Distribute macronutrients according to the calculated grams.
5. Provide portion sizes for each meal.
6. Use a friendly and encouraging tone suitable for someone looking to {phrase}.
7. Format the meal plan clearly for easy reading.
8. Cite the sources of recipes used from the provided list and the research used.

Generate the personalized nutrition plan now.

**Format**
# Your Personalized Nutrition Plan

## Summary
[Brief overview based on research]

## Daily Targets
- Calories: {targets.target_calories} kcal
- Macros: Protein {targets.protein_grams}g | Carbs: {targets.carbs_grams}g | Fats: {targets.fats_grams}g

## 7-Day Meal Plan

### Day 1
**Breakfast:** [Meal name]
- [Description]
- Calories: ~XXX | Protein: XXg | Carbs: XXg | Fats: XXg

**Lunch:** [Meal name]
- [Description]
- Calories: ~XXX | Protein: XXg | Carbs: XXg | Fats: XXg

**Dinner:** [Meal name]
- [Description]
- Calories: ~XXX | Protein: XXg | Carbs: XXg | Fats: XXg

{snack_block}**Daily Total:** ~{targets.target_calories} kcal

[Repeat for Days 2-7]

## Tips for Success
[5 practical tips based on research]

Keep it concise, practical, and encouraging!
"""
