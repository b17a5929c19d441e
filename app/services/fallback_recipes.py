# app/services/fallback_recipes.py
"""
Curated recipes served when the live catalog is unavailable or returns nothing
usable. Every bucket is ordered by protein, highest first, and the table is
read-only; bump FALLBACK_VERSION when the data changes.
"""
from types import MappingProxyType
from typing import Mapping, Tuple

from app.models.nutrition import Recipe

FALLBACK_VERSION = "2025.1"


def _r(title: str, calories: float, protein: float, carbs: float, fat: float) -> Recipe:
    return Recipe(
        title=title,
        nutrients={"Calories": calories, "Protein": protein, "Carbohydrates": carbs, "Fat": fat},
    )


_VEGETARIAN = (
    _r("Tofu Scramble with Roasted Vegetables", 380, 28, 24, 18),
    _r("Tempeh Stir-Fry with Vegetables", 410, 26, 38, 18),
    _r("Edamame Quinoa Power Bowl", 490, 25, 64, 14),
    _r("High-Protein Chickpea Buddha Bowl", 520, 24, 68, 16),
    _r("Spinach and Feta Frittata", 340, 24, 18, 20),
    _r("Quinoa Black Bean Burrito Bowl", 485, 22, 72, 12),
    _r("Protein-Packed Overnight Oats", 425, 22, 58, 12),
    _r("Mushroom and Spinach Quesadilla", 420, 21, 48, 16),
    _r("Lentil Dal with Brown Rice", 450, 20, 78, 8),
    _r("Greek Yogurt Parfait with Granola", 380, 20, 54, 10),
    _r("Vegetarian Chili with Beans", 385, 19, 58, 9),
    _r("Mediterranean Chickpea Salad", 420, 18, 52, 16),
    _r("Veggie-Loaded Whole Wheat Pasta", 475, 18, 76, 12),
    _r("Mediterranean Farro Bowl with Roasted Veggies", 465, 16, 68, 14),
    _r("Black Bean Sweet Potato Tacos", 395, 15, 62, 10),
)

_VEGAN = (
    _r("Tempeh Power Bowl", 495, 28, 52, 18),
    _r("Tofu and Vegetable Stir-Fry", 395, 24, 42, 15),
    _r("Lentil Bolognese with Whole Wheat Pasta", 465, 21, 72, 10),
    _r("Vegan Protein Smoothie Bowl", 450, 20, 62, 14),
    _r("Vegan Buddha Bowl with Tahini Dressing", 510, 19, 68, 18),
    _r("Vegan Chili with Cornbread", 425, 19, 68, 9),
    _r("Chickpea Curry with Coconut Milk", 480, 18, 58, 20),
    _r("Vegan Protein Pancakes", 380, 18, 58, 10),
    _r("Black Bean and Quinoa Tacos", 420, 17, 64, 12),
    _r("Sweet Potato and Black Bean Bowl", 445, 16, 72, 11),
)

_NONE = (
    _r("Steak and Sweet Potato", 580, 44, 42, 24),
    _r("Grilled Chicken with Quinoa and Veggies", 520, 42, 48, 16),
    _r("Chicken Burrito Bowl", 525, 42, 56, 14),
    _r("Chicken Fajita Bowl", 510, 40, 52, 16),
    _r("Salmon Bowl with Brown Rice", 580, 38, 52, 22),
    _r("Greek Chicken Salad", 420, 38, 28, 18),
    _r("Turkey Meatballs with Marinara", 445, 38, 36, 16),
    _r("Chicken Pesto Pasta", 545, 38, 58, 18),
    _r("Beef and Broccoli Stir-Fry", 485, 36, 42, 18),
    _r("Baked Cod with Roasted Vegetables", 395, 36, 32, 12),
    _r("Tuna Poke Bowl", 465, 36, 52, 12),
    _r("Turkey and Sweet Potato Hash", 465, 35, 48, 14),
    _r("Shrimp and Veggie Stir-Fry", 380, 34, 38, 10),
    _r("Grilled Fish Tacos", 395, 32, 38, 12),
    _r("Eggs and Turkey Sausage Breakfast", 420, 32, 24, 22),
)

FALLBACK_RECIPES: Mapping[str, Tuple[Recipe, ...]] = MappingProxyType({
    "vegetarian": _VEGETARIAN,
    "vegan": _VEGAN,
    "none": _NONE,
})
