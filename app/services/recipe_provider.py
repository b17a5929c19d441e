# app/services/recipe_provider.py
import re
import time
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from app.logging_utils import get_logger
from app.models.nutrition import Recipe, normalize_diet
from app.services.fallback_recipes import FALLBACK_RECIPES
from app.services.recipe_catalog import RATE_LIMITED, RecipeSearch

logger = get_logger(__name__)

# user diet token -> catalog diet parameter
CATALOG_DIETS: Dict[str, str] = {
    "vegetarian": "vegetarian",
    "vegan": "vegan",
    "keto": "ketogenic",
    "paleo": "paleolithic",
    "glutenFree": "gluten free",
}

CANDIDATE_LIMIT = 30
DEFAULT_RESULT_COUNT = 20

_LEADING_NUMBER = re.compile(r"^\s*([-+]?\d*\.?\d+)")


def parse_amount(value: Any) -> float:
    """Numeric prefix of a catalog value ("15g" -> 15.0); anything else is 0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    m = _LEADING_NUMBER.match(str(value))
    if not m:
        return 0.0
    try:
        return float(m.group(1))
    except ValueError:
        return 0.0


def parse_nutrition(payload: Mapping[str, Any]) -> Dict[str, float]:
    payload = payload or {}
    return {
        "Calories": parse_amount(payload.get("calories")),
        "Protein": parse_amount(payload.get("protein")),
        "Carbohydrates": parse_amount(payload.get("carbs")),
        "Fat": parse_amount(payload.get("fat")),
    }


def rank_by_protein(recipes: Iterable[Recipe]) -> List[Recipe]:
    # sorted() is stable with reverse=True, so ties keep catalog order
    return sorted(recipes, key=lambda r: r.protein, reverse=True)


class RecipeProvider:
    """Catalog recipes with verified nutrition, degrading to a curated set.

    ``get_recipes`` never raises. Catalog errors, empty searches and fully
    filtered candidate lists all resolve to the fallback bucket for the diet.
    """

    def __init__(self, catalog, fallback: Mapping[str, Tuple[Recipe, ...]] = FALLBACK_RECIPES,
                 clock: Callable[[], float] = time.monotonic):
        self.catalog = catalog
        self.fallback = fallback
        self.clock = clock

    def fallback_for(self, diet: Optional[str], default: str = "vegetarian") -> List[Recipe]:
        bucket = self.fallback.get(normalize_diet(diet)) or self.fallback.get(default) or ()
        return list(bucket)

    def get_recipes(
        self,
        diet: Optional[str] = None,
        allergies: Sequence[str] = (),
        max_calories: Optional[int] = None,
        number: int = DEFAULT_RESULT_COUNT,
        deadline: Optional[float] = None,
    ) -> List[Recipe]:
        """``deadline`` is a ``clock()`` reading after which enrichment stops
        and keeps what it has, the same as on a rate-limit signal."""
        try:
            return self._get_recipes(diet, allergies, max_calories, number, deadline)
        except Exception as exc:
            logger.warning("Recipe retrieval failed, serving fallback recipes for diet=%s: %s", diet, exc)
            return self.fallback_for(diet, default="vegetarian")

    def _get_recipes(self, diet, allergies, max_calories, number, deadline=None) -> List[Recipe]:
        search = RecipeSearch(
            diet=CATALOG_DIETS.get(normalize_diet(diet), ""),
            intolerances=tuple(a for a in allergies if a),
            max_calories=max_calories,
            number=CANDIDATE_LIMIT,
        )
        candidates = self.catalog.search_recipes(search)
        if not candidates:
            logger.info("Catalog returned no candidates for diet=%s, serving fallback recipes", diet)
            return self.fallback_for(diet, default="none")

        recipes = list(self._enriched(candidates, deadline))
        if not recipes:
            logger.info("No candidate had complete nutrition for diet=%s, serving fallback recipes", diet)
            return self.fallback_for(diet, default="vegetarian")

        logger.info("Enriched %d of %d catalog candidates", len(recipes), len(candidates))
        return rank_by_protein(recipes)[:number]

    def _enriched(self, candidates: Iterable[Dict[str, Any]], deadline: Optional[float] = None) -> Iterator[Recipe]:
        """Yield complete recipes in catalog order; stop at the first rate-limit
        signal or once the deadline has passed."""
        for candidate in candidates:
            if deadline is not None and self.clock() >= deadline:
                logger.warning("Recipe enrichment out of time, keeping recipes enriched so far")
                return
            outcome = self._enrich_one(candidate)
            if outcome is RATE_LIMITED:
                logger.warning("Catalog rate limit reached, keeping recipes enriched so far")
                return
            if outcome is not None:
                yield outcome

    def _enrich_one(self, candidate: Dict[str, Any]):
        title = candidate.get("title") or ""
        try:
            payload = self.catalog.fetch_nutrition(candidate.get("id"))
            if payload is RATE_LIMITED:
                return RATE_LIMITED
            recipe = Recipe(title=title, id=candidate.get("id"), nutrients=parse_nutrition(payload))
        except Exception as exc:
            logger.warning("Failed to get nutrition for %r: %s", title, exc)
            return None
        if not recipe.is_complete:
            return None
        return recipe
