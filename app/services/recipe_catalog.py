# app/services/recipe_catalog.py
import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

import requests

from app.config import Settings
from app.errors import CatalogError
from app.logging_utils import get_logger

logger = get_logger(__name__)

# Spoonacular answers 402 when the daily quota is spent
RATE_LIMIT_STATUSES = (402, 429)


class CatalogSignal(enum.Enum):
    RATE_LIMITED = "rate_limited"


RATE_LIMITED = CatalogSignal.RATE_LIMITED

NutritionPayload = Dict[str, Any]


@dataclass(frozen=True)
class RecipeSearch:
    diet: str = ""
    intolerances: Sequence[str] = field(default_factory=tuple)
    max_calories: Optional[int] = None
    number: int = 30

    def to_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {"number": self.number, "addRecipeInformation": True}
        if self.diet:
            params["diet"] = self.diet
        if self.intolerances:
            params["intolerances"] = ",".join(self.intolerances)
        if self.max_calories is not None:
            params["maxCalories"] = self.max_calories
        return params


class SpoonacularCatalog:
    """Recipe search and per-recipe nutrition from the Spoonacular REST API."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://api.spoonacular.com",
        timeout: float = 20.0,
        session: Optional[requests.Session] = None,
        cache=None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.cache = cache

    @classmethod
    def from_settings(cls, settings: Settings, cache=None) -> "SpoonacularCatalog":
        return cls(
            settings.spoonacular_api_key,
            base_url=settings.spoonacular_base_url,
            timeout=settings.external_timeout_seconds,
            cache=cache,
        )

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        if not self.api_key:
            raise CatalogError("SPOONACULAR_API_KEY is missing")
        query = dict(params or {})
        query["apiKey"] = self.api_key
        return self.session.get(f"{self.base_url}{path}", params=query, timeout=self.timeout)

    def search_recipes(self, filters: RecipeSearch) -> List[Dict[str, Any]]:
        resp = self._get("/recipes/complexSearch", filters.to_params())
        if resp.status_code != 200:
            raise CatalogError(f"Recipe search failed with HTTP {resp.status_code}", resp.status_code)
        return resp.json().get("results") or []

    def fetch_nutrition(self, recipe_id: int) -> Union[NutritionPayload, CatalogSignal]:
        if self.cache is not None:
            cached = self.cache.get(recipe_id)
            if cached is not None:
                return cached

        resp = self._get(f"/recipes/{recipe_id}/nutritionWidget.json")
        if resp.status_code in RATE_LIMIT_STATUSES:
            return RATE_LIMITED
        if resp.status_code != 200:
            raise CatalogError(f"Nutrition lookup for {recipe_id} failed with HTTP {resp.status_code}", resp.status_code)

        payload = resp.json()
        if self.cache is not None:
            self.cache.set(recipe_id, payload)
        return payload
