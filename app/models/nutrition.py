from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Gender = Literal["male", "female", "other"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "veryActive"]
Goal = Literal["lose", "gain", "maintain"]

NUTRIENT_NAMES = ("Calories", "Protein", "Carbohydrates", "Fat")

KNOWN_DIETS = ("none", "vegetarian", "vegan", "keto", "paleo", "glutenFree")
_DIETS_BY_LOWER = {d.lower(): d for d in KNOWN_DIETS}


def normalize_diet(diet: Optional[str]) -> str:
    """Canonical diet token: "Vegan" -> "vegan", "glutenfree" -> "glutenFree", blank -> "none"."""
    token = (diet or "").strip()
    if not token:
        return "none"
    return _DIETS_BY_LOWER.get(token.lower(), token.lower())


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserProfile(CamelModel):
    """Biometrics and goals for one plan request.

    The fields the calculator needs are Optional here so a missing one is
    reported as a ``ValidationError`` naming it, rather than as a type error.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    age: Optional[int] = Field(None, ge=13, description="Age in years")
    gender: Optional[Gender] = None
    weight: Optional[float] = Field(None, gt=0, description="Weight in pounds")
    height: Optional[float] = Field(None, gt=0, description="Height in inches")
    goal_weight: Optional[float] = Field(None, gt=0, description="Goal weight in pounds")
    activity_level: Optional[ActivityLevel] = None
    goal: Optional[Goal] = None
    dietary_preferences: str = "none"
    allergies: List[str] = Field(default_factory=list)
    meals_per_day: int = Field(3, ge=1, le=8)

    @field_validator("dietary_preferences", mode="before")
    @classmethod
    def _diet_default(cls, v):
        if v is None or isinstance(v, str):
            return normalize_diet(v)
        return v

    @field_validator("allergies", mode="before")
    @classmethod
    def _split_allergies(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        if isinstance(v, list):
            return [str(i).strip() for i in v if str(i).strip()]
        return v

    @field_validator("meals_per_day", mode="before")
    @classmethod
    def _meals_default(cls, v):
        return 3 if v in (None, "") else v


class NutritionTargets(CamelModel):
    bmi: float
    bmr: float
    tdee: int
    target_calories: int
    protein_grams: int = Field(ge=0)
    carbs_grams: int = Field(ge=0)
    fats_grams: int = Field(ge=0)


class KnowledgeSnippet(BaseModel):
    title: str = ""
    content: str = ""
    category: str = ""
    source: str = ""
    url: str = ""
    relevance_score: float = 0.0


class Recipe(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    nutrients: Dict[str, float]
    id: Optional[Union[int, str]] = None

    def amount(self, name: str) -> float:
        return float(self.nutrients.get(name) or 0)

    @property
    def protein(self) -> float:
        return self.amount("Protein")

    @property
    def is_complete(self) -> bool:
        return all(self.amount(n) > 0 for n in NUTRIENT_NAMES)


class PlanResult(CamelModel):
    plan: str
    metadata: NutritionTargets


class PlanResponse(PlanResult):
    success: bool = True
