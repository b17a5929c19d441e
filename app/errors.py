# app/errors.py
from typing import Iterable, Optional


class NutritionPlanError(Exception):
    """Base class for failures that end a nutrition plan run."""


class ValidationError(NutritionPlanError):
    """Required profile fields are missing or unusable."""

    def __init__(self, missing_fields: Iterable[str], message: str = "Please provide all required fields."):
        self.missing_fields = list(missing_fields)
        self.message = message
        super().__init__(f"{message} Missing: {', '.join(self.missing_fields)}")


class GenerationError(NutritionPlanError):
    """The text-generation service failed or returned nothing."""


class CatalogError(Exception):
    """The recipe catalog answered with a non rate-limit failure."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
