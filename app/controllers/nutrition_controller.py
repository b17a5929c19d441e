from functools import lru_cache

from fastapi import HTTPException

from app.config import get_settings
from app.errors import GenerationError, ValidationError
from app.logging_utils import get_logger
from app.models.nutrition import NutritionTargets, PlanResponse, UserProfile
from app.services.biometrics import calculate_targets
from app.services.nutrition_pipeline import NutritionPlanPipeline, build_pipeline

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_pipeline() -> NutritionPlanPipeline:
    return build_pipeline(get_settings())


def _missing_fields(exc: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=400,
        detail={"success": False, "message": exc.message, "missingFields": exc.missing_fields},
    )


class NutritionController:

    @staticmethod
    def generate_plan(profile: UserProfile, pipeline: NutritionPlanPipeline) -> PlanResponse:
        """Run the plan pipeline; only validation and generation failures reach the client."""
        try:
            result = pipeline.generate_plan(profile)
        except ValidationError as exc:
            raise _missing_fields(exc)
        except GenerationError:
            raise HTTPException(
                status_code=502,
                detail={"success": False, "message": "Unable to generate nutrition plan."},
            )
        return PlanResponse(plan=result.plan, metadata=result.metadata)

    @staticmethod
    def compute_targets(profile: UserProfile) -> NutritionTargets:
        """Pure calculation; needs none of the pipeline's external clients."""
        try:
            return calculate_targets(profile)
        except ValidationError as exc:
            raise _missing_fields(exc)
