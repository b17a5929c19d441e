# app/routes/nutrition_routes.py
from fastapi import APIRouter, Depends

from app.controllers.nutrition_controller import NutritionController, get_pipeline
from app.models.nutrition import NutritionTargets, PlanResponse, UserProfile
from app.services.nutrition_pipeline import NutritionPlanPipeline

router = APIRouter()


@router.post("/generate-plan", response_model=PlanResponse)
def generate_plan(profile: UserProfile, pipeline: NutritionPlanPipeline = Depends(get_pipeline)):
    """Generate a personalized daily nutrition plan"""
    return NutritionController.generate_plan(profile, pipeline)


@router.post("/targets", response_model=NutritionTargets)
def nutrition_targets(profile: UserProfile):
    """BMI, BMR, TDEE and macro targets without generating a plan"""
    return NutritionController.compute_targets(profile)
