# app/services/nutrition_pipeline.py
import enum
import time
import uuid
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeout
from typing import Callable, List, TypeVar

from app.config import Settings
from app.database import get_redis_client
from app.errors import GenerationError, ValidationError
from app.logging_utils import get_logger
from app.models.nutrition import KnowledgeSnippet, NutritionTargets, PlanResult, Recipe, UserProfile
from app.services.biometrics import calculate_targets, require_fields
from app.services.embeddings import OpenAIEmbedder
from app.services.generation_client import GenerationClient, OpenAIChatGenerator
from app.services.knowledge_retriever import KnowledgeRetriever
from app.services.nutrition_cache import NutritionCache
from app.services.pinecone_client import PineconeKnowledgeIndex, get_pinecone_index
from app.services.plan_assembler import build_plan_prompt
from app.services.recipe_catalog import SpoonacularCatalog
from app.services.recipe_provider import RecipeProvider

logger = get_logger(__name__)

T = TypeVar("T")


class PipelineState(str, enum.Enum):
    VALIDATING = "Validating"
    COMPUTING_TARGETS = "ComputingTargets"
    RETRIEVING = "Retrieving"
    ASSEMBLING = "Assembling"
    GENERATING = "Generating"
    DONE = "Done"
    ERROR = "Error"


class NutritionPlanPipeline:
    """
    Runs one plan request end to end:

      Validating -> ComputingTargets -> Retrieving -> Assembling -> Generating -> Done

    Knowledge and recipe retrieval run side by side and are joined before
    assembly; each degrades on its own (empty research, fallback recipes), so
    only validation and generation can end a run in Error.
    """

    def __init__(
        self,
        retriever: KnowledgeRetriever,
        recipe_provider: RecipeProvider,
        generator: GenerationClient,
        retrieval_timeout: float = 60.0,
        enrichment_grace: float = 2.0,
        assemble: Callable[..., str] = build_plan_prompt,
    ):
        self.retriever = retriever
        self.recipe_provider = recipe_provider
        self.generator = generator
        self.retrieval_timeout = retrieval_timeout
        self.enrichment_grace = enrichment_grace
        self.assemble = assemble

    def generate_plan(self, profile: UserProfile) -> PlanResult:
        run_id = uuid.uuid4().hex[:8]
        extra = {"run_id": run_id}

        def enter(state: PipelineState) -> None:
            logger.info("pipeline state -> %s", state.value, extra=extra)

        enter(PipelineState.VALIDATING)
        try:
            require_fields(profile)
            enter(PipelineState.COMPUTING_TARGETS)
            targets = calculate_targets(profile)
        except ValidationError as exc:
            enter(PipelineState.ERROR)
            logger.warning("Invalid profile (%s): %s", exc.message, exc.missing_fields, extra=extra)
            raise

        enter(PipelineState.RETRIEVING)
        snippets, recipes = self._retrieve(profile, targets, extra)
        logger.info("Retrieved %d knowledge snippets and %d recipes", len(snippets), len(recipes), extra=extra)

        enter(PipelineState.ASSEMBLING)
        prompt = self.assemble(profile, targets, snippets, recipes)

        enter(PipelineState.GENERATING)
        try:
            plan = self.generator.generate(prompt)
        except GenerationError:
            enter(PipelineState.ERROR)
            logger.exception("Nutrition plan generation failed", extra=extra)
            raise

        enter(PipelineState.DONE)
        return PlanResult(plan=plan, metadata=targets)

    def _retrieve(self, profile: UserProfile, targets: NutritionTargets, extra: dict):
        diet = profile.dietary_preferences
        deadline = time.monotonic() + self.retrieval_timeout
        executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix=f"plan-{extra['run_id']}")
        try:
            knowledge_future = executor.submit(
                self.retriever.retrieve, profile.goal, diet, profile.allergies
            )
            # enrichment stops itself at the deadline; the grace lets it hand back what it has
            recipes_future = executor.submit(
                self.recipe_provider.get_recipes, diet, profile.allergies, targets.target_calories,
                deadline=deadline,
            )
            snippets: List[KnowledgeSnippet] = self._join(
                knowledge_future, deadline, list, "knowledge retrieval", extra
            )
            recipes: List[Recipe] = self._join(
                recipes_future, deadline + self.enrichment_grace,
                lambda: self.recipe_provider.fallback_for(diet), "recipe retrieval", extra
            )
        finally:
            # a hung collaborator call must not hold the request
            executor.shutdown(wait=False, cancel_futures=True)
        return snippets, recipes

    @staticmethod
    def _join(future: Future, deadline: float, degrade: Callable[[], T], what: str, extra: dict) -> T:
        try:
            return future.result(timeout=max(0.0, deadline - time.monotonic()))
        except FuturesTimeout:
            logger.warning("%s timed out, degrading", what, extra=extra)
        except Exception as exc:
            logger.warning("%s failed, degrading: %s", what, exc, extra=extra)
        return degrade()


def build_pipeline(settings: Settings) -> NutritionPlanPipeline:
    """Wire the production collaborators from settings."""
    try:
        index = get_pinecone_index(settings)
    except Exception as exc:
        logger.warning("Pinecone unavailable, plans will skip research: %s", exc)
        index = None

    retriever = KnowledgeRetriever(
        OpenAIEmbedder.from_settings(settings),
        PineconeKnowledgeIndex(index),
        top_k=settings.knowledge_top_k,
    )

    redis_client = get_redis_client(settings)
    cache = NutritionCache(redis_client, ttl_seconds=settings.nutrition_cache_ttl) if redis_client is not None else None
    recipe_provider = RecipeProvider(SpoonacularCatalog.from_settings(settings, cache=cache))

    generator = GenerationClient(OpenAIChatGenerator.from_settings(settings))
    return NutritionPlanPipeline(
        retriever,
        recipe_provider,
        generator,
        retrieval_timeout=settings.retrieval_timeout_seconds,
    )
