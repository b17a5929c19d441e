# app/config.py
import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

load_dotenv(override=True)


def _as_list(x: Optional[str]) -> List[str]:
    if not x:
        return []
    return [s.strip() for s in x.split(",") if s.strip()]


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    openai_api_key: Optional[str] = None
    embedding_model: str = "text-embedding-3-small"
    embedding_dimensions: int = 1024
    chat_model: str = "gpt-4o-mini"

    pinecone_api_key: Optional[str] = None
    pinecone_index: str = "nutrition-knowledge"
    pinecone_host: Optional[str] = None

    spoonacular_api_key: Optional[str] = None
    spoonacular_base_url: str = "https://api.spoonacular.com"

    # nutrition cache is disabled when no redis host is configured
    redis_host: Optional[str] = None
    redis_port: int = 6379
    nutrition_cache_ttl: int = 86400

    knowledge_top_k: int = 3
    external_timeout_seconds: float = 20.0
    retrieval_timeout_seconds: float = 60.0
    generation_timeout_seconds: float = 120.0
    # OpenAI client retries; each retry restarts the request timeout
    openai_max_retries: int = 0

    cors_origins: List[str] = ["http://localhost:5173", "http://localhost:3000"]


def load_settings() -> Settings:
    """Build settings from the process environment (and .env)."""
    values = {
        "openai_api_key": os.getenv("OPENAI_API_KEY"),
        "embedding_model": os.getenv("OPENAI_EMBEDDING_MODEL"),
        "embedding_dimensions": os.getenv("EMBEDDING_DIMENSIONS"),
        "chat_model": os.getenv("OPENAI_CHAT_MODEL"),
        "pinecone_api_key": os.getenv("PINECONE_API_KEY"),
        "pinecone_index": os.getenv("PINECONE_INDEX"),
        "pinecone_host": os.getenv("PINECONE_HOST"),
        "spoonacular_api_key": os.getenv("SPOONACULAR_API_KEY"),
        "spoonacular_base_url": os.getenv("SPOONACULAR_BASE_URL"),
        "redis_host": os.getenv("REDIS_HOST"),
        "redis_port": os.getenv("REDIS_PORT"),
        "nutrition_cache_ttl": os.getenv("NUTRITION_CACHE_TTL"),
        "knowledge_top_k": os.getenv("KNOWLEDGE_TOP_K"),
        "external_timeout_seconds": os.getenv("EXTERNAL_TIMEOUT_SECONDS"),
        "retrieval_timeout_seconds": os.getenv("RETRIEVAL_TIMEOUT_SECONDS"),
        "generation_timeout_seconds": os.getenv("GENERATION_TIMEOUT_SECONDS"),
        "openai_max_retries": os.getenv("OPENAI_MAX_RETRIES"),
        "cors_origins": _as_list(os.getenv("CORS_ORIGINS")) or None,
    }
    # unset variables keep the model defaults
    return Settings(**{k: v for k, v in values.items() if v not in (None, "")})


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
