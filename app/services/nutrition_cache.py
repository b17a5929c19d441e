# app/services/nutrition_cache.py
import json
from typing import Any, Dict, Optional

from app.logging_utils import get_logger

logger = get_logger(__name__)


class NutritionCache:
    """Redis-backed cache of raw nutrition payloads, keyed by catalog recipe id.

    Redis trouble never fails a lookup: reads miss and writes are dropped.
    """

    def __init__(self, redis_client, ttl_seconds: int = 86400, prefix: str = "nutrition"):
        self.redis = redis_client
        self.ttl_seconds = ttl_seconds
        self.prefix = prefix

    def _key(self, recipe_id) -> str:
        return f"{self.prefix}:{recipe_id}"

    def get(self, recipe_id) -> Optional[Dict[str, Any]]:
        try:
            raw = self.redis.get(self._key(recipe_id))
        except Exception as exc:
            logger.warning("Nutrition cache read failed for %s: %s", recipe_id, exc)
            return None
        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            return None

    def set(self, recipe_id, payload: Dict[str, Any]) -> None:
        try:
            self.redis.setex(self._key(recipe_id), self.ttl_seconds, json.dumps(payload))
        except Exception as exc:
            logger.warning("Nutrition cache write failed for %s: %s", recipe_id, exc)
