# app/services/knowledge_retriever.py
from typing import Any, Dict, List, Optional, Sequence

from app.logging_utils import get_logger
from app.models.nutrition import KnowledgeSnippet

logger = get_logger(__name__)

GOAL_KEYWORDS: Dict[str, str] = {
    "lose": "weight loss, fat burning, calorie deficit",
    "gain": "muscle gain, weight gain, calorie surplus, protein",
}
DEFAULT_GOAL_KEYWORDS = "weight maintenance, balanced diet, healthy eating"


def build_knowledge_query(goal: str, diet: Optional[str] = None, allergies: Sequence[str] = ()) -> str:
    goal_keywords = GOAL_KEYWORDS.get(goal, DEFAULT_GOAL_KEYWORDS)
    diet_keywords = diet if diet and diet.lower() != "none" else ""
    allergy_keywords = ", ".join(a for a in allergies if a)
    query = f"nutrition plan for {goal}. Key topics: {goal_keywords}. {diet_keywords} {allergy_keywords}"
    return query.strip()


def match_to_snippet(match: Dict[str, Any]) -> KnowledgeSnippet:
    md = match.get("metadata") or {}
    return KnowledgeSnippet(
        title=str(md.get("title") or ""),
        content=str(md.get("content") or md.get("text") or ""),
        category=str(md.get("category") or ""),
        source=str(md.get("source") or ""),
        url=str(md.get("url") or ""),
        relevance_score=float(match.get("score") or 0.0),
    )


class KnowledgeRetriever:
    """Best-effort semantic lookup over the nutrition-knowledge corpus.

    ``embedder`` needs ``embed(text) -> list[float]`` and ``index`` needs
    ``search(vector, top_k) -> [{"metadata": ..., "score": ...}]``. Any failure
    of either yields an empty list; research augmentation never stops a plan.
    """

    def __init__(self, embedder, index, top_k: int = 3):
        self.embedder = embedder
        self.index = index
        self.top_k = top_k

    def retrieve(
        self,
        goal: str,
        diet: Optional[str] = None,
        allergies: Sequence[str] = (),
        top_k: Optional[int] = None,
    ) -> List[KnowledgeSnippet]:
        k = top_k if top_k is not None else self.top_k
        if k <= 0:
            return []
        query = build_knowledge_query(goal, diet, allergies)
        try:
            vector = self.embedder.embed(query)
            matches = self.index.search(vector, k)
            snippets = [match_to_snippet(m) for m in matches]
        except Exception as exc:
            logger.warning("Knowledge retrieval failed, continuing without research: %s", exc)
            return []

        snippets.sort(key=lambda s: s.relevance_score, reverse=True)
        return snippets[:k]
