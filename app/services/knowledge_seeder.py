# app/services/knowledge_seeder.py
"""
Seed the nutrition-knowledge vector index from Wikipedia page summaries.

    python -m app.services.knowledge_seeder [--dry-run] [--delay 0.1]

Each article is embedded as "title\\n\\ncontent" and upserted with its text and
provenance as metadata, which is what KnowledgeRetriever maps back into
snippets.
"""
import argparse
import re
import time
from typing import Any, Dict, List, Optional, Sequence, Tuple

import requests

from app.config import get_settings
from app.logging_utils import get_logger
from app.services.embeddings import OpenAIEmbedder
from app.services.pinecone_client import PineconeKnowledgeIndex, get_pinecone_index

logger = get_logger(__name__)

WIKIPEDIA_SUMMARY_URL = "https://en.wikipedia.org/api/rest_v1/page/summary/{topic}"
USER_AGENT = "nutrition-plan-be/1.0 (knowledge seeding)"

NUTRITION_TOPICS: Tuple[str, ...] = (
    "Protein_(nutrient)",
    "Carbohydrate",
    "Dietary_fiber",
    "Essential_fatty_acid",
    "Calorie_restriction",
    "Ketogenic_diet",
    "Mediterranean_diet",
    "Veganism",
    "Micronutrient",
    "Macronutrient",
    "Sports_nutrition",
    "Vitamin_D",
    "Hydration",
    "Intermittent_fasting",
    "Body_mass_index",
    "Muscle_hypertrophy",
    "Basal_metabolic_rate",
)


def article_id(title: str) -> str:
    """'Protein (nutrient)' -> 'protein-nutrient'"""
    return re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")


def fetch_articles(
    topics: Sequence[str] = NUTRITION_TOPICS,
    session: Optional[requests.Session] = None,
    delay: float = 0.1,
    timeout: float = 20.0,
) -> List[Dict[str, Any]]:
    session = session or requests.Session()
    articles = []
    for topic in topics:
        try:
            resp = session.get(
                WIKIPEDIA_SUMMARY_URL.format(topic=topic),
                headers={"User-Agent": USER_AGENT},
                timeout=timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Failed to fetch %s: %s", topic, exc)
            continue

        if not data.get("extract"):
            logger.warning("No summary text for %s, skipping", topic)
            continue

        articles.append({
            "title": data.get("title") or topic.replace("_", " "),
            "content": data["extract"],
            "category": "nutrition-science",
            "source": "Wikipedia",
            "url": ((data.get("content_urls") or {}).get("desktop") or {}).get("page", ""),
        })
        logger.info("Fetched %s", articles[-1]["title"])

        if delay:
            time.sleep(delay)
    return articles


def embed_articles(embedder, articles: Sequence[Dict[str, Any]]) -> List[Tuple[str, List[float], Dict[str, Any]]]:
    vectors = []
    for article in articles:
        text = f"{article['title']}\n\n{article['content']}"
        try:
            embedding = embedder.embed(text)
        except Exception as exc:
            logger.warning("Failed to embed %s: %s", article["title"], exc)
            continue
        vectors.append((article_id(article["title"]), embedding, dict(article)))
    return vectors


def seed_knowledge(embedder, index, topics: Sequence[str] = NUTRITION_TOPICS,
                   session: Optional[requests.Session] = None, delay: float = 0.1,
                   dry_run: bool = False) -> Dict[str, int]:
    articles = fetch_articles(topics, session=session, delay=delay)
    if not articles:
        logger.error("No articles fetched, nothing to seed")
        return {"fetched": 0, "embedded": 0, "upserted": 0}

    vectors = embed_articles(embedder, articles)
    upserted = 0
    if vectors and not dry_run:
        upserted = index.upsert(vectors)
    logger.info("Seeding finished: %d fetched, %d embedded, %d upserted", len(articles), len(vectors), upserted)
    return {"fetched": len(articles), "embedded": len(vectors), "upserted": upserted}


def main(argv: Optional[Sequence[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Seed the nutrition-knowledge vector index.")
    ap.add_argument("--dry-run", action="store_true", help="fetch and embed, but do not upsert")
    ap.add_argument("--delay", type=float, default=0.1, help="seconds between Wikipedia requests")
    args = ap.parse_args(argv)

    settings = get_settings()
    index = get_pinecone_index(settings)
    if index is None and not args.dry_run:
        raise SystemExit("PINECONE_API_KEY and PINECONE_INDEX (or PINECONE_HOST) must be set")

    result = seed_knowledge(
        OpenAIEmbedder.from_settings(settings),
        PineconeKnowledgeIndex(index),
        delay=args.delay,
        dry_run=args.dry_run,
    )
    print(result)


if __name__ == "__main__":
    main()
