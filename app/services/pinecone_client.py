# app/services/pinecone_client.py
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pinecone import Pinecone

from app.config import Settings


def _field(obj, name: str):
    # query responses are dict-like in some SDK versions and plain objects in others
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def get_pinecone_index(settings: Settings):
    if not settings.pinecone_api_key or not (settings.pinecone_host or settings.pinecone_index):
        return None

    pc = Pinecone(api_key=settings.pinecone_api_key)
    if settings.pinecone_host:
        return pc.Index(host=settings.pinecone_host)
    return pc.Index(settings.pinecone_index)


class PineconeKnowledgeIndex:
    """Vector index over the nutrition-knowledge corpus."""

    def __init__(self, index, namespace: Optional[str] = None):
        self.index = index
        self.namespace = namespace

    def search(self, vector: List[float], top_k: int) -> List[Dict[str, Any]]:
        if self.index is None:
            raise RuntimeError("Pinecone not configured")

        kwargs = {"vector": vector, "top_k": top_k, "include_metadata": True}
        if self.namespace:
            kwargs["namespace"] = self.namespace
        res = self.index.query(**kwargs)

        out = []
        for m in (_field(res, "matches") or []):
            out.append({
                "id": _field(m, "id"),
                "metadata": _field(m, "metadata") or {},
                "score": _field(m, "score"),
            })
        return out

    def upsert(self, vectors: Sequence[Tuple[str, List[float], Dict[str, Any]]]) -> int:
        if self.index is None:
            raise RuntimeError("Pinecone not configured")

        kwargs = {"vectors": list(vectors)}
        if self.namespace:
            kwargs["namespace"] = self.namespace
        self.index.upsert(**kwargs)
        return len(vectors)
