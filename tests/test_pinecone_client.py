from types import SimpleNamespace

import pytest

from app.services.pinecone_client import PineconeKnowledgeIndex


class _Index:
    def __init__(self, response):
        self.response = response
        self.queries = []
        self.upserts = []

    def query(self, **kwargs):
        self.queries.append(kwargs)
        return self.response

    def upsert(self, **kwargs):
        self.upserts.append(kwargs)


def test_search_with_dict_response():
    index = _Index({"matches": [{"id": "bmi", "metadata": {"title": "Body mass index"}, "score": 0.7}]})
    matches = PineconeKnowledgeIndex(index).search([0.1, 0.2], 3)

    assert matches == [{"id": "bmi", "metadata": {"title": "Body mass index"}, "score": 0.7}]
    assert index.queries == [{"vector": [0.1, 0.2], "top_k": 3, "include_metadata": True}]


def test_search_with_object_response_and_namespace():
    match = SimpleNamespace(id="fiber", metadata=None, score=0.4)
    index = _Index(SimpleNamespace(matches=[match]))
    matches = PineconeKnowledgeIndex(index, namespace="kb").search([0.3], 1)

    assert matches == [{"id": "fiber", "metadata": {}, "score": 0.4}]
    assert index.queries[0]["namespace"] == "kb"


def test_upsert_counts_vectors():
    index = _Index({})
    assert PineconeKnowledgeIndex(index).upsert([("a", [0.1], {}), ("b", [0.2], {})]) == 2
    assert len(index.upserts[0]["vectors"]) == 2


def test_unconfigured_index_raises():
    with pytest.raises(RuntimeError):
        PineconeKnowledgeIndex(None).search([0.1], 3)
