from fakes import FakeEmbedder, FakeIndex

from app.services.knowledge_retriever import KnowledgeRetriever, build_knowledge_query


def _match(title, score, **md):
    return {"metadata": {"title": title, "content": f"{title} content", **md}, "score": score}


def test_query_carries_goal_diet_and_allergies():
    q = build_knowledge_query("lose", "vegan", ["peanut", "soy"])

    assert q.startswith("nutrition plan for lose.")
    assert "weight loss, fat burning, calorie deficit" in q
    assert "vegan" in q
    assert "peanut, soy" in q


def test_query_skips_none_diet():
    q = build_knowledge_query("maintain", "none", [])
    assert "weight maintenance, balanced diet, healthy eating" in q
    assert "none" not in q


def test_gain_keywords():
    assert "calorie surplus" in build_knowledge_query("gain")


def test_maps_matches_to_snippets():
    index = FakeIndex([
        _match("Protein (nutrient)", 0.91, category="nutrition-science", source="Wikipedia",
               url="https://en.wikipedia.org/wiki/Protein_(nutrient)"),
        _match("Ketogenic diet", 0.75),
    ])
    embedder = FakeEmbedder()
    snippets = KnowledgeRetriever(embedder, index).retrieve("gain", "keto")

    assert [s.title for s in snippets] == ["Protein (nutrient)", "Ketogenic diet"]
    assert snippets[0].relevance_score == 0.91
    assert snippets[0].source == "Wikipedia"
    assert snippets[0].content == "Protein (nutrient) content"
    assert index.calls == [(embedder.vector, 3)]


def test_text_metadata_used_when_content_missing():
    index = FakeIndex([{"metadata": {"title": "Hydration", "text": "Hydration\n\nDrink water."}, "score": 0.5}])
    snippet = KnowledgeRetriever(FakeEmbedder(), index).retrieve("maintain")[0]
    assert snippet.content == "Hydration\n\nDrink water."


def test_never_more_than_top_k():
    matches = [_match(f"Article {i}", 0.9 - i / 100) for i in range(10)]
    retriever = KnowledgeRetriever(FakeEmbedder(), FakeIndex(matches), top_k=3)

    assert len(retriever.retrieve("lose")) == 3
    assert len(retriever.retrieve("lose", top_k=5)) == 5


def test_embedding_failure_returns_empty_list():
    index = FakeIndex([_match("Vitamin D", 0.8)])
    retriever = KnowledgeRetriever(FakeEmbedder(error=RuntimeError("openai down")), index)

    assert retriever.retrieve("lose") == []
    assert index.calls == []


def test_index_failure_returns_empty_list():
    retriever = KnowledgeRetriever(FakeEmbedder(), FakeIndex(error=TimeoutError("pinecone timeout")))
    assert retriever.retrieve("gain", "vegan", ["dairy"]) == []


def test_explicit_zero_top_k_returns_nothing():
    embedder = FakeEmbedder()
    index = FakeIndex([{"metadata": {"title": "T", "content": "c"}, "score": 0.5}])
    retriever = KnowledgeRetriever(embedder, index, top_k=3)

    assert retriever.retrieve("lose", top_k=0) == []
    assert embedder.calls == [] and index.calls == []
