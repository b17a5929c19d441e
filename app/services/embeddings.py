# app/services/embeddings.py
from typing import List

from openai import OpenAI

from app.config import Settings


class OpenAIEmbedder:
    def __init__(self, client: OpenAI, model: str = "text-embedding-3-small", dimensions: int = 1024):
        self.client = client
        self.model = model
        self.dimensions = dimensions

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenAIEmbedder":
        client = OpenAI(
            api_key=settings.openai_api_key,
            timeout=settings.external_timeout_seconds,
            max_retries=settings.openai_max_retries,
        )
        return cls(client, model=settings.embedding_model, dimensions=settings.embedding_dimensions)

    def embed(self, text: str) -> List[float]:
        resp = self.client.embeddings.create(model=self.model, input=text, dimensions=self.dimensions)
        return resp.data[0].embedding
