# app/services/generation_client.py
from dataclasses import dataclass

from openai import OpenAI

from app.config import Settings
from app.errors import GenerationError
from app.logging_utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class GenerationConfig:
    max_output_tokens: int = 8000
    temperature: float = 0.7
    top_p: float = 0.9


DEFAULT_GENERATION_CONFIG = GenerationConfig()

SYSTEM_PROMPT = "You are a certified nutritionist and dietitian writing personalized nutrition plans."


class OpenAIChatGenerator:
    """Text-generation backend on OpenAI chat completions."""

    def __init__(self, client: OpenAI, model: str = "gpt-4o-mini"):
        self.client = client
        self.model = model

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenAIChatGenerator":
        client = OpenAI(
            api_key=settings.openai_api_key,
            timeout=settings.generation_timeout_seconds,
            max_retries=settings.openai_max_retries,
        )
        return cls(client, model=settings.chat_model)

    def generate(self, prompt: str, config: GenerationConfig) -> str:
        resp = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            max_tokens=config.max_output_tokens,
            temperature=config.temperature,
            top_p=config.top_p,
        )
        return resp.choices[0].message.content


class GenerationClient:
    """One generation call per plan. No fallback: failures surface as GenerationError."""

    def __init__(self, backend, config: GenerationConfig = DEFAULT_GENERATION_CONFIG):
        self.backend = backend
        self.config = config

    def generate(self, prompt: str) -> str:
        try:
            text = self.backend.generate(prompt, self.config)
        except Exception as exc:
            raise GenerationError(f"Text generation failed: {exc}") from exc

        if not text:
            raise GenerationError("Text generation returned no content")
        return text
