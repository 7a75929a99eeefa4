"""
Model backends, chosen once at startup from AI_PROVIDER_NAME.

Each backend knows how to build a pydantic-ai Model; the gateway never
branches on the provider name.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import ClassVar, Optional, Union

from pydantic_ai.models import Model
from pydantic_ai.models.google import GoogleModel
from pydantic_ai.models.groq import GroqModel
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.google import GoogleProvider
from pydantic_ai.providers.groq import GroqProvider
from pydantic_ai.providers.litellm import LiteLLMProvider

from neuron.config import Settings


@dataclass(frozen=True)
class GeminiBackend:
    api_key: Optional[str]
    model_name: str = "gemini-2.5-flash"

    tag: ClassVar[str] = "gemini"

    def build_model(self) -> Model:
        return GoogleModel(self.model_name, provider=GoogleProvider(api_key=self.api_key))


@dataclass(frozen=True)
class GroqBackend:
    api_key: Optional[str]
    model_name: str = "llama-3.3-70b-versatile"

    tag: ClassVar[str] = "groq"

    def build_model(self) -> Model:
        return GroqModel(self.model_name, provider=GroqProvider(api_key=self.api_key))


@dataclass(frozen=True)
class LiteLLMBackend:
    api_key: Optional[str]
    api_base: Optional[str] = None
    model_name: str = "gpt-4o-mini"

    tag: ClassVar[str] = "litellm"

    def build_model(self) -> Model:
        provider = LiteLLMProvider(api_key=self.api_key, api_base=self.api_base)
        return OpenAIChatModel(self.model_name, provider=provider)


ModelBackend = Union[GeminiBackend, GroqBackend, LiteLLMBackend]


def backend_from_settings(settings: Settings) -> ModelBackend:
    """Map AI_PROVIDER_NAME (+ optional LLM_MODEL) to a backend value."""
    name = settings.ai_provider_name.strip().lower()
    if name == GeminiBackend.tag:
        backend: ModelBackend = GeminiBackend(api_key=settings.gemini_api_key)
    elif name == GroqBackend.tag:
        backend = GroqBackend(api_key=settings.groq_api_key)
    elif name == LiteLLMBackend.tag:
        backend = LiteLLMBackend(
            api_key=settings.litellm_api_key, api_base=settings.litellm_api_base
        )
    else:
        raise ValueError(f"Unknown AI provider: {settings.ai_provider_name}")
    if settings.llm_model:
        backend = replace(backend, model_name=settings.llm_model)
    return backend
