"""
Generative-model gateway.

Callers speak a neutral vocabulary (AiMessage with role user/model,
AiCompletionConfig, AiCompletionResponse). The gateway maps it to
pydantic-ai messages, performs a single direct model request (no agent
loop: function calls are returned to the caller, never executed here) and
maps the response back. Every failure surfaces as GenerationFailed.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional, Protocol, Sequence, Union

from pydantic_ai.direct import model_request
from pydantic_ai.messages import (
    ModelMessage,
    ModelRequest,
    ModelResponse,
    SystemPromptPart,
    TextPart,
    ToolCallPart,
    UserPromptPart,
)
from pydantic_ai.models import Model, ModelRequestParameters
from pydantic_ai.settings import ModelSettings
from pydantic_ai.tools import ToolDefinition

from neuron.config import Settings, get_settings
from neuron.infra.logging_config import get_logger
from neuron.llm.backends import ModelBackend, backend_from_settings
from neuron.schemas.ai import (
    AiCompletionConfig,
    AiCompletionResponse,
    AiFunctionCall,
    AiMessage,
    AiUsage,
)

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class GenerationFailed(Exception):
    """Any backend, transport, timeout or parsing error."""


class ModelGateway(Protocol):
    async def generate_content(
        self, messages: Sequence[AiMessage], config: AiCompletionConfig
    ) -> AiCompletionResponse: ...


def _history_to_message_list(messages: Sequence[AiMessage]) -> List[ModelMessage]:
    """Convert neutral {role, content} messages to pydantic-ai ModelMessages."""
    out: List[ModelMessage] = []
    for item in messages:
        content = (item.content or "").strip()
        if not content:
            continue
        if item.role == "user":
            out.append(ModelRequest(parts=[UserPromptPart(content=content)]))
        else:
            out.append(ModelResponse(parts=[TextPart(content=content)]))
    return out


def _message_list_with_system_prompt(
    system_prompt: Optional[str], messages: Sequence[AiMessage]
) -> List[ModelMessage]:
    """System prompt always first, then the conversation."""
    rest = _history_to_message_list(messages)
    if not system_prompt:
        return rest
    return [ModelRequest(parts=[SystemPromptPart(content=system_prompt)])] + rest


def _request_parameters(config: AiCompletionConfig) -> ModelRequestParameters:
    tools = [
        ToolDefinition(
            name=fn.name,
            description=fn.description,
            parameters_json_schema=fn.parameters,
        )
        for fn in config.function_declarations
    ]
    return ModelRequestParameters(function_tools=tools, allow_text_output=True)


def _model_settings(config: AiCompletionConfig, timeout: float) -> ModelSettings:
    settings: ModelSettings = {"timeout": timeout}
    if config.temperature is not None:
        settings["temperature"] = config.temperature
    if config.max_output_tokens is not None:
        settings["max_tokens"] = config.max_output_tokens
    return settings


def _to_completion(response: ModelResponse, model_name: Optional[str]) -> AiCompletionResponse:
    texts: List[str] = []
    calls: List[AiFunctionCall] = []
    for part in response.parts:
        if isinstance(part, TextPart):
            texts.append(part.content)
        elif isinstance(part, ToolCallPart):
            calls.append(AiFunctionCall(name=part.tool_name, args=part.args_as_dict()))
    usage = response.usage
    return AiCompletionResponse(
        text="".join(texts).strip(),
        model=response.model_name or model_name,
        function_calls=calls,
        usage=AiUsage(
            prompt_tokens=usage.input_tokens,
            completion_tokens=usage.output_tokens,
            total_tokens=usage.input_tokens + usage.output_tokens,
        ),
    )


class PydanticAIGateway:
    """ModelGateway over any pydantic-ai Model."""

    def __init__(
        self,
        model: Union[Model, str],
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._model = model
        self._timeout = timeout_seconds

    @property
    def model_name(self) -> str:
        if isinstance(self._model, str):
            return self._model
        return self._model.model_name

    async def generate_content(
        self, messages: Sequence[AiMessage], config: AiCompletionConfig
    ) -> AiCompletionResponse:
        request_messages = _message_list_with_system_prompt(
            config.system_instruction, messages
        )
        try:
            response = await asyncio.wait_for(
                model_request(
                    self._model,
                    request_messages,
                    model_settings=_model_settings(config, self._timeout),
                    model_request_parameters=_request_parameters(config),
                ),
                timeout=self._timeout,
            )
            return _to_completion(response, self.model_name)
        except asyncio.TimeoutError as e:
            raise GenerationFailed(
                f"Model {self.model_name} did not answer within {self._timeout}s"
            ) from e
        except Exception as e:
            raise GenerationFailed(f"Model {self.model_name} request failed: {e}") from e


def build_gateway(
    backend: ModelBackend, settings: Optional[Settings] = None
) -> PydanticAIGateway:
    settings = settings or get_settings()
    logger.info(
        "LLM gateway config: provider=%s, model=%s, api_key=%s, timeout=%ss",
        backend.tag,
        backend.model_name,
        "set" if backend.api_key else "not set",
        settings.llm_timeout_seconds,
    )
    if not backend.api_key:
        logger.warning(
            "No API key configured for provider %s; model requests will fail.",
            backend.tag,
        )
    return PydanticAIGateway(
        backend.build_model(), timeout_seconds=settings.llm_timeout_seconds
    )


def build_gateway_from_env() -> PydanticAIGateway:
    settings = get_settings()
    return build_gateway(backend_from_settings(settings), settings)
