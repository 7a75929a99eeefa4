"""Backend-neutral request/response shapes for the generative-model gateway."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

AiRole = Literal["user", "model"]


class AiMessage(BaseModel):
    role: AiRole
    content: str


class AiFunctionDeclaration(BaseModel):
    name: str
    description: Optional[str] = None
    parameters: dict[str, Any]


class AiFunctionCall(BaseModel):
    name: str
    args: dict[str, Any] = Field(default_factory=dict)


class AiUsage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class AiCompletionConfig(BaseModel):
    model: Optional[str] = None
    system_instruction: Optional[str] = None
    temperature: Optional[float] = None
    max_output_tokens: Optional[int] = None
    function_declarations: list[AiFunctionDeclaration] = Field(default_factory=list)


class AiCompletionResponse(BaseModel):
    text: str = ""
    model: Optional[str] = None
    function_calls: list[AiFunctionCall] = Field(default_factory=list)
    usage: Optional[AiUsage] = None

    def find_call(self, name: str) -> Optional[AiFunctionCall]:
        return next((fc for fc in self.function_calls if fc.name == name), None)
