from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(CamelModel):
    message: str = Field(..., min_length=1, max_length=4000)
    persona: str = "buddy"
    conversation_history: list[ChatMessage] = []
    max_tokens: int = Field(default=500, ge=1, le=4000)
    temperature: float = Field(default=0.7, ge=0, le=2)


class ChatResponse(CamelModel):
    response: str
    persona: str
    credits_used: int
    credits_remaining: int
    fallback: bool
    success: bool = True


class PersonaInfo(CamelModel):
    id: str
    name: str
    description: str
    tier: str
    credit_cost: int
    model: str
