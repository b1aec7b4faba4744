from typing import Any

from pydantic import Field

from chainwise.schemas.chat import CamelModel


class ToolRequest(CamelModel):
    input: Any = Field(default_factory=dict)
    max_tokens: int = Field(default=1500, ge=1, le=4000)


class ToolResponse(CamelModel):
    tool: str
    response: str
    credits_used: int
    credits_remaining: int
    fallback: bool
    success: bool = True


class ToolInfo(CamelModel):
    id: str
    name: str
    tier: str
    credit_cost: int
    output_format: str
