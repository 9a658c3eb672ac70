"""Chat completion request and response contracts."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

ChatModel = Literal["gpt-3.5-turbo", "gpt-4", "gpt-4-turbo"]


class ChatRequest(BaseModel):
    """A single-turn prompt for the assistant."""

    message: str = Field(..., min_length=1, description="User message")
    model: ChatModel = Field(default="gpt-3.5-turbo")
    max_tokens: int = Field(default=150, alias="maxTokens", gt=0, le=4096)

    model_config = {"populate_by_name": True}


class ChatResponse(BaseModel):
    """Assistant reply."""

    message: str
    usage: Optional[dict] = None
    model: Optional[str] = None
