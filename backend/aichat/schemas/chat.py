"""Request/response schemas for the chat endpoint."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError


class ChatRequest(BaseModel):
    message: str
    llm: Optional[str] = None  # openai | ollama | gemini | anthropic, any case

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise PydanticCustomError("not_blank", "Message cannot be empty")
        return v


class ChatExchange(BaseModel):
    """Normalized result of one routed request; also the response body."""

    response: str
    provider: str  # canonical uppercase ProviderId name, e.g. "OLLAMA"
    message: str
    timestamp: int  # epoch milliseconds


ChatResponse = ChatExchange


class ErrorResponse(BaseModel):
    status: int
    errorCode: str
    message: str
    timestamp: datetime
