"""
Pydantic models for the Chat API request contract.
"""

from typing import Literal

from pydantic import BaseModel, Field

Role = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    """A single message in the conversation history."""

    role: Role = Field(..., description="Message role: 'system', 'user' or 'assistant'")
    content: str = Field(..., description="Message content")


class ChatRequest(BaseModel):
    """Request body for the POST /api/chat endpoint."""

    messages: list[ChatMessage] = Field(
        default_factory=list, description="Conversation history (latest message last)"
    )


class ErrorResponse(BaseModel):
    """Body returned for any failed chat request."""

    error: str
