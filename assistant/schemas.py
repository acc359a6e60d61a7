"""
Pydantic schemas for the assistant API.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class HistoryEntry(BaseModel):
    """
    A prior conversation turn supplied by the client.

    Left loosely typed: turns that are not user or assistant text are
    dropped when the transcript is built instead of failing the request.
    """

    role: Any = Field(default=None, description="Turn author: user or assistant (others are ignored)")
    content: Any = Field(default=None, description="Turn text")


class ChatRequest(BaseModel):
    """Chat request from the client."""

    model_config = ConfigDict(populate_by_name=True)

    message: str | None = Field(default=None, description="The user's new message")
    conversation_history: list[HistoryEntry] | None = Field(
        default=None,
        alias="conversationHistory",
        description="Previous turns, oldest first",
    )


class TokenUsageOut(BaseModel):
    input_tokens: int
    output_tokens: int


class ChatResponse(BaseModel):
    """Final assistant answer."""

    response: str = Field(..., description="Assistant reply text")
    usage: TokenUsageOut | None = Field(default=None, description="Tokens used across all model calls")


class ErrorResponse(BaseModel):
    """Error body returned for every non-200 chat response."""

    error: str = Field(..., description="Error message")
    details: str | None = Field(default=None, description="Diagnostic detail, if any")
