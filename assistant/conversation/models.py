"""Data models for chat turns and transcripts."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class HistoryEntry(BaseModel):
    """A prior exchange as posted by the chat client."""

    content: str
    response: str = ""


class ConversationTurn(BaseModel):
    """One finalized exchange in a user's transcript."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    user_message: str
    response: str
    tool_used: bool = False
    tool_name: str | None = None


class ChatResponse(BaseModel):
    response: str
    tool_used: bool = False
    tool_name: str | None = None
