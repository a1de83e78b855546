"""Conversation state — the typed state object that flows through the chat graph."""

from __future__ import annotations

from typing import TypedDict

from langchain_core.messages import BaseMessage

from assistant.conversation.models import ConversationTurn, HistoryEntry
from assistant.tools.models import ToolCall, ToolResult


class ConversationState(TypedDict, total=False):
    # Input
    user_id: str
    message: str
    prior_history: list[HistoryEntry] | None

    # Context sent to the engine
    messages: list[BaseMessage]

    # Tool round-trip
    tool_call: ToolCall | None
    tool_result: ToolResult

    # Output
    response: str
    turn: ConversationTurn
