"""Conversation orchestrator — caller-facing entry point for chat turns."""

from __future__ import annotations

import logging

from assistant.conversation.engine import ReasoningEngine
from assistant.conversation.graph import compile_conversation_graph
from assistant.conversation.models import ChatResponse, ConversationTurn, HistoryEntry
from assistant.conversation.transcript import TranscriptStore
from assistant.tools.executor import ToolExecutor

logger = logging.getLogger("assistant.conversation")


class ConversationOrchestrator:
    """Runs one chat turn through the graph and records it in the transcript.

    ``EngineUnavailable`` propagates to the caller; tool failures do not, they
    reach the engine as failed results and are relayed in prose.
    """

    def __init__(
        self,
        engine: ReasoningEngine,
        executor: ToolExecutor,
        transcript: TranscriptStore,
    ) -> None:
        self._transcript = transcript
        self._graph = compile_conversation_graph(engine, executor, transcript)

    async def handle_message(
        self,
        user_id: str,
        message: str,
        prior_history: list[HistoryEntry] | None = None,
    ) -> ChatResponse:
        logger.info("Processing message for user=%s", user_id)

        result = await self._graph.ainvoke({
            "user_id": user_id,
            "message": message,
            "prior_history": prior_history,
        })

        turn: ConversationTurn = result["turn"]
        logger.info(
            "Turn complete: user=%s tool_used=%s tool=%s",
            user_id, turn.tool_used, turn.tool_name,
        )
        return ChatResponse(
            response=turn.response,
            tool_used=turn.tool_used,
            tool_name=turn.tool_name,
        )

    def get_history(self, user_id: str, limit: int | None = None) -> list[ConversationTurn]:
        return self._transcript.read(user_id, limit)
