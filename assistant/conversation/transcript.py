"""In-memory transcript store — per-identity conversation history for auditing."""

from __future__ import annotations

import logging
import threading
from collections import defaultdict

from assistant.config import settings
from assistant.conversation.models import ConversationTurn

logger = logging.getLogger("assistant.conversation")


class TranscriptStore:
    """Append-only turn lists keyed by conversation identity.

    Appends and reads for every key go through one lock, so concurrent turns for
    the same user never interleave and readers always get a consistent copy.
    Nothing is evicted.
    """

    def __init__(self) -> None:
        self._turns: dict[str, list[ConversationTurn]] = defaultdict(list)
        self._lock = threading.Lock()

    def append(
        self,
        conversation_id: str,
        user_message: str,
        response: str,
        tool_name: str | None = None,
    ) -> ConversationTurn:
        turn = ConversationTurn(
            user_message=user_message,
            response=response,
            tool_used=tool_name is not None,
            tool_name=tool_name,
        )
        with self._lock:
            self._turns[conversation_id].append(turn)
            size = len(self._turns[conversation_id])
        logger.debug("Transcript %s now holds %d turns", conversation_id, size)
        return turn

    def read(self, conversation_id: str, limit: int | None = None) -> list[ConversationTurn]:
        """Most recent ``limit`` turns, oldest first."""
        limit = settings.transcript_read_limit if limit is None else limit
        if limit <= 0:
            return []
        with self._lock:
            turns = self._turns.get(conversation_id, [])
            return list(turns[-limit:])
