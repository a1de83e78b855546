"""Chatbot routes — chat, transcript history, tool listing and help."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from assistant.conversation.models import HistoryEntry
from assistant.conversation.orchestrator import ConversationOrchestrator
from assistant.conversation.prompts import get_help
from assistant.errors import EngineUnavailable
from assistant.tools.catalog import list_tools

logger = logging.getLogger("assistant.api")
router = APIRouter(prefix="/api/chatbot", tags=["chatbot"])


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = ""
    history: list[HistoryEntry] | None = None
    user_id: str = Field(default="default", alias="userId")


def _orchestrator(request: Request) -> ConversationOrchestrator:
    return request.app.state.orchestrator


@router.post("")
async def chat(body: ChatRequest, request: Request):
    """Answer a message, letting the engine call at most one tool."""
    if not body.message.strip():
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "Message is required"},
        )

    try:
        result = await _orchestrator(request).handle_message(
            body.user_id, body.message, body.history
        )
    except EngineUnavailable as exc:
        logger.error("Chat turn failed for user=%s: %s", body.user_id, exc)
        return JSONResponse(
            status_code=502,
            content={
                "success": False,
                "error": "Failed to process request",
                "message": str(exc),
            },
        )

    return {
        "success": True,
        "response": result.response,
        "toolUsed": result.tool_used,
        "function": result.tool_name,
    }


@router.get("/history/{user_id}")
async def history(user_id: str, request: Request, limit: int | None = None):
    turns = _orchestrator(request).get_history(user_id, limit)
    return {
        "userId": user_id,
        "count": len(turns),
        "history": [t.model_dump(mode="json", by_alias=True) for t in turns],
    }


@router.get("/tools")
async def tools():
    return {
        "success": True,
        "tools": [spec.to_function()["function"] for spec in list_tools()],
    }


@router.get("/help")
@router.get("/help/{topic}")
async def help_topic(topic: str = "default"):
    return {"success": True, "topic": topic, "help": get_help(topic)}
