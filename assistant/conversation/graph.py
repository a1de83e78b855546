"""LangGraph chat workflow — at most one tool round-trip per user message."""

from __future__ import annotations

import logging
from typing import Literal

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage, ToolMessage
from langgraph.graph import END, StateGraph

from assistant.config import settings
from assistant.conversation.engine import (
    ReasoningEngine,
    first_tool_call,
    message_text,
    single_call_message,
)
from assistant.conversation.models import HistoryEntry
from assistant.conversation.prompts import system_prompt
from assistant.conversation.state import ConversationState
from assistant.conversation.transcript import TranscriptStore
from assistant.tools.catalog import as_functions
from assistant.tools.executor import ToolExecutor

logger = logging.getLogger("assistant.conversation")


def history_messages(history: list[HistoryEntry], window: int) -> list[BaseMessage]:
    """Expand the last ``window`` exchanges into user/assistant message pairs."""
    if window <= 0:
        return []
    messages: list[BaseMessage] = []
    for entry in history[-window:]:
        messages.append(HumanMessage(content=entry.content))
        messages.append(AIMessage(content=entry.response))
    return messages


def build_conversation_graph(
    engine: ReasoningEngine,
    executor: ToolExecutor,
    transcript: TranscriptStore,
) -> StateGraph:
    """Construct the state machine for a single chat turn."""

    # ── Node functions ──────────────────────────────────────────────

    async def build_context(state: ConversationState) -> dict:
        history = state.get("prior_history")
        if history is None:
            history = [
                HistoryEntry(content=t.user_message, response=t.response)
                for t in transcript.read(state["user_id"], limit=settings.history_window_turns)
            ]

        messages = [
            SystemMessage(content=system_prompt()),
            *history_messages(history, settings.history_window_turns),
            HumanMessage(content=state["message"]),
        ]
        return {"messages": messages, "tool_call": None}

    async def first_completion(state: ConversationState) -> dict:
        reply = await engine.complete(state["messages"], tools=as_functions(), phase="first")
        call = first_tool_call(reply)
        if call is None:
            return {"response": message_text(reply)}

        logger.info("Engine requested tool: %s", call.name)
        return {
            "tool_call": call,
            "messages": [*state["messages"], single_call_message(reply, call)],
        }

    async def execute_tool(state: ConversationState) -> dict:
        call = state["tool_call"]
        result = await executor.execute(call)
        tool_message = ToolMessage(
            content=result.model_dump_json(),
            tool_call_id=call.id or call.name,
            name=call.name,
        )
        return {"tool_result": result, "messages": [*state["messages"], tool_message]}

    async def second_completion(state: ConversationState) -> dict:
        reply = await engine.complete(state["messages"], phase="second")
        return {"response": message_text(reply)}

    async def finalize(state: ConversationState) -> dict:
        call = state.get("tool_call")
        turn = transcript.append(
            state["user_id"],
            state["message"],
            state["response"],
            tool_name=call.name if call else None,
        )
        return {"turn": turn}

    # ── Routing logic ───────────────────────────────────────────────

    def after_first(state: ConversationState) -> Literal["execute_tool", "finalize"]:
        return "execute_tool" if state.get("tool_call") else "finalize"

    # ── Build the graph ─────────────────────────────────────────────

    graph = StateGraph(ConversationState)

    graph.add_node("build_context", build_context)
    graph.add_node("first_completion", first_completion)
    graph.add_node("execute_tool", execute_tool)
    graph.add_node("second_completion", second_completion)
    graph.add_node("finalize", finalize)

    graph.set_entry_point("build_context")
    graph.add_edge("build_context", "first_completion")
    graph.add_conditional_edges("first_completion", after_first, {
        "execute_tool": "execute_tool",
        "finalize": "finalize",
    })
    graph.add_edge("execute_tool", "second_completion")
    graph.add_edge("second_completion", "finalize")
    graph.add_edge("finalize", END)

    return graph


def compile_conversation_graph(
    engine: ReasoningEngine,
    executor: ToolExecutor,
    transcript: TranscriptStore,
):
    """Build and compile the conversation graph, ready to invoke."""
    graph = build_conversation_graph(engine, executor, transcript)
    return graph.compile()
