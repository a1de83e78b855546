"""Reasoning engine adapter — a LangChain chat model with optional tool binding."""

from __future__ import annotations

import asyncio
import logging

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, ToolMessage

from assistant.config import settings
from assistant.errors import EngineUnavailable
from assistant.telemetry.metrics import engine_calls_total
from assistant.tools.catalog import as_functions
from assistant.tools.models import ToolCall

logger = logging.getLogger("assistant.conversation")


def build_llm() -> BaseChatModel:
    if settings.llm_provider == "anthropic":
        from langchain_anthropic import ChatAnthropic
        return ChatAnthropic(
            model=settings.llm_model,
            api_key=settings.anthropic_api_key,
            temperature=settings.llm_temperature,
            max_tokens=1024,
        )
    elif settings.llm_provider == "openai":
        from langchain_openai import ChatOpenAI
        return ChatOpenAI(
            model=settings.llm_model,
            api_key=settings.openai_api_key,
            temperature=settings.llm_temperature,
        )
    else:
        raise ValueError(f"Unsupported LLM provider: {settings.llm_provider}")


def no_tool_choice(provider: str) -> str | dict:
    """Provider's tool_choice value that declares tools but forbids calling them."""
    if provider == "anthropic":
        return {"type": "none"}
    return "none"


class ReasoningEngine:
    """Completes a message list, optionally offering the tool catalog.

    Without ``tools`` the engine cannot propose a call. Once the history holds
    a tool exchange the catalog stays declared, with ``no_tools_choice``, since
    Anthropic rejects tool blocks in a request that declares no tools.
    """

    def __init__(
        self,
        llm: BaseChatModel,
        timeout: float | None = None,
        no_tools_choice: str | dict = "none",
    ) -> None:
        self._llm = llm
        self._timeout = timeout
        self._no_tools_choice = no_tools_choice

    def _model(self, messages: list[BaseMessage], tools: list[dict] | None):
        if tools:
            return self._llm.bind_tools(tools, tool_choice="auto")
        if any(isinstance(m, ToolMessage) for m in messages):
            return self._llm.bind_tools(as_functions(), tool_choice=self._no_tools_choice)
        return self._llm

    async def complete(
        self,
        messages: list[BaseMessage],
        tools: list[dict] | None = None,
        phase: str = "first",
    ) -> AIMessage:
        model = self._model(messages, tools)
        try:
            response = await asyncio.wait_for(model.ainvoke(messages), timeout=self._timeout)
        except asyncio.TimeoutError as exc:
            engine_calls_total.labels(phase=phase, outcome="timeout").inc()
            raise EngineUnavailable(
                f"Reasoning engine did not answer within {self._timeout}s"
            ) from exc
        except Exception as exc:
            logger.exception("Reasoning engine call failed (phase=%s)", phase)
            engine_calls_total.labels(phase=phase, outcome="error").inc()
            raise EngineUnavailable(f"Reasoning engine call failed: {exc}") from exc

        engine_calls_total.labels(phase=phase, outcome="success").inc()
        return response


def message_text(message: BaseMessage) -> str:
    """Plain text of a model message, whether content is a string or blocks."""
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def first_tool_call(message: AIMessage) -> ToolCall | None:
    """The first proposed call, including one whose arguments failed to parse."""
    calls = getattr(message, "tool_calls", None) or []
    if not calls:
        invalid = getattr(message, "invalid_tool_calls", None) or []
        if not invalid:
            return None
        bad = invalid[0]
        logger.warning("Engine proposed unparseable tool call: %s", bad)
        return ToolCall(
            name=bad.get("name") or "",
            id=bad.get("id"),
            parse_error=bad.get("error") or "arguments are not valid JSON",
        )
    if len(calls) > 1:
        logger.warning(
            "Engine proposed %d tool calls; only '%s' will run", len(calls), calls[0]["name"]
        )
    first = calls[0]
    return ToolCall(name=first["name"], args=first.get("args") or {}, id=first.get("id"))


def single_call_message(message: AIMessage, call: ToolCall) -> AIMessage:
    """Copy of ``message`` that proposes only ``call``."""
    content = message.content
    if isinstance(content, list):
        content = [
            block for block in content
            if not (isinstance(block, dict) and block.get("type") == "tool_use"
                    and block.get("id") != call.id)
        ]
    return AIMessage(
        content=content,
        tool_calls=[{"name": call.name, "args": call.args, "id": call.id, "type": "tool_call"}],
    )
