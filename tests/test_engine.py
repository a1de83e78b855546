"""Tests for assistant.conversation.engine — the LangChain model adapter."""

from __future__ import annotations

import asyncio

import pytest
from langchain_core.language_models.fake_chat_models import GenericFakeChatModel
from langchain_core.messages import AIMessage, HumanMessage, ToolMessage

from assistant.conversation.engine import (
    ReasoningEngine,
    first_tool_call,
    message_text,
    no_tool_choice,
    single_call_message,
)
from assistant.errors import EngineUnavailable
from assistant.tools.catalog import as_functions


class RecordingChatModel(GenericFakeChatModel):
    """Fake chat model that remembers how tools were bound."""

    bound: list = []

    def bind_tools(self, tools, *, tool_choice=None, **kwargs):
        self.bound.append({"tools": tools, "tool_choice": tool_choice})
        return self


class BrokenChatModel(GenericFakeChatModel):
    async def ainvoke(self, *args, **kwargs):
        raise ConnectionError("engine down")


class SlowChatModel(GenericFakeChatModel):
    async def ainvoke(self, *args, **kwargs):
        await asyncio.sleep(1)
        return AIMessage(content="late")


def _model(cls, *replies):
    return cls(messages=iter(replies or [AIMessage(content="unused")]))


class TestComplete:
    def test_first_phase_binds_catalog_in_auto_mode(self):
        llm = _model(RecordingChatModel, AIMessage(content="hello"))
        engine = ReasoningEngine(llm)

        reply = asyncio.run(engine.complete([HumanMessage(content="hi")], tools=as_functions()))

        assert message_text(reply) == "hello"
        assert llm.bound[0]["tool_choice"] == "auto"
        assert len(llm.bound[0]["tools"]) == 4

    def test_no_tools_means_no_binding(self):
        llm = _model(RecordingChatModel, AIMessage(content="prose"))
        asyncio.run(ReasoningEngine(llm).complete([HumanMessage(content="hi")], phase="second"))
        assert llm.bound == []

    def test_tool_history_keeps_catalog_declared_but_disabled(self):
        llm = _model(RecordingChatModel, AIMessage(content="summary"))
        engine = ReasoningEngine(llm, no_tools_choice={"type": "none"})
        messages = [
            HumanMessage(content="alerts?"),
            AIMessage(content="", tool_calls=[{"name": "get_alerts", "args": {}, "id": "c1"}]),
            ToolMessage(content='{"success": true}', tool_call_id="c1"),
        ]

        asyncio.run(engine.complete(messages, phase="second"))

        assert llm.bound[0]["tool_choice"] == {"type": "none"}
        assert len(llm.bound[0]["tools"]) == 4

    def test_no_tool_choice_per_provider(self):
        assert no_tool_choice("openai") == "none"
        assert no_tool_choice("anthropic") == {"type": "none"}

    def test_failure_maps_to_engine_unavailable(self):
        engine = ReasoningEngine(_model(BrokenChatModel))
        with pytest.raises(EngineUnavailable, match="engine down"):
            asyncio.run(engine.complete([HumanMessage(content="hi")]))

    def test_timeout_maps_to_engine_unavailable(self):
        engine = ReasoningEngine(_model(SlowChatModel), timeout=0.01)
        with pytest.raises(EngineUnavailable, match="did not answer"):
            asyncio.run(engine.complete([HumanMessage(content="hi")]))


class TestToolCallExtraction:
    def test_plain_reply_has_no_call(self):
        assert first_tool_call(AIMessage(content="just text")) is None

    def test_only_first_call_kept(self):
        reply = AIMessage(
            content="",
            tool_calls=[
                {"name": "get_alerts", "args": {"severity": "high"}, "id": "c1"},
                {"name": "get_security_summary", "args": {}, "id": "c2"},
            ],
        )
        call = first_tool_call(reply)
        assert call.name == "get_alerts"
        assert call.id == "c1"

        trimmed = single_call_message(reply, call)
        assert [tc["id"] for tc in trimmed.tool_calls] == ["c1"]

    def test_text_blocks_joined(self):
        reply = AIMessage(content=[{"type": "text", "text": "a"}, {"type": "text", "text": "b"}])
        assert message_text(reply) == "ab"

    def test_unparseable_call_kept_with_error(self):
        reply = AIMessage(content="", invalid_tool_calls=[{
            "name": "analyze_threat", "args": "{bad", "id": "c3", "error": "Expecting property name",
        }])
        call = first_tool_call(reply)
        assert call.name == "analyze_threat"
        assert call.id == "c3"
        assert call.args == {}
        assert call.parse_error == "Expecting property name"
