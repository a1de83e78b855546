"""Tests for the HTTP routes, wired to fakes instead of live backends."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage

from assistant.config import settings
from assistant.conversation.orchestrator import ConversationOrchestrator
from assistant.conversation.transcript import TranscriptStore
from assistant.dashboard.stats import AggregationPipeline
from assistant.routes import chatbot, dashboard
from assistant.tools.executor import ToolExecutor
from tests.conftest import FakeEngine, FakeStore, engine_down, make_alert


def build_client(engine: FakeEngine, store: FakeStore | None = None) -> TestClient:
    store = store or FakeStore()
    app = FastAPI()
    app.include_router(chatbot.router)
    app.include_router(dashboard.router)
    app.state.orchestrator = ConversationOrchestrator(engine, ToolExecutor(store), TranscriptStore())
    app.state.pipeline = AggregationPipeline(store)
    return TestClient(app)


@pytest.fixture
def client() -> TestClient:
    engine = FakeEngine([
        AIMessage(content="", tool_calls=[{"name": "get_alerts", "args": {"limit": 2}, "id": "x"}]),
        AIMessage(content="Two alerts found."),
    ])
    return build_client(engine, FakeStore(lambda q: [make_alert(), make_alert()]))


class TestChat:
    def test_chat_with_tool(self, client):
        resp = client.post("/api/chatbot", json={"message": "latest alerts", "userId": "alice"})
        assert resp.status_code == 200
        body = resp.json()
        assert body == {
            "success": True,
            "response": "Two alerts found.",
            "toolUsed": True,
            "function": "get_alerts",
        }

    def test_empty_message_rejected(self, client):
        resp = client.post("/api/chatbot", json={"message": "   "})
        assert resp.status_code == 400
        assert resp.json()["success"] is False

    def test_engine_failure_is_structured(self):
        client = build_client(FakeEngine([engine_down()]))
        resp = client.post("/api/chatbot", json={"message": "hi"})
        assert resp.status_code == 502
        body = resp.json()
        assert body["success"] is False
        assert "quota" in body["message"]

    def test_history_after_chat(self, client):
        client.post("/api/chatbot", json={"message": "latest alerts", "userId": "alice"})
        resp = client.get("/api/chatbot/history/alice", params={"limit": 1})
        body = resp.json()
        assert body["count"] == 1
        turn = body["history"][0]
        assert turn["userMessage"] == "latest alerts"
        assert turn["toolName"] == "get_alerts"

    def test_history_default_limit_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "transcript_read_limit", 1)
        client = build_client(FakeEngine([AIMessage(content="one"), AIMessage(content="two")]))
        client.post("/api/chatbot", json={"message": "first", "userId": "bob"})
        client.post("/api/chatbot", json={"message": "second", "userId": "bob"})

        body = client.get("/api/chatbot/history/bob").json()

        assert body["count"] == 1
        assert body["history"][0]["userMessage"] == "second"


class TestCatalogRoutes:
    def test_tools_listed(self, client):
        names = [t["name"] for t in client.get("/api/chatbot/tools").json()["tools"]]
        assert names == ["get_alerts", "get_alert_details", "get_security_summary", "analyze_threat"]

    def test_help_topics(self, client):
        assert "Available commands" in client.get("/api/chatbot/help/commands").json()["help"]
        assert "I can help you with" in client.get("/api/chatbot/help").json()["help"]
        assert "I can help you with" in client.get("/api/chatbot/help/unknown").json()["help"]


class TestDashboardRoutes:
    def test_stats_camel_case(self):
        def respond(q):
            if "total_count" in q.query_text:
                return [{"today_count": "2", "critical_count": "0", "total_count": "2"}]
            return []

        client = build_client(FakeEngine([]), FakeStore(respond))
        body = client.get("/api/dashboard-stats").json()
        assert body["alertsToday"] == 2
        assert body["systemHealth"] == "Good"
        assert set(body) >= {"alertTrends", "severityDist", "aiProcessed", "alertsChange"}

    def test_recent_alerts(self, client):
        body = client.get("/api/alerts", params={"limit": 2}).json()
        assert len(body) == 2
        assert body[0]["ip"] == "10.0.0.5"
