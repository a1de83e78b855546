"""Shared fakes and factories for SOC Assistant tests."""

from __future__ import annotations

from typing import Any, Callable

from assistant.errors import EngineUnavailable, StoreUnavailable
from assistant.store.models import ParameterizedQuery

# ── Helper: alert rows as the store returns them ────────────────────────


def make_alert(
    *,
    name: str = "SSH Brute Force",
    ip: str = "10.0.0.5",
    port: int = 22,
    severity: str = "high",
    threat_category: str = "credential_attack",
    risk_score: float = 0.8,
    reason: str = "repeated login failures",
    timestamp: str = "2026-10-18 09:00:00",
) -> dict:
    return {
        "name": name,
        "ip": ip,
        "port": port,
        "severity": severity,
        "threat_category": threat_category,
        "risk_score": risk_score,
        "reason": reason,
        "timestamp": timestamp,
    }


def alerts_with(critical: int = 0, high: int = 0, low: int = 0) -> list[dict]:
    return (
        [make_alert(severity="critical") for _ in range(critical)]
        + [make_alert(severity="high") for _ in range(high)]
        + [make_alert(severity="low") for _ in range(low)]
    )


# ── Test doubles ────────────────────────────────────────────────────────


class FakeStore:
    """Alert store double: answers each query through ``respond``."""

    def __init__(self, respond: Callable[[ParameterizedQuery], Any] | None = None) -> None:
        self._respond = respond or (lambda q: [])
        self.queries: list[ParameterizedQuery] = []

    async def query(self, query: ParameterizedQuery) -> list[dict]:
        self.queries.append(query)
        result = self._respond(query)
        if isinstance(result, Exception):
            raise result
        return result


class FakeEngine:
    """Reasoning engine double returning scripted replies in order."""

    def __init__(self, replies: list) -> None:
        self._replies = list(replies)
        self.calls: list[dict] = []

    async def complete(self, messages, tools=None, phase="first"):
        self.calls.append({"messages": list(messages), "tools": tools, "phase": phase})
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def store_down(_query: ParameterizedQuery) -> StoreUnavailable:
    return StoreUnavailable("connection refused")


def engine_down() -> EngineUnavailable:
    return EngineUnavailable("Reasoning engine call failed: quota exceeded")

