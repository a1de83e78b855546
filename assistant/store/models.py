"""Data models for the alert store."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class ParameterizedQuery(BaseModel):
    """Query text plus the values bound server-side to its ``{name:Type}`` slots."""

    model_config = ConfigDict(frozen=True)

    query_text: str
    params: dict[str, Any] = {}


class Alert(BaseModel):
    """A single security-event row from the alerts table."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    ip: str | None = None
    port: int | None = None
    severity: str | None = None
    threat_category: str | None = None
    risk_score: float | None = None
    reason: str | None = None
    timestamp: str | None = None
