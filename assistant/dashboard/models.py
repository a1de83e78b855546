"""Data models for dashboard statistics."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class TrendPoint(BaseModel):
    date: str
    count: int


class SeverityBucket(BaseModel):
    severity: str
    count: int


class DashboardStats(BaseModel):
    """Summary numbers for the dashboard, recomputed on every request."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    alerts_today: int = 0
    critical_alerts: int = 0
    ai_processed: int = 0
    ai_analyzed: int = 0
    system_health: str = "Unknown"
    alerts_change: float = 0.0
    alert_trends: list[TrendPoint] = []
    severity_dist: list[SeverityBucket] = []
