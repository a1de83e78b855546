"""Aggregation pipeline — turns raw alert rows into dashboard statistics."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from pydantic import ValidationError

from assistant.config import settings
from assistant.dashboard.models import DashboardStats, SeverityBucket, TrendPoint
from assistant.errors import StoreUnavailable
from assistant.store.clickhouse import AlertStore
from assistant.store.models import Alert, ParameterizedQuery
from assistant.store.rows import as_int, first_value
from assistant.tools.queries import recent_alerts_query

logger = logging.getLogger("assistant.dashboard")

AI_PROCESSED_CAP = 100
WARNING_CRITICAL_THRESHOLD = 5
TREND_MONTHS = 6
SEVERITY_WINDOW_DAYS = 30

_TODAY = "toDate(now({tz:String}))"
_ALERT_DAY = "toDate(timestamp, {tz:String})"


def stats_queries() -> dict[str, ParameterizedQuery]:
    table = settings.alerts_table
    tz = {"tz": settings.dashboard_timezone}
    return {
        "counts": ParameterizedQuery(
            query_text=(
                "SELECT "
                f"countIf({_ALERT_DAY} = {_TODAY}) AS today_count, "
                "countIf(lower(severity) IN ('high', 'critical')) AS critical_count, "
                f"count() AS total_count FROM {table}"
            ),
            params=tz,
        ),
        "trends": ParameterizedQuery(
            query_text=(
                f"SELECT toStartOfMonth({_ALERT_DAY}) AS month, count() AS count FROM {table} "
                f"WHERE {_ALERT_DAY} >= toStartOfMonth({_TODAY}) - INTERVAL {TREND_MONTHS - 1} MONTH "
                "GROUP BY month ORDER BY month ASC"
            ),
            params=tz,
        ),
        "severity": ParameterizedQuery(
            query_text=(
                f"SELECT severity, count() AS count FROM {table} "
                f"WHERE timestamp >= now() - INTERVAL {SEVERITY_WINDOW_DAYS} DAY "
                "GROUP BY severity ORDER BY count DESC"
            ),
        ),
        "yesterday": ParameterizedQuery(
            query_text=f"SELECT count() AS count FROM {table} WHERE {_ALERT_DAY} = {_TODAY} - 1",
            params=tz,
        ),
    }


def percent_change(today: int, yesterday: int) -> float:
    if yesterday <= 0:
        return 0.0
    return round((today - yesterday) / yesterday * 100, 2)


def system_health(critical: int) -> str:
    return "Warning" if critical > WARNING_CRITICAL_THRESHOLD else "Good"


def month_label(raw: object) -> str:
    text = str(raw or "")
    try:
        return datetime.strptime(text[:10], "%Y-%m-%d").strftime("%b %Y")
    except ValueError:
        return text


def severity_buckets(rows: list[dict]) -> list[SeverityBucket]:
    counts: dict[str, int] = {}
    for row in rows:
        label = str(row.get("severity") or "").strip() or "unknown"
        counts[label] = counts.get(label, 0) + as_int(row.get("count"))
    ordered = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return [SeverityBucket(severity=label, count=count) for label, count in ordered]


class AggregationPipeline:
    """Runs the dashboard query batch and assembles a DashboardStats record.

    A failed sub-query degrades its part of the record to defaults; the
    pipeline itself never raises for store errors.
    """

    def __init__(self, store: AlertStore) -> None:
        self._store = store

    async def compute_stats(self) -> DashboardStats:
        queries = stats_queries()
        names = list(queries)
        rows = await asyncio.gather(*(self._run(name, queries[name]) for name in names))
        results = dict(zip(names, rows))

        counts = results["counts"]
        today = first_value(counts or [], "today_count")
        critical = first_value(counts or [], "critical_count")
        total = first_value(counts or [], "total_count")
        yesterday = first_value(results["yesterday"] or [])

        stats = DashboardStats(
            alerts_today=today,
            critical_alerts=critical,
            ai_processed=min(total, AI_PROCESSED_CAP),
            ai_analyzed=today,
            system_health=system_health(critical) if counts is not None else "Unknown",
            alerts_change=percent_change(today, yesterday),
            alert_trends=[
                TrendPoint(date=month_label(r.get("month")), count=as_int(r.get("count")))
                for r in results["trends"] or []
            ],
            severity_dist=severity_buckets(results["severity"] or []),
        )
        logger.info(
            "Dashboard stats: today=%d critical=%d yesterday=%d health=%s",
            today, critical, yesterday, stats.system_health,
        )
        return stats

    async def recent_alerts(self, limit: int | None = None) -> list[Alert]:
        limit = limit or settings.recent_alerts_limit
        rows = await self._run("recent_alerts", recent_alerts_query(limit))
        alerts = []
        for row in rows or []:
            try:
                alerts.append(Alert.model_validate(row))
            except ValidationError:
                logger.warning("Skipping malformed alert row: %s", row)
        return alerts

    async def _run(self, name: str, query: ParameterizedQuery) -> list[dict] | None:
        try:
            return await self._store.query(query)
        except StoreUnavailable:
            logger.exception("Dashboard query '%s' failed", name)
            return None
