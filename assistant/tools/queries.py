"""Query builder — turns a validated tool call into parameterized ClickHouse SQL.

Caller-supplied strings only ever travel as bound parameters (``{name:String}``
slots); the query text is assembled from fixed fragments and validated integers.
"""

from __future__ import annotations

from typing import Callable

from pydantic import BaseModel

from assistant.config import settings
from assistant.errors import UnsupportedTool
from assistant.store.models import ParameterizedQuery
from assistant.tools.catalog import (
    ANALYZE_THREAT,
    GET_ALERT_DETAILS,
    GET_ALERTS,
    GET_SECURITY_SUMMARY,
)
from assistant.tools.models import (
    AnalyzeThreatArgs,
    GetAlertDetailsArgs,
    GetAlertsArgs,
    GetSecuritySummaryArgs,
)

TIMEFRAME_DAYS = {"today": 1, "week": 7, "month": 30}
THREAT_ANALYSIS_LIMIT = 20

QueryPlan = dict[str, ParameterizedQuery]


def _table() -> str:
    return settings.alerts_table


def like_pattern(value: str) -> str:
    """Wrap ``value`` for a substring LIKE match, escaping its own wildcards."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def timeframe_predicate(timeframe: str | None) -> str | None:
    days = TIMEFRAME_DAYS.get(timeframe or "")
    if days is None:
        return None
    return f"timestamp >= now() - INTERVAL {days} DAY"


def alerts_query(args: GetAlertsArgs) -> ParameterizedQuery:
    conditions = ["1 = 1"]
    params: dict = {}

    if args.severity:
        conditions.append("severity = {severity:String}")
        params["severity"] = args.severity

    window = timeframe_predicate(args.timeframe)
    if window:
        conditions.append(window)

    text = (
        f"SELECT * FROM {_table()} WHERE {' AND '.join(conditions)} "
        f"ORDER BY timestamp DESC LIMIT {int(args.limit)}"
    )
    return ParameterizedQuery(query_text=text, params=params)


def alert_details_query(args: GetAlertDetailsArgs) -> ParameterizedQuery:
    text = (
        f"SELECT * FROM {_table()} "
        "WHERE name LIKE {pattern:String} OR ip = {identifier:String} "
        "ORDER BY timestamp DESC LIMIT 1"
    )
    return ParameterizedQuery(
        query_text=text,
        params={"pattern": like_pattern(args.alert_id), "identifier": args.alert_id},
    )


def summary_queries(_args: GetSecuritySummaryArgs | None = None) -> QueryPlan:
    table = _table()
    last_day = "timestamp >= now() - INTERVAL 24 HOUR"
    return {
        "total": ParameterizedQuery(
            query_text=f"SELECT count() AS count FROM {table} WHERE {last_day}",
        ),
        "critical": ParameterizedQuery(
            query_text=(
                f"SELECT count() AS count FROM {table} "
                f"WHERE severity = {{severity:String}} AND {last_day}"
            ),
            params={"severity": "critical"},
        ),
        "high": ParameterizedQuery(
            query_text=(
                f"SELECT count() AS count FROM {table} "
                f"WHERE severity = {{severity:String}} AND {last_day}"
            ),
            params={"severity": "high"},
        ),
        "by_severity": ParameterizedQuery(
            query_text=(
                f"SELECT severity, count() AS count FROM {table} "
                "WHERE timestamp >= now() - INTERVAL 7 DAY "
                "GROUP BY severity ORDER BY count DESC"
            ),
        ),
    }


def threat_analysis_query(args: AnalyzeThreatArgs) -> ParameterizedQuery:
    conditions = ["1 = 1"]
    params: dict = {}

    if args.ip:
        conditions.append("ip = {ip:String}")
        params["ip"] = args.ip

    if args.threat_type:
        conditions.append("threat_category LIKE {threat_type:String}")
        params["threat_type"] = like_pattern(args.threat_type)

    text = (
        f"SELECT * FROM {_table()} WHERE {' AND '.join(conditions)} "
        f"ORDER BY timestamp DESC LIMIT {THREAT_ANALYSIS_LIMIT}"
    )
    return ParameterizedQuery(query_text=text, params=params)


def recent_alerts_query(limit: int) -> ParameterizedQuery:
    text = (
        f"SELECT name, ip, port, severity, threat_category, risk_score, reason, timestamp "
        f"FROM {_table()} ORDER BY timestamp DESC LIMIT {int(limit)}"
    )
    return ParameterizedQuery(query_text=text)


_BUILDERS: dict[str, Callable[[BaseModel], QueryPlan]] = {
    GET_ALERTS: lambda a: {"alerts": alerts_query(a)},
    GET_ALERT_DETAILS: lambda a: {"alert": alert_details_query(a)},
    GET_SECURITY_SUMMARY: summary_queries,
    ANALYZE_THREAT: lambda a: {"threat": threat_analysis_query(a)},
}


def build_queries(tool_name: str, args: BaseModel) -> QueryPlan:
    """Return the named queries a tool needs, keyed by what each one fetches."""
    builder = _BUILDERS.get(tool_name)
    if builder is None:
        raise UnsupportedTool(tool_name)
    return builder(args)
