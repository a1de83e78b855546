"""Tool executor — validates a tool call, runs its queries and shapes the result."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from pydantic import BaseModel, ValidationError

from assistant.errors import StoreUnavailable, UnsupportedTool
from assistant.store.clickhouse import AlertStore
from assistant.store.models import ParameterizedQuery
from assistant.store.rows import first_value
from assistant.telemetry.metrics import tool_calls_total
from assistant.tools.catalog import (
    ANALYZE_THREAT,
    GET_ALERT_DETAILS,
    GET_ALERTS,
    GET_SECURITY_SUMMARY,
    get_tool,
    tool_names,
)
from assistant.tools.models import ARGS_MODELS, ToolCall, ToolResult, parse_tool_args
from assistant.tools.queries import QueryPlan, build_queries
from assistant.tools.risk import assess_risk, describe_risk, recommend

logger = logging.getLogger("assistant.tools")

Handler = Callable[[BaseModel, QueryPlan], Awaitable[ToolResult]]


class ToolExecutor:
    """Runs catalog tools against the alert store.

    Data-layer failures come back as failed ``ToolResult``s so the reasoning
    engine can relay them; nothing raised by the store escapes ``execute``.
    """

    def __init__(self, store: AlertStore) -> None:
        self._store = store
        self._handlers: dict[str, Handler] = {
            GET_ALERTS: self._get_alerts,
            GET_ALERT_DETAILS: self._get_alert_details,
            GET_SECURITY_SUMMARY: self._get_security_summary,
            ANALYZE_THREAT: self._analyze_threat,
        }
        check_registry(self._handlers)

    async def execute(self, call: ToolCall) -> ToolResult:
        logger.info("Executing tool: %s args=%s", call.name, call.args)

        handler = self._handlers.get(call.name)
        if handler is None:
            tool_calls_total.labels(tool="unknown", outcome="unsupported").inc()
            return ToolResult.fail(str(UnsupportedTool(call.name)))

        if call.parse_error is not None:
            logger.warning("Unparseable arguments for %s: %s", call.name, call.parse_error)
            tool_calls_total.labels(tool=call.name, outcome="invalid").inc()
            return ToolResult.fail(f"Invalid arguments for {call.name}: {call.parse_error}")

        try:
            args = parse_tool_args(call.name, call.args)
        except ValidationError as exc:
            logger.warning("Invalid arguments for %s: %s", call.name, exc)
            tool_calls_total.labels(tool=call.name, outcome="invalid").inc()
            return ToolResult.fail(f"Invalid arguments for {call.name}: {_describe(exc)}")

        try:
            result = await handler(args, build_queries(call.name, args))
        except StoreUnavailable as exc:
            logger.exception("Tool %s failed against the alert store", call.name)
            tool_calls_total.labels(tool=call.name, outcome="error").inc()
            return ToolResult.fail(str(exc))

        tool_calls_total.labels(
            tool=call.name, outcome="success" if result.success else "empty"
        ).inc()
        return result

    # ── Handlers ────────────────────────────────────────────────────

    async def _get_alerts(self, args: BaseModel, plan: QueryPlan) -> ToolResult:
        alerts = await self._store.query(plan["alerts"])
        return ToolResult.ok(count=len(alerts), alerts=alerts)

    async def _get_alert_details(self, args: BaseModel, plan: QueryPlan) -> ToolResult:
        rows = await self._store.query(plan["alert"])
        if not rows:
            return ToolResult.fail(f"Alert not found: {args.alert_id}")
        alert = rows[0]
        return ToolResult.ok(alert=alert, recommendation=recommend(alert))

    async def _get_security_summary(self, args: BaseModel, plan: QueryPlan) -> ToolResult:
        names = list(plan)
        rows = await asyncio.gather(*(self._query_or_empty(name, plan[name]) for name in names))
        results = dict(zip(names, rows))

        distribution = [
            {"severity": row.get("severity") or "unknown", "count": first_value([row])}
            for row in results["by_severity"]
        ]
        return ToolResult.ok(summary={
            "totalAlertsToday": first_value(results["total"]),
            "criticalAlerts": first_value(results["critical"]),
            "highAlerts": first_value(results["high"]),
            "severityDistribution": distribution,
        })

    async def _analyze_threat(self, args: BaseModel, plan: QueryPlan) -> ToolResult:
        alerts = await self._store.query(plan["threat"])
        level = assess_risk(alerts)
        return ToolResult.ok(analysis={
            "totalOccurrences": len(alerts),
            "alerts": alerts,
            "riskLevel": level.value,
            "riskAssessment": describe_risk(level),
        })

    async def _query_or_empty(self, name: str, query: ParameterizedQuery) -> list[dict]:
        try:
            return await self._store.query(query)
        except StoreUnavailable:
            logger.warning("Summary sub-query '%s' failed, defaulting to 0", name, exc_info=True)
            return []


def check_registry(handlers: dict) -> None:
    """Fail fast when the handler registry and the catalog disagree."""
    declared = tool_names()
    implemented = set(handlers)
    if declared != implemented:
        missing = sorted(declared - implemented) or sorted(implemented - declared)
        raise UnsupportedTool(", ".join(missing))

    for name in sorted(declared):
        spec = get_tool(name)
        model = ARGS_MODELS.get(name)
        if model is None or set(model.model_fields) - {"tool"} != set(spec.parameters):
            raise UnsupportedTool(f"{name} (argument schema mismatch)")


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
