"""Dashboard routes — summary statistics and the recent alert table."""

from __future__ import annotations

from fastapi import APIRouter, Query, Request

from assistant.dashboard.stats import AggregationPipeline

router = APIRouter(prefix="/api", tags=["dashboard"])


def _pipeline(request: Request) -> AggregationPipeline:
    return request.app.state.pipeline


@router.get("/dashboard-stats")
async def dashboard_stats(request: Request):
    stats = await _pipeline(request).compute_stats()
    return stats.model_dump(mode="json", by_alias=True)


@router.get("/alerts")
async def recent_alerts(request: Request, limit: int | None = Query(default=None, ge=1)):
    alerts = await _pipeline(request).recent_alerts(limit)
    return [a.model_dump(mode="json") for a in alerts]
