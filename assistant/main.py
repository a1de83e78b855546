"""SOC Assistant — FastAPI service entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.responses import Response

from assistant.config import settings
from assistant.conversation.engine import ReasoningEngine, build_llm, no_tool_choice
from assistant.conversation.orchestrator import ConversationOrchestrator
from assistant.conversation.transcript import TranscriptStore
from assistant.dashboard.stats import AggregationPipeline
from assistant.routes import chatbot, dashboard
from assistant.store.clickhouse import AlertStore
from assistant.telemetry.logging import setup_logging
from assistant.telemetry.metrics import get_metrics
from assistant.tools.executor import ToolExecutor

logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing SOC Assistant...")

    store = AlertStore()
    if await store.ping():
        logger.info("ClickHouse connected: %s", settings.clickhouse_url)
    else:
        logger.warning("ClickHouse not reachable at %s — queries will fail until it is", settings.clickhouse_url)

    engine = ReasoningEngine(
        build_llm(),
        timeout=settings.engine_timeout_seconds,
        no_tools_choice=no_tool_choice(settings.llm_provider),
    )
    executor = ToolExecutor(store)
    transcript = TranscriptStore()

    app.state.store = store
    app.state.orchestrator = ConversationOrchestrator(engine, executor, transcript)
    app.state.pipeline = AggregationPipeline(store)

    logger.info("SOC Assistant ready — listening on %s:%d", settings.host, settings.port)

    yield

    await store.close()
    logger.info("SOC Assistant shut down")


app = FastAPI(
    title="SOC Assistant",
    description="Conversational security alert analysis and dashboard statistics",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(chatbot.router)
app.include_router(dashboard.router)


@app.get("/health")
async def health():
    return {
        "status": "healthy",
        "orchestrator_ready": getattr(app.state, "orchestrator", None) is not None,
        "pipeline_ready": getattr(app.state, "pipeline", None) is not None,
    }


@app.get("/metrics", include_in_schema=False)
async def metrics():
    body, content_type = get_metrics()
    return Response(content=body, media_type=content_type)


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
