"""ClickHouse alert store — executes parameterized SQL over the ClickHouse HTTP API."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from assistant.config import settings
from assistant.errors import StoreUnavailable
from assistant.store.models import ParameterizedQuery
from assistant.telemetry.metrics import store_query_duration

logger = logging.getLogger("assistant.store")

# ClickHouse reads HTTP query parameters in TSV-escaped form
_ESCAPES = str.maketrans({"\\": "\\\\", "\t": "\\t", "\n": "\\n", "\r": "\\r"})


def _encode_param(value: Any) -> str:
    if isinstance(value, str):
        return value.translate(_ESCAPES)
    return str(value)


class AlertStore:
    """Async client for the alerts table.

    Parameters travel as ``param_<name>`` URL arguments so ClickHouse binds
    them server-side; query text never contains caller-supplied strings.
    """

    def __init__(self, http: httpx.AsyncClient | None = None) -> None:
        self._http = http or httpx.AsyncClient(
            base_url=settings.clickhouse_url,
            auth=(settings.clickhouse_user, settings.clickhouse_password),
            timeout=settings.store_timeout_seconds,
        )

    async def close(self) -> None:
        await self._http.aclose()

    async def ping(self) -> bool:
        try:
            resp = await self._http.get("/ping")
        except httpx.HTTPError:
            logger.exception("ClickHouse ping failed")
            return False
        return resp.status_code == 200

    async def query(self, query: ParameterizedQuery) -> list[dict[str, Any]]:
        """Run a read query and return its rows as mappings."""
        params: dict[str, Any] = {
            "database": settings.clickhouse_database,
            "default_format": "JSON",
        }
        for name, value in query.params.items():
            params[f"param_{name}"] = _encode_param(value)

        start = time.perf_counter()
        try:
            resp = await self._http.post("/", params=params, content=query.query_text)
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPStatusError as exc:
            raise StoreUnavailable(
                f"ClickHouse returned {exc.response.status_code}: {exc.response.text[:200]}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise StoreUnavailable(f"ClickHouse query failed: {exc}") from exc
        finally:
            store_query_duration.observe(time.perf_counter() - start)

        rows = body.get("data") if isinstance(body, dict) else None
        if not isinstance(rows, list):
            raise StoreUnavailable("ClickHouse response carried no data array")

        logger.debug("Query returned %d rows", len(rows))
        return rows
