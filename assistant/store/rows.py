"""Helpers for reading loosely-typed ClickHouse result rows.

ClickHouse's JSON output quotes 64-bit integers, so counts arrive as strings.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence


def as_int(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def first_value(rows: Sequence[Mapping[str, Any]], field: str = "count") -> int:
    """Integer ``field`` of the first row, 0 when absent."""
    if not rows:
        return 0
    return as_int(rows[0].get(field))
