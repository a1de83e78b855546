"""Tool catalog — the fixed set of data-retrieval tools the reasoning engine may call.

The same ``ToolSpec`` objects are rendered into the system prompt and bound to
the engine, so what the engine is told it can call and what the executor can
run never diverge.
"""

from __future__ import annotations

import json

from pydantic import BaseModel, ConfigDict

SEVERITIES = ("low", "medium", "high", "critical")
TIMEFRAMES = ("today", "week", "month")


class ParamSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str  # JSON schema type: "string", "number"
    description: str
    enum: tuple[str, ...] | None = None
    required: bool = False


class ToolSpec(BaseModel):
    """Name, description and argument schema of one callable tool."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: dict[str, ParamSpec] = {}

    def json_schema(self) -> dict:
        properties = {}
        for pname, spec in self.parameters.items():
            prop: dict = {"type": spec.type, "description": spec.description}
            if spec.enum:
                prop["enum"] = list(spec.enum)
            properties[pname] = prop
        return {
            "type": "object",
            "properties": properties,
            "required": [p for p, s in self.parameters.items() if s.required],
        }

    def to_function(self) -> dict:
        """OpenAI function-calling format, accepted by LangChain ``bind_tools``."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.json_schema(),
            },
        }


GET_ALERTS = "get_alerts"
GET_ALERT_DETAILS = "get_alert_details"
GET_SECURITY_SUMMARY = "get_security_summary"
ANALYZE_THREAT = "analyze_threat"

_CATALOG: tuple[ToolSpec, ...] = (
    ToolSpec(
        name=GET_ALERTS,
        description=(
            "Retrieve security alerts from the database. Can filter by severity, "
            "time range, or specific criteria."
        ),
        parameters={
            "severity": ParamSpec(
                type="string",
                enum=SEVERITIES,
                description="Filter by alert severity level",
            ),
            "limit": ParamSpec(
                type="number",
                description="Maximum number of alerts to return (default: 10)",
            ),
            "timeframe": ParamSpec(
                type="string",
                description="Time range: today, week, month, or specific date",
            ),
        },
    ),
    ToolSpec(
        name=GET_ALERT_DETAILS,
        description=(
            "Get detailed information about a specific alert including IP, port, "
            "threat category, and recommendations."
        ),
        parameters={
            "alert_id": ParamSpec(
                type="string",
                description="The unique identifier, name or IP address of the alert",
                required=True,
            ),
        },
    ),
    ToolSpec(
        name=GET_SECURITY_SUMMARY,
        description=(
            "Get overall security status summary including critical alerts count, "
            "system health, and threat trends."
        ),
    ),
    ToolSpec(
        name=ANALYZE_THREAT,
        description="Analyze a specific threat pattern or IP address for security risks.",
        parameters={
            "ip": ParamSpec(type="string", description="IP address to analyze"),
            "threat_type": ParamSpec(type="string", description="Type of threat to analyze"),
        },
    ),
)


def list_tools() -> tuple[ToolSpec, ...]:
    return _CATALOG


def get_tool(name: str) -> ToolSpec | None:
    for spec in _CATALOG:
        if spec.name == name:
            return spec
    return None


def tool_names() -> frozenset[str]:
    return frozenset(spec.name for spec in _CATALOG)


def as_functions() -> list[dict]:
    return [spec.to_function() for spec in _CATALOG]


def render_catalog() -> str:
    """Serialized catalog embedded verbatim in the system prompt."""
    return json.dumps(
        [spec.to_function()["function"] for spec in _CATALOG],
        indent=2,
    )
