"""Data models for tool calls, validated tool arguments and tool results."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator, model_validator

Severity = Literal["low", "medium", "high", "critical"]


class ToolCall(BaseModel):
    """A tool invocation proposed by the reasoning engine."""

    name: str
    args: dict[str, Any] = {}
    id: str | None = None
    # Set when the engine's arguments could not be parsed; args is then empty.
    parse_error: str | None = None


class ToolResult(BaseModel):
    """Outcome of executing a ToolCall: a payload on success, an error otherwise."""

    success: bool
    data: dict[str, Any] | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _check_outcome(self) -> "ToolResult":
        if self.success and self.error is not None:
            raise ValueError("successful result cannot carry an error")
        if not self.success and (self.data is not None or not self.error):
            raise ValueError("failed result needs an error and no payload")
        return self

    @classmethod
    def ok(cls, **data: Any) -> "ToolResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "ToolResult":
        return cls(success=False, error=error)


# ── Tagged argument variants, one per catalog entry ────────────────


class GetAlertsArgs(BaseModel):
    tool: Literal["get_alerts"] = "get_alerts"
    severity: Severity | None = None
    limit: int = Field(default=10, ge=1)
    timeframe: str | None = None

    @field_validator("severity", "timeframe", mode="before")
    @classmethod
    def _normalize(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v


class GetAlertDetailsArgs(BaseModel):
    tool: Literal["get_alert_details"] = "get_alert_details"
    alert_id: str = Field(min_length=1)

    @field_validator("alert_id", mode="before")
    @classmethod
    def _strip(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v


class GetSecuritySummaryArgs(BaseModel):
    tool: Literal["get_security_summary"] = "get_security_summary"


class AnalyzeThreatArgs(BaseModel):
    tool: Literal["analyze_threat"] = "analyze_threat"
    ip: str | None = None
    threat_type: str | None = None

    @field_validator("ip", "threat_type", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip() or None
        return v


ToolArgs = Annotated[
    Union[GetAlertsArgs, GetAlertDetailsArgs, GetSecuritySummaryArgs, AnalyzeThreatArgs],
    Field(discriminator="tool"),
]

ARGS_MODELS: dict[str, type[BaseModel]] = {
    "get_alerts": GetAlertsArgs,
    "get_alert_details": GetAlertDetailsArgs,
    "get_security_summary": GetSecuritySummaryArgs,
    "analyze_threat": AnalyzeThreatArgs,
}

_tool_args_adapter: TypeAdapter = TypeAdapter(ToolArgs)


def parse_tool_args(name: str, args: dict[str, Any]) -> BaseModel:
    """Validate raw engine arguments into the variant for ``name``.

    Raises ``pydantic.ValidationError`` when the arguments do not match.
    """
    return _tool_args_adapter.validate_python({**args, "tool": name})
