"""Risk assessment — qualitative risk label and per-alert advisory."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Mapping


class RiskLevel(str, Enum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MODERATE = "MODERATE"
    LOW = "LOW"


_RISK_DESCRIPTIONS = {
    RiskLevel.CRITICAL: "Multiple critical threats detected. Immediate response required.",
    RiskLevel.HIGH: "Significant security concern. Prompt investigation needed.",
    RiskLevel.MODERATE: "Security events require attention.",
    RiskLevel.LOW: "Normal security activity.",
}

_RECOMMENDATIONS = {
    "critical": "Immediate action required! Isolate affected systems and investigate thoroughly.",
    "high": "Prioritize investigation. Review logs and consider containment measures.",
    "medium": "Monitor closely and investigate when resources permit.",
    "low": "Document and review during routine security analysis.",
}

DEFAULT_RECOMMENDATION = "Review and assess the security event."


def _severity(alert: Mapping[str, Any]) -> str:
    return str(alert.get("severity") or "").strip().lower()


def assess_risk(alerts: Iterable[Mapping[str, Any]]) -> RiskLevel:
    """Label a set of alerts by its critical and high counts.

    The branches are checked in order, so one critical alert with twenty high
    ones is HIGH rather than CRITICAL.
    """
    critical = high = 0
    for alert in alerts:
        sev = _severity(alert)
        if sev == "critical":
            critical += 1
        elif sev == "high":
            high += 1

    if critical > 5:
        return RiskLevel.CRITICAL
    if critical > 0 or high > 10:
        return RiskLevel.HIGH
    if high > 0:
        return RiskLevel.MODERATE
    return RiskLevel.LOW


def describe_risk(level: RiskLevel) -> str:
    return f"{level.value}: {_RISK_DESCRIPTIONS[level]}"


def recommend(alert: Mapping[str, Any]) -> str:
    return _RECOMMENDATIONS.get(_severity(alert), DEFAULT_RECOMMENDATION)
