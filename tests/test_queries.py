"""Tests for assistant.tools.queries — parameterized query construction."""

from __future__ import annotations

import pytest

from assistant.errors import UnsupportedTool
from assistant.tools.models import (
    AnalyzeThreatArgs,
    GetAlertDetailsArgs,
    GetAlertsArgs,
    GetSecuritySummaryArgs,
)
from assistant.tools.queries import (
    alert_details_query,
    alerts_query,
    build_queries,
    like_pattern,
    threat_analysis_query,
)

HOSTILE = "critical' OR 1=1 --"


class TestAlertsQuery:
    def test_defaults(self):
        q = alerts_query(GetAlertsArgs())
        assert q.params == {}
        assert "ORDER BY timestamp DESC LIMIT 10" in q.query_text
        assert "INTERVAL" not in q.query_text

    def test_severity_is_bound(self):
        q = alerts_query(GetAlertsArgs(severity="critical"))
        assert "severity = {severity:String}" in q.query_text
        assert q.params == {"severity": "critical"}
        assert "'critical'" not in q.query_text

    @pytest.mark.parametrize("timeframe,days", [("today", 1), ("week", 7), ("month", 30)])
    def test_timeframe_windows(self, timeframe, days):
        q = alerts_query(GetAlertsArgs(timeframe=timeframe))
        assert f"timestamp >= now() - INTERVAL {days} DAY" in q.query_text

    def test_unrecognized_timeframe_adds_no_predicate(self):
        plain = alerts_query(GetAlertsArgs())
        dated = alerts_query(GetAlertsArgs(timeframe="2026-10-01"))
        assert dated.query_text == plain.query_text
        assert "2026-10-01" not in dated.query_text

    def test_limit_has_no_upper_clamp(self):
        q = alerts_query(GetAlertsArgs(limit=5000))
        assert q.query_text.endswith("LIMIT 5000")


class TestAlertDetailsQuery:
    def test_partial_and_exact_match_are_bound(self):
        q = alert_details_query(GetAlertDetailsArgs(alert_id="Brute"))
        assert "name LIKE {pattern:String}" in q.query_text
        assert "ip = {identifier:String}" in q.query_text
        assert q.params == {"pattern": "%Brute%", "identifier": "Brute"}

    def test_hostile_identifier_never_reaches_query_text(self):
        q = alert_details_query(GetAlertDetailsArgs(alert_id=HOSTILE))
        assert HOSTILE not in q.query_text
        assert q.params["identifier"] == HOSTILE

    def test_like_wildcards_in_value_are_escaped(self):
        assert like_pattern("50%_off") == "%50\\%\\_off%"


class TestThreatAnalysisQuery:
    def test_capped_at_twenty(self):
        q = threat_analysis_query(AnalyzeThreatArgs())
        assert q.query_text.endswith("ORDER BY timestamp DESC LIMIT 20")
        assert q.params == {}

    def test_filters_bound(self):
        q = threat_analysis_query(AnalyzeThreatArgs(ip="1.2.3.4", threat_type=HOSTILE))
        assert "ip = {ip:String}" in q.query_text
        assert "threat_category LIKE {threat_type:String}" in q.query_text
        assert q.params["ip"] == "1.2.3.4"
        assert q.params["threat_type"].startswith("%")
        assert HOSTILE not in q.query_text


class TestBuildQueries:
    def test_summary_plan_has_four_queries(self):
        plan = build_queries("get_security_summary", GetSecuritySummaryArgs())
        assert set(plan) == {"total", "critical", "high", "by_severity"}
        assert plan["critical"].params == {"severity": "critical"}
        assert plan["high"].params == {"severity": "high"}

    def test_unknown_tool(self):
        with pytest.raises(UnsupportedTool):
            build_queries("drop_table", GetSecuritySummaryArgs())
