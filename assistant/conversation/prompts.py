"""System prompt and help texts for the security assistant."""

from __future__ import annotations

from assistant.tools.catalog import render_catalog

_SYSTEM_PROMPT = """\
You are a cybersecurity AI assistant for a Security Operations Center (SOC).
Your role is to help security analysts and system users understand security alerts, \
analyze threats, and provide actionable recommendations.

You have access to the following tools:
{catalog}

When users ask about alerts, security status, or threat analysis, use the appropriate \
tool to fetch real-time data. Call at most one tool per question.
Provide clear, concise responses. For security recommendations, be specific but brief.

Current capabilities:
- Real-time alert retrieval and analysis
- Historical data queries
- Threat pattern analysis
- Security status summaries
- Alert explanations with context
"""


def system_prompt() -> str:
    return _SYSTEM_PROMPT.format(catalog=render_catalog())


HELP_TOPICS = {
    "commands": """Available commands:
- "Show alerts" - Display recent security alerts
- "Show critical alerts" - Display only critical severity alerts
- "Get alert details [alert name]" - Detailed info about specific alert
- "Security summary" - View security metrics
- "Analyze threats" - Get threat pattern analysis""",
    "usage": """How to use the chatbot:
1. Ask questions in natural language
2. Request specific alert information
3. Query historical data by time range
4. Get security recommendations
5. View system statistics""",
    "default": """I can help you with:
- Viewing and analyzing security alerts
- Understanding threat patterns
- Getting security recommendations
- Querying historical data
- Explaining security metrics

Try asking: "Show me critical alerts" or "What are the latest threats?\"""",
}


def get_help(topic: str | None = None) -> str:
    return HELP_TOPICS.get(topic or "default", HELP_TOPICS["default"])
