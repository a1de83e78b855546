"""Error taxonomy shared by the tool, store and conversation layers."""

from __future__ import annotations


class AssistantError(Exception):
    """Base class for every error raised by the assistant core."""


class UnsupportedTool(AssistantError):
    """A tool name that the catalog does not declare."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unsupported tool: {name}")
        self.name = name


class StoreUnavailable(AssistantError):
    """The alert store could not be reached or rejected the query."""


class EngineUnavailable(AssistantError):
    """The reasoning engine failed to produce a completion."""
