"""Exceptions raised across a conversation turn.

Tool problems are never raised; they travel as ``ToolOutcome`` values.
Everything here interrupts a turn and is caught at the turn boundary.
"""


class ToolChatError(Exception):
    """Base class for errors that abort a single turn."""


class TransportError(ToolChatError):
    """The model transport failed or returned nothing usable."""


class ToolLoopExceededError(ToolChatError):
    """A turn asked for more tool calls than the configured limit."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Tool loop exceeded: more than {limit} tool calls in one turn")


class ConfigurationError(ToolChatError, ValueError):
    """Required settings (e.g. the API key) are missing."""
