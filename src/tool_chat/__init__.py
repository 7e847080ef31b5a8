"""Terminal chat with a hosted LLM that can call local tools."""

from .core import ChatSession, TurnResult
from .tools import ToolRegistry, create_default_registry

__all__ = ["ChatSession", "TurnResult", "ToolRegistry", "create_default_registry"]
