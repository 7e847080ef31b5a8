"""Tool contract for text-based tool calling.

A tool recognizes its own call syntax inside raw model output and executes
the parsed call. Both halves are plain Python objects so the registry can
dispatch through the interface without inspecting concrete types.
"""

import json
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Generic, TypeVar, Union

# Literal token that opens every tool call the model emits.
TOOL_CALL_TOKEN = "CALL_TOOL"

# Opening phrase of the follow-up message that carries a tool result.
RESULT_MARKER = "You executed"

ArgsT = TypeVar("ArgsT")


def format_value(value: Any) -> str:
    """Render a tool value for prose: integral floats print without ``.0``."""
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class ToolOutcome:
    """Result of executing a tool: either a value or an error message."""
    ok: bool
    value: Any = None
    error: str | None = None

    @classmethod
    def success(cls, value: Any) -> "ToolOutcome":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> "ToolOutcome":
        return cls(ok=False, error=error)

    def __str__(self) -> str:
        if self.ok:
            return format_value(self.value)
        return f"error: {self.error}"


@dataclass(frozen=True)
class ParsedCall(Generic[ArgsT]):
    """A tool call recognized in a model reply."""
    tool_name: str
    args: ArgsT
    raw_text: str = field(default="", compare=False)

    def args_as_dict(self) -> dict[str, Any]:
        if hasattr(self.args, "to_dict"):
            return self.args.to_dict()
        if isinstance(self.args, dict):
            return dict(self.args)
        return {"value": self.args}

    def args_json(self) -> str:
        return json.dumps(self.args_as_dict(), default=str)

    def __str__(self) -> str:
        return f"{self.tool_name}({self.args_json()})"


class Tool(ABC, Generic[ArgsT]):
    """Base class for a registrable tool.

    Subclasses set ``name`` and ``description`` and implement ``recognize``
    and ``execute``.
    """

    name: str = ""
    description: str = ""

    @abstractmethod
    def recognize(self, text: str) -> ArgsT | None:
        """Extract this tool's arguments from ``text``.

        Args:
            text: Raw model reply.

        Returns:
            Typed arguments, or None when the text is not a call for this
            tool. Malformed arguments are a miss, not an error.
        """

    @abstractmethod
    def execute(self, args: ArgsT) -> Union[ToolOutcome, Awaitable[ToolOutcome]]:
        """Run the tool. Failures must be returned as ``ToolOutcome.failure``."""

    def to_prompt_string(self) -> str:
        """Format tool for inclusion in system prompt."""
        return f"- {self.name}: {self.description}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
