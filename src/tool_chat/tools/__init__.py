"""Text-based tool calling.

Tools announce themselves in the system prompt and are invoked by the model
writing ``CALL_TOOL <operation> <arg1> <arg2>`` as its whole reply.
"""

from .base import RESULT_MARKER, TOOL_CALL_TOKEN, ParsedCall, Tool, ToolOutcome
from .calculator import CalculatorArgs, CalculatorTool
from .registry import ToolRegistry, create_default_registry
from .loop import ToolInvocation, ToolLoop, format_tool_result

__all__ = [
    "TOOL_CALL_TOKEN",
    "RESULT_MARKER",
    "Tool",
    "ToolOutcome",
    "ParsedCall",
    "CalculatorArgs",
    "CalculatorTool",
    "ToolRegistry",
    "create_default_registry",
    "ToolInvocation",
    "ToolLoop",
    "format_tool_result",
]
