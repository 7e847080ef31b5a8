"""Tool registry.

Holds the tools available to a conversation, resolves a model reply to at
most one tool call, dispatches execution, and renders the calling
convention into a system prompt fragment.
"""

import asyncio
import inspect
import logging
from typing import Any, Iterable

from .base import RESULT_MARKER, TOOL_CALL_TOKEN, ParsedCall, Tool, ToolOutcome
from .calculator import CalculatorTool

logger = logging.getLogger(__name__)


TOOL_CALLING_INSTRUCTIONS = '''You have access to the following tools:
{tools_list}

When you need to use a tool, reply with exactly: {token} <operation> <arg1> <arg2> (e.g. '{token} add 2 2').
Wait for a follow-up message that begins with "{marker}" containing the result, then continue the conversation without repeating the tool call.'''


async def _resolve(awaitable) -> Any:
    return await awaitable


class ToolRegistry:
    """Name-keyed set of tools, in registration order."""

    def __init__(self, tools: Iterable[Tool] | None = None):
        self._tools: dict[str, Tool] = {}
        for tool in tools or ():
            self.register(tool)

    def register(self, tool: Tool) -> None:
        """Register a tool. A tool with the same name is replaced."""
        if not tool.name:
            raise ValueError("Tool name must be a non-empty string")
        if tool.name in self._tools:
            logger.warning(f"Replacing already registered tool: {tool.name}")
        self._tools[tool.name] = tool

    def get(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def get_all(self) -> list[Tool]:
        return list(self._tools.values())

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def parse_tool_call(self, message: str) -> ParsedCall | None:
        """Return the call for the first registered tool that recognizes ``message``."""
        for tool in self._tools.values():
            args = tool.recognize(message)
            if args is not None:
                return ParsedCall(tool_name=tool.name, args=args, raw_text=message.strip())
        return None

    def execute_tool_call(self, parsed_call: ParsedCall) -> ToolOutcome:
        """Execute a parsed call. Never raises; problems come back as failures."""
        tool = self.get(parsed_call.tool_name)
        if tool is None:
            return ToolOutcome.failure(f'Tool "{parsed_call.tool_name}" not found')

        logger.info(f"Executing tool: {parsed_call.tool_name} with args: {parsed_call.args_as_dict()}")
        try:
            outcome = tool.execute(parsed_call.args)
            if inspect.isawaitable(outcome):
                outcome = asyncio.run(_resolve(outcome))
        except Exception as e:
            logger.exception(f"Tool execution failed: {parsed_call.tool_name}")
            return ToolOutcome.failure(str(e) or type(e).__name__)

        if not isinstance(outcome, ToolOutcome):
            logger.warning(f"Tool {parsed_call.tool_name} returned {type(outcome).__name__}, expected ToolOutcome")
            return ToolOutcome.failure(f'Tool "{parsed_call.tool_name}" returned an invalid result')

        logger.debug(f"Tool {parsed_call.tool_name} outcome: {outcome}")
        return outcome

    def generate_system_prompt(self) -> str:
        """Describe the registered tools and the calling convention for the model."""
        tools_list = "\n".join(tool.to_prompt_string() for tool in self._tools.values())
        return TOOL_CALLING_INSTRUCTIONS.format(
            tools_list=tools_list,
            token=TOOL_CALL_TOKEN,
            marker=RESULT_MARKER,
        )


def create_default_registry() -> ToolRegistry:
    """Build a new registry with the built-in tools."""
    return ToolRegistry([CalculatorTool()])
