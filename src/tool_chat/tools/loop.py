"""Tool calling loop for a single conversation turn.

Handles the iterative process of:
1. Querying the LLM with the full transcript
2. Detecting a tool call in the reply
3. Executing the tool through the registry
4. Feeding the outcome back as a user-role message
5. Repeating until a reply without a tool call arrives
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from ..errors import ToolLoopExceededError
from ..models.message import Message
from .base import RESULT_MARKER, ParsedCall, ToolOutcome, format_value
from .registry import ToolRegistry

if TYPE_CHECKING:
    from ..clients.base import ChatCompletionResponse

logger = logging.getLogger(__name__)


@dataclass
class ToolInvocation:
    call: ParsedCall
    outcome: ToolOutcome


def format_tool_result(call: ParsedCall, outcome: ToolOutcome) -> str:
    """Format a tool outcome for injection back into the conversation.

    Args:
        call: The call the model asked for.
        outcome: What executing it produced.

    Returns:
        Text of the follow-up user message. It always opens with the
        result marker promised in the system prompt.
    """
    if outcome.ok:
        return (
            f"{RESULT_MARKER} {call}; result = {format_value(outcome.value)}. "
            "Use this to reply to the user."
        )
    return (
        f"{RESULT_MARKER} {call}; it failed with error: {outcome.error}. "
        "Use this to reply to the user."
    )


class ToolLoop:
    """Runs request/detect/execute/inject iterations until a final reply."""

    def __init__(
        self,
        registry: ToolRegistry,
        max_iterations: int | None = None,
        on_tool_call: Callable[[ParsedCall], None] | None = None,
        on_tool_result: Callable[[ToolInvocation], None] | None = None,
    ):
        """
        Args:
            registry: Tools that may be called.
            max_iterations: Maximum tool calls per turn; None for no limit.
            on_tool_call: Notified before a recognized call is executed.
            on_tool_result: Notified after each execution.
        """
        self.registry = registry
        self.max_iterations = max_iterations
        self.on_tool_call = on_tool_call
        self.on_tool_result = on_tool_result
        self.tool_calls: list[ToolInvocation] = []

    def run(
        self,
        messages: list[Message],
        query_fn: Callable[[list[Message]], "ChatCompletionResponse"],
    ) -> "ChatCompletionResponse":
        """Run the loop, appending every reply and tool result to ``messages``.

        Args:
            messages: The transcript, ending with the user's message. Mutated in place.
            query_fn: Sends the transcript to the model and returns its reply.

        Returns:
            The first response that is not a tool call.

        Raises:
            ToolLoopExceededError: The model asked for more tool calls than allowed.
            Whatever ``query_fn`` raises propagates unchanged.
        """
        self.tool_calls = []
        iteration = 0

        while True:
            iteration += 1
            if iteration > 1:
                logger.debug(f"Tool loop iteration {iteration}")

            response = query_fn(messages)
            reply = response.content.strip()
            messages.append(Message("assistant", reply))

            parsed = self.registry.parse_tool_call(reply)
            if parsed is None:
                logger.debug("No tool call found - returning final response")
                response.content = reply
                return response

            if self.max_iterations is not None and len(self.tool_calls) >= self.max_iterations:
                logger.warning(f"Tool loop: max iterations ({self.max_iterations}) reached")
                raise ToolLoopExceededError(self.max_iterations)

            if self.on_tool_call:
                self.on_tool_call(parsed)

            outcome = self.registry.execute_tool_call(parsed)
            invocation = ToolInvocation(call=parsed, outcome=outcome)
            self.tool_calls.append(invocation)
            logger.info("🔧 Tool call: %s -> %s", parsed, outcome)

            if self.on_tool_result:
                self.on_tool_result(invocation)

            messages.append(Message("user", format_tool_result(parsed, outcome)))
