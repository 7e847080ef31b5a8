import logging
from dataclasses import dataclass, field
from typing import Callable

from .clients.base import ChatCompletionResponse, ChatOptions, LLMClient, TokenUsage
from .errors import ToolChatError, ToolLoopExceededError, TransportError
from .models.message import Message
from .tools.base import ParsedCall
from .tools.loop import ToolInvocation, ToolLoop
from .tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


@dataclass
class TurnResult:
    reply: str
    model: str
    tool_calls: list[ToolInvocation] = field(default_factory=list)
    usage: TokenUsage | None = None


class ChatSession:
    """One conversation: owns the transcript and runs a turn at a time."""

    def __init__(
        self,
        client: LLMClient,
        registry: ToolRegistry,
        system_message: str | None = None,
        options: ChatOptions | None = None,
        max_tool_iterations: int | None = None,
        on_tool_call: Callable[[ParsedCall], None] | None = None,
        on_tool_result: Callable[[ToolInvocation], None] | None = None,
    ):
        self.client = client
        self.registry = registry
        self.system_message = system_message
        self.options = options or ChatOptions()
        self.max_tool_iterations = max_tool_iterations
        self.on_tool_call = on_tool_call
        self.on_tool_result = on_tool_result
        self._messages: list[Message] = []
        self.reset()

    @property
    def messages(self) -> list[Message]:
        return list(self._messages)

    def build_system_prompt(self) -> str:
        """Join the persona prompt and the tool catalogue into the leading system message."""
        parts = []
        if self.system_message:
            parts.append(self.system_message)
        if len(self.registry):
            parts.append(self.registry.generate_system_prompt())
        return "\n\n".join(parts)

    def reset(self) -> None:
        """Drop the conversation, keeping only the system message."""
        self._messages = []
        system_prompt = self.build_system_prompt()
        if system_prompt:
            self._messages.append(Message("system", system_prompt))

    def _query(self, messages: list[Message]) -> ChatCompletionResponse:
        try:
            response = self.client.chat(messages, self.options)
        except ToolChatError:
            raise
        except Exception as e:
            raise TransportError(f"Chat completion failed: {e}") from e
        # Any client, not only OpenRouter, must hand back usable text
        if not isinstance(response.content, str):
            raise TransportError("Chat completion failed: No content in completion response")
        if not response.content.strip():
            raise TransportError("Chat completion failed: Empty content in completion response")
        return response

    def send(self, user_input: str) -> TurnResult:
        """Run one turn for ``user_input``.

        Raises:
            TransportError: The model could not be reached. The pending
                user-role message is removed first, so the same input can be
                sent again.
            ToolLoopExceededError: Too many tool calls; the whole turn is
                removed from the transcript.
        """
        turn_start = len(self._messages)
        self._messages.append(Message("user", user_input))

        loop = ToolLoop(
            self.registry,
            max_iterations=self.max_tool_iterations,
            on_tool_call=self.on_tool_call,
            on_tool_result=self.on_tool_result,
        )
        try:
            response = loop.run(self._messages, self._query)
        except ToolLoopExceededError:
            logger.warning(f"Discarding {len(self._messages) - turn_start} messages from runaway turn")
            del self._messages[turn_start:]
            raise
        except ToolChatError as e:
            self._rollback_pending_message()
            logger.warning(f"Turn failed, pending message removed: {e}")
            raise
        except KeyboardInterrupt:
            self._rollback_pending_message()
            raise

        return TurnResult(
            reply=response.content,
            model=response.model,
            tool_calls=list(loop.tool_calls),
            usage=response.usage,
        )

    def _rollback_pending_message(self) -> None:
        # The request that failed was answering the last user-role message
        if self._messages and self._messages[-1].role == "user":
            self._messages.pop()
