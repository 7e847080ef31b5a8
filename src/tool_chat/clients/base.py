from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from ..models.message import Message
from ..utils.config import Config


@dataclass
class ChatOptions:
    """Per-request generation parameters. Unset values are not sent."""
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None

    @classmethod
    def from_config(cls, config: Config) -> "ChatOptions":
        return cls(
            temperature=config.TEMPERATURE,
            max_tokens=config.MAX_TOKENS,
            top_p=config.TOP_P,
            frequency_penalty=config.FREQUENCY_PENALTY,
            presence_penalty=config.PRESENCE_PENALTY,
        )


@dataclass
class TokenUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __str__(self) -> str:
        return f"Prompt={self.prompt_tokens}, Completion={self.completion_tokens}, Total={self.total_tokens}"


@dataclass
class ChatCompletionResponse:
    content: str
    model: str
    usage: Optional[TokenUsage] = None


class LLMClient(ABC):
    """Request/response boundary to a language model."""

    def __init__(self, model: str, config: Config):
        self.model = model
        self.config = config

    @abstractmethod
    def chat(self, messages: List[Message], options: ChatOptions | None = None) -> ChatCompletionResponse:
        """Send the full message list and return one reply.

        Args:
            messages: Conversation transcript, system message first.
            options: Optional generation parameters; ``options.model``
                overrides the client's default model.

        Returns:
            The reply text, the model that produced it and token usage.

        Raises:
            TransportError: The request failed or the reply had no content.
        """

    def send_message(self, message: str, model: str | None = None) -> str:
        """Send a single user message and return the reply text."""
        response = self.chat([Message("user", message)], ChatOptions(model=model))
        return response.content

    def send_conversation(self, messages: List[Message], model: str | None = None) -> str:
        response = self.chat(messages, ChatOptions(model=model))
        return response.content

    def get_default_model(self) -> str:
        return self.model

    def set_default_model(self, model: str) -> None:
        self.model = model
