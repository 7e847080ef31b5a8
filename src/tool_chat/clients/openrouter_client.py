import json
import logging
from typing import List

from openai import OpenAI, OpenAIError

from ..clients.base import ChatCompletionResponse, ChatOptions, LLMClient, TokenUsage
from ..errors import ConfigurationError, TransportError
from ..models.message import Message
from ..utils.config import Config

logger = logging.getLogger(__name__)


class OpenRouterClient(LLMClient):
    """Client for OpenRouter's OpenAI-compatible chat completions API"""

    def __init__(self, model: str, config: Config):
        super().__init__(model, config)
        self.api_key = self._get_api_key()
        if not self.api_key:
            raise ConfigurationError(
                "OpenRouter API key is required. Set OPENROUTER_API_KEY (or TOOL_CHAT_API_KEY) "
                "in your environment or .env file."
            )
        self.client = OpenAI(api_key=self.api_key, base_url=self.config.BASE_URL)

    def _get_api_key(self) -> str | None:
        return self.config.API_KEY

    def _attribution_headers(self) -> dict[str, str]:
        headers = {}
        if self.config.SITE_URL:
            headers["HTTP-Referer"] = self.config.SITE_URL
        if self.config.SITE_NAME:
            headers["X-Title"] = self.config.SITE_NAME
        return headers

    def _build_payload(self, messages: List[Message], options: ChatOptions) -> dict:
        payload = {
            "model": options.model or self.model,
            "messages": [msg.to_api_format() for msg in messages],
            "stream": False,
        }
        # Only pass generation parameters that were set
        optional = {
            "temperature": options.temperature,
            "max_tokens": options.max_tokens,
            "top_p": options.top_p,
            "frequency_penalty": options.frequency_penalty,
            "presence_penalty": options.presence_penalty,
        }
        payload.update({key: value for key, value in optional.items() if value is not None})
        headers = self._attribution_headers()
        if headers:
            payload["extra_headers"] = headers
        return payload

    def chat(self, messages: List[Message], options: ChatOptions | None = None) -> ChatCompletionResponse:
        payload = self._build_payload(messages, options or ChatOptions())
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"OpenRouter Request Payload: {json.dumps(payload, default=str)}")

        try:
            completion = self.client.chat.completions.create(**payload)
        except OpenAIError as e:
            logger.error(f"Error making OpenRouter API request: {e}")
            raise TransportError(f"Chat completion failed: {e}") from e
        except Exception as e:
            logger.error(f"Unexpected error during OpenRouter request: {e}")
            raise TransportError(f"Chat completion failed: {e}") from e

        choices = getattr(completion, "choices", None) or []
        message = choices[0].message if choices else None
        if message is None:
            raise TransportError("Chat completion failed: No message in completion response")

        content = message.content
        if not isinstance(content, (str, list)):
            raise TransportError("Chat completion failed: No content in completion response")
        text = Message._extract_content(content)
        if not text.strip():
            raise TransportError("Chat completion failed: Empty content in completion response")

        usage = None
        if getattr(completion, "usage", None):
            usage = TokenUsage(
                prompt_tokens=completion.usage.prompt_tokens or 0,
                completion_tokens=completion.usage.completion_tokens or 0,
                total_tokens=completion.usage.total_tokens or 0,
            )
            logger.debug(f"OpenRouter Tokens: {usage}")

        return ChatCompletionResponse(
            content=text,
            model=getattr(completion, "model", None) or payload["model"],
            usage=usage,
        )
