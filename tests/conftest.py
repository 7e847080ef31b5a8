import pytest
from types import SimpleNamespace
from unittest.mock import MagicMock

from tool_chat.clients.base import ChatCompletionResponse, LLMClient, TokenUsage
from tool_chat.tools.registry import ToolRegistry, create_default_registry
from tool_chat.utils.config import Config


class ScriptedClient(LLMClient):
    """Returns queued replies in order; an Exception in the queue is raised instead."""

    def __init__(self, replies, model="test/model"):
        super().__init__(model, SimpleNamespace())
        self.replies = list(replies)
        self.requests = []

    def chat(self, messages, options=None):
        self.requests.append([(m.role, m.content) for m in messages])
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return ChatCompletionResponse(content=reply, model=self.model, usage=TokenUsage(10, 5, 15))


@pytest.fixture
def scripted_client():
    def factory(*replies, model="test/model"):
        return ScriptedClient(replies, model=model)
    return factory


@pytest.fixture
def registry():
    return create_default_registry()


@pytest.fixture
def empty_registry():
    return ToolRegistry()


@pytest.fixture
def mock_config_obj():
    cfg = MagicMock(spec=Config)
    cfg.API_KEY = "test-api-key"
    cfg.BASE_URL = "https://openrouter.ai/api/v1"
    cfg.DEFAULT_MODEL = "openai/gpt-4o"
    cfg.SITE_URL = None
    cfg.SITE_NAME = None
    cfg.TEMPERATURE = None
    cfg.MAX_TOKENS = None
    cfg.TOP_P = None
    cfg.FREQUENCY_PENALTY = None
    cfg.PRESENCE_PENALTY = None
    cfg.TOOLS_ENABLED = True
    cfg.MAX_TOOL_ITERATIONS = 10
    cfg.tool_iteration_limit = 10
    cfg.VERBOSE = False
    cfg.PLAIN_OUTPUT = True
    cfg.SYSTEM_MESSAGE = "Test System Prompt"
    return cfg
