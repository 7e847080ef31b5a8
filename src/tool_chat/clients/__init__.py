from .base import ChatCompletionResponse, ChatOptions, LLMClient, TokenUsage
from .openrouter_client import OpenRouterClient

__all__ = ['LLMClient', 'ChatOptions', 'ChatCompletionResponse', 'TokenUsage', 'OpenRouterClient']
