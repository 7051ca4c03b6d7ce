from .base import ChatAdapter
from .mock import MockChatAdapter
from .openrouter_adapter import OpenRouterAdapter
from .anthropic_adapter import AnthropicAdapter
from .gemini_adapter import GeminiAdapter
from .factory import get_chat_adapter

__all__ = [
    "ChatAdapter",
    "MockChatAdapter",
    "OpenRouterAdapter",
    "AnthropicAdapter",
    "GeminiAdapter",
    "get_chat_adapter",
]
