"""Factory for creating chat adapters."""
from typing import Optional
from agroadvisor.adapters.base import ChatAdapter
from agroadvisor.adapters.mock import MockChatAdapter
from agroadvisor.adapters.openrouter_adapter import OpenRouterAdapter
from agroadvisor.adapters.anthropic_adapter import AnthropicAdapter
from agroadvisor.adapters.gemini_adapter import GeminiAdapter
from agroadvisor.config import settings


def get_chat_adapter(model_id: Optional[str] = None, **kwargs) -> ChatAdapter:
    """
    Factory function to create the appropriate chat adapter based on model_id.

    Args:
        model_id: Model identifier (e.g., "mock:assistant", "gemini-pro", "claude-3-haiku-20240307",
            "openrouter:deepseek/deepseek-r1"); defaults to the configured chat model
        **kwargs: Additional configuration for the adapter

    Returns:
        ChatAdapter instance
    """
    model_id = model_id or settings.chat_model
    lowered = model_id.lower()
    if lowered.startswith("mock:"):
        return MockChatAdapter(model_id, **kwargs)
    elif lowered.startswith("openrouter:") or "deepseek" in lowered:
        return OpenRouterAdapter(model_id, **kwargs)
    elif "claude" in lowered or "anthropic" in lowered:
        return AnthropicAdapter(model_id, **kwargs)
    elif "gemini" in lowered or "google" in lowered:
        return GeminiAdapter(model_id, **kwargs)
    else:
        # Default to mock for unknown models
        return MockChatAdapter(f"mock:{model_id}", **kwargs)
