"""Base chat adapter interface."""
from abc import ABC, abstractmethod
from typing import Optional
from agroadvisor.services.prompts import PromptBuilder
from agroadvisor.services.tools import WeatherToolbox


class ChatAdapter(ABC):
    """Abstract base class for chat model adapters.

    Every adapter declares the same tool set and may execute at most one
    tool call before producing its final answer.
    """

    def __init__(self, model_id: str, toolbox: Optional[WeatherToolbox] = None, **kwargs):
        """
        Initialize the adapter.

        Args:
            model_id: Identifier for the model (e.g., "gemini-pro", "claude-3-haiku-20240307")
            toolbox: Tool executor; a default one is created when omitted
            **kwargs: Additional provider-specific configuration
        """
        self.model_id = model_id
        self.toolbox = toolbox or WeatherToolbox()
        self.config = kwargs
        self.system_prompt = PromptBuilder().build_system_prompt()

    @abstractmethod
    async def respond(self, message: str) -> str:
        """
        Answer a user message, calling a tool first if the model asks for one.

        Args:
            message: The user's chat message

        Returns:
            The model's final text reply
        """
        pass
