"""Chat service routing user messages to a chat adapter."""
import logging
from typing import Optional
from agroadvisor.adapters.factory import get_chat_adapter
from agroadvisor.services.tools import WeatherToolbox

logger = logging.getLogger(__name__)


class ChatService:
    """Service for answering chat messages with weather tools available."""

    def __init__(self, toolbox: Optional[WeatherToolbox] = None):
        self.toolbox = toolbox

    async def reply(self, message: str, model_id: Optional[str] = None) -> str:
        """
        Answer one chat message.

        Args:
            message: The user's message
            model_id: Chat model identifier; defaults to the configured model

        Returns:
            The assistant's reply text

        Raises:
            ValueError: If the selected provider is not configured
            RuntimeError: If the provider call fails
        """
        adapter = get_chat_adapter(model_id, toolbox=self.toolbox)
        logger.info("Chat message received", extra={"model": adapter.model_id, "chars": len(message)})
        return await adapter.respond(message)
