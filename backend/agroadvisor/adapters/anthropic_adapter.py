"""Anthropic Claude chat adapter."""
import json
import logging
from typing import Any, Dict, List
from anthropic import AsyncAnthropic
from agroadvisor.adapters.base import ChatAdapter
from agroadvisor.config import settings

logger = logging.getLogger(__name__)


class AnthropicAdapter(ChatAdapter):
    """Anthropic Claude API adapter."""

    def __init__(self, model_id: str = "claude-3-haiku-20240307", **kwargs):
        super().__init__(model_id, **kwargs)
        api_key = kwargs.get("api_key") or settings.anthropic_api_key
        if not api_key:
            raise ValueError("Anthropic API key required")
        self.client = AsyncAnthropic(api_key=api_key)

    def _tools(self) -> List[Dict[str, Any]]:
        return [
            {
                "name": declaration.name,
                "description": declaration.description,
                "input_schema": declaration.parameters,
            }
            for declaration in self.toolbox.declarations
        ]

    @staticmethod
    def _text(response) -> str:
        return "".join(block.text for block in response.content if block.type == "text")

    async def respond(self, message: str) -> str:
        """Answer using Anthropic tool use."""
        messages: List[Dict[str, Any]] = [{"role": "user", "content": message}]

        try:
            response = await self.client.messages.create(
                model=self.model_id,
                max_tokens=1024,
                system=self.system_prompt,
                tools=self._tools(),
                messages=messages,
            )

            tool_use = next((block for block in response.content if block.type == "tool_use"), None)
            if tool_use is None:
                return self._text(response)

            logger.info("Claude requested tool call", extra={"model": self.model_id, "tool": tool_use.name})
            tool_result = await self.toolbox.call(tool_use.name, dict(tool_use.input))

            messages.append({"role": "assistant", "content": response.content})
            messages.append({
                "role": "user",
                "content": [{
                    "type": "tool_result",
                    "tool_use_id": tool_use.id,
                    "content": json.dumps(tool_result, default=str),
                }],
            })

            final = await self.client.messages.create(
                model=self.model_id,
                max_tokens=1024,
                system=self.system_prompt,
                tools=self._tools(),
                messages=messages,
            )
            return self._text(final)
        except Exception as e:
            raise RuntimeError(f"Anthropic API error: {str(e)}")
