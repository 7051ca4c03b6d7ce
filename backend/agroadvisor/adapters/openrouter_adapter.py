"""OpenRouter chat adapter (OpenAI-compatible endpoint, e.g. DeepSeek R1)."""
import json
import logging
from typing import Any, Dict, List
from openai import AsyncOpenAI
from agroadvisor.adapters.base import ChatAdapter
from agroadvisor.config import settings

logger = logging.getLogger(__name__)


class OpenRouterAdapter(ChatAdapter):
    """OpenRouter API adapter using the OpenAI SDK with a custom base URL."""

    def __init__(self, model_id: str = "openrouter:default", **kwargs):
        super().__init__(model_id, **kwargs)
        api_key = kwargs.get("api_key") or settings.openrouter_api_key
        base_url = kwargs.get("base_url") or settings.openrouter_base_url
        if not api_key:
            raise ValueError("OpenRouter API key required. Set OPENROUTER_API_KEY in .env")
        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            default_headers={
                "HTTP-Referer": settings.site_url,
                "X-Title": settings.app_name,
            },
        )
        # Strip "openrouter:" prefix if present to get the actual model name
        if model_id.startswith("openrouter:"):
            self.remote_model = model_id[len("openrouter:"):]
        else:
            self.remote_model = model_id
        if self.remote_model == "default":
            self.remote_model = settings.openrouter_model

    def _tools(self) -> List[Dict[str, Any]]:
        return [
            {"type": "function", "function": declaration.model_dump()}
            for declaration in self.toolbox.declarations
        ]

    async def respond(self, message: str) -> str:
        """Answer using OpenRouter function calling."""
        messages: List[Dict[str, Any]] = [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": message},
        ]

        try:
            response = await self.client.chat.completions.create(
                model=self.remote_model,
                messages=messages,
                tools=self._tools(),
                tool_choice="auto",
            )
            reply = response.choices[0].message

            if not reply.tool_calls:
                return reply.content or ""

            tool_call = reply.tool_calls[0]
            arguments = json.loads(tool_call.function.arguments or "{}")
            logger.info(
                "OpenRouter requested tool call",
                extra={"model": self.remote_model, "tool": tool_call.function.name},
            )
            tool_result = await self.toolbox.call(tool_call.function.name, arguments)

            messages.append({
                "role": "assistant",
                "content": reply.content or "",
                "tool_calls": [{
                    "id": tool_call.id,
                    "type": "function",
                    "function": {
                        "name": tool_call.function.name,
                        "arguments": tool_call.function.arguments,
                    },
                }],
            })
            messages.append({
                "role": "tool",
                "tool_call_id": tool_call.id,
                "content": json.dumps(tool_result, default=str),
            })

            final = await self.client.chat.completions.create(
                model=self.remote_model,
                messages=messages,
            )
            return final.choices[0].message.content or ""
        except Exception as e:
            raise RuntimeError(f"OpenRouter API error: {str(e)}")
