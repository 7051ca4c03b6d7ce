"""Google Gemini chat adapter."""
import logging
import google.generativeai as genai
from agroadvisor.adapters.base import ChatAdapter
from agroadvisor.config import settings

logger = logging.getLogger(__name__)

SAFETY_SETTINGS = {
    "HARM_CATEGORY_HARASSMENT": "BLOCK_MEDIUM_AND_ABOVE",
    "HARM_CATEGORY_HATE_SPEECH": "BLOCK_MEDIUM_AND_ABOVE",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT": "BLOCK_MEDIUM_AND_ABOVE",
    "HARM_CATEGORY_DANGEROUS_CONTENT": "BLOCK_MEDIUM_AND_ABOVE",
}


class GeminiAdapter(ChatAdapter):
    """Google Gemini API adapter."""

    def __init__(self, model_id: str = "gemini-pro", **kwargs):
        super().__init__(model_id, **kwargs)
        api_key = kwargs.get("api_key") or settings.gemini_api_key
        if not api_key:
            raise ValueError("Google API key required")
        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(
            model_id,
            tools=[{
                "function_declarations": [
                    declaration.model_dump() for declaration in self.toolbox.declarations
                ]
            }],
            safety_settings=SAFETY_SETTINGS,
            system_instruction=self.system_prompt,
        )

    @staticmethod
    def _function_call(response):
        for part in response.candidates[0].content.parts:
            if part.function_call and part.function_call.name:
                return part.function_call
        return None

    async def respond(self, message: str) -> str:
        """Answer using Gemini function calling."""
        try:
            chat = self.model.start_chat()
            response = await chat.send_message_async(message)

            function_call = self._function_call(response)
            if function_call is None:
                return response.text

            logger.info("Gemini requested tool call", extra={"model": self.model_id, "tool": function_call.name})
            tool_result = await self.toolbox.call(function_call.name, dict(function_call.args))

            final = await chat.send_message_async(
                genai.protos.Content(parts=[
                    genai.protos.Part(
                        function_response=genai.protos.FunctionResponse(
                            name=function_call.name,
                            response={"result": tool_result},
                        )
                    )
                ])
            )
            return final.text
        except Exception as e:
            raise RuntimeError(f"Gemini API error: {str(e)}")
