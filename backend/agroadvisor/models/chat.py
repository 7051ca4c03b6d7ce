"""Chat request/response models and tool declarations."""
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Chat message from the user."""

    model_config = ConfigDict(protected_namespaces=())

    message: str = Field(..., min_length=1)
    model_id: Optional[str] = Field(None, description="Responder model identifier, e.g. 'gemini-pro' or 'mock:assistant'")


class ChatResponse(BaseModel):
    """Assistant reply."""

    response: str


class ToolDeclaration(BaseModel):
    """Provider-neutral function declaration (JSON schema parameters)."""

    name: str
    description: str
    parameters: Dict[str, Any] = Field(default_factory=dict)

