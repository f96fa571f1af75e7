"""API request and response models, plus the message shapes exchanged with the client and the store."""
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class Attachment(BaseModel):
    """File attached to a user message. Content lives elsewhere; only the URL is carried."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    content_type: str | None = Field(None, alias="contentType")
    url: str


class ToolInvocation(BaseModel):
    """One step of the tool-use protocol, embedded in an assistant message."""

    model_config = ConfigDict(populate_by_name=True)

    tool_call_id: str = Field(..., alias="toolCallId")
    tool_name: str = Field(..., alias="toolName")
    args: Any = None
    state: Literal["partial-call", "call", "result"]
    result: Any = None


class Message(BaseModel):
    """Chat message as sent by the client (AI SDK UI format)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | None = None
    role: Literal["system", "user", "assistant", "tool"]
    content: str = ""
    attachments: list[Attachment] | None = Field(None, alias="experimental_attachments")
    tool_invocations: list[ToolInvocation] | None = Field(None, alias="toolInvocations")


class ChatRequest(BaseModel):
    id: str = Field(..., description="Chat id; messages are saved under it")
    messages: list[Message] = Field(default_factory=list, description="Full conversation so far, oldest first")


class ChatRecord(BaseModel):
    """Stored chat row. Messages are LangChain message dicts (messages_to_dict)."""

    id: str
    user_id: str
    messages: list[dict] = Field(default_factory=list)
    created_at: str | None = None


# Tool argument schemas (what the model sees)

class GoogleSearchArgs(BaseModel):
    query: str = Field(..., description="The search query to look up")


class GetWeatherArgs(BaseModel):
    latitude: float = Field(..., description="Latitude coordinate")
    longitude: float = Field(..., description="Longitude coordinate")
