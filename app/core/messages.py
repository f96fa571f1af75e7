"""Client messages (AI SDK UI format) -> LangChain core messages."""
import json
import logging

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage, ToolMessage

from app.models.schemas import Attachment, Message, ToolInvocation

logger = logging.getLogger(__name__)


def _attachment_block(att: Attachment) -> dict:
    ct = (att.content_type or "").lower()
    if ct.startswith("image/"):
        return {"type": "image", "source_type": "url", "url": att.url, "mime_type": ct}
    block = {"type": "file", "source_type": "url", "url": att.url}
    if ct:
        block["mime_type"] = ct
    return block


def _user_content(m: Message) -> str | list[dict]:
    if not m.attachments:
        return m.content
    parts: list[dict] = []
    if m.content:
        parts.append({"type": "text", "text": m.content})
    parts.extend(_attachment_block(a) for a in m.attachments)
    return parts


def _result_text(result) -> str:
    if isinstance(result, str):
        return result
    try:
        return json.dumps(result)
    except (TypeError, ValueError):
        return str(result)


def _answered(invocations: list[ToolInvocation] | None) -> list[ToolInvocation]:
    # Calls still waiting for a result can't be replayed: Gemini expects every call to have a response.
    return [t for t in invocations or [] if t.state == "result"]


def _tool_messages(invocations: list[ToolInvocation]) -> list[ToolMessage]:
    return [
        ToolMessage(content=_result_text(t.result), tool_call_id=t.tool_call_id, name=t.tool_name)
        for t in invocations
    ]


def convert_to_core_messages(messages: list[Message]) -> list[BaseMessage]:
    """One client message may expand to several core messages (assistant tool calls + their results)."""
    out: list[BaseMessage] = []
    for m in messages:
        if m.role == "system":
            out.append(SystemMessage(content=m.content))
        elif m.role == "user":
            out.append(HumanMessage(content=_user_content(m)))
        elif m.role == "assistant":
            done = _answered(m.tool_invocations)
            if len(done) != len(m.tool_invocations or []):
                logger.debug("Dropping %d unanswered tool call(s) from message %s",
                             len(m.tool_invocations) - len(done), m.id)
            out.append(AIMessage(
                content=m.content,
                tool_calls=[
                    {"id": t.tool_call_id, "name": t.tool_name, "args": t.args if isinstance(t.args, dict) else {}}
                    for t in done
                ],
            ))
            out.extend(_tool_messages(done))
        elif m.role == "tool":
            out.extend(_tool_messages(_answered(m.tool_invocations)))
    return out


def has_content(message: BaseMessage) -> bool:
    """False for messages with empty content. An assistant message carrying tool calls counts as non-empty."""
    if isinstance(message, AIMessage) and message.tool_calls:
        return True
    return len(message.content) > 0


def to_core_messages(messages: list[Message]) -> list[BaseMessage]:
    """Normalize and drop empty messages, keeping order."""
    return [m for m in convert_to_core_messages(messages) if has_content(m)]
