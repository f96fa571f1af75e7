"""
AI SDK data stream protocol (v1): one `<code>:<json>` line per part.

  f  start step     {"messageId"}
  0  text delta     "..."
  9  tool call      {"toolCallId", "toolName", "args"}
  a  tool result    {"toolCallId", "result"}
  e  finish step    {"finishReason", "usage", "isContinued"}
  d  finish message {"finishReason", "usage"}
  3  error          "..."

The useChat hook on the client reads this; the response must carry the
x-vercel-ai-data-stream: v1 header.
"""
import json
import uuid
from collections.abc import Iterable, Iterator

from langchain_core.messages import AIMessage, BaseMessage, ToolMessage

DATA_STREAM_HEADERS = {"x-vercel-ai-data-stream": "v1"}
DATA_STREAM_MEDIA_TYPE = "text/plain; charset=utf-8"

ERROR_MESSAGE = "An error occurred."


def format_part(code: str, value) -> str:
    return f"{code}:{json.dumps(value, separators=(',', ':'), default=str)}\n"


def error_part(message: str = ERROR_MESSAGE) -> str:
    return format_part("3", message)


def _usage(msg: AIMessage) -> dict:
    meta = getattr(msg, "usage_metadata", None) or {}
    return {
        "promptTokens": int(meta.get("input_tokens") or 0),
        "completionTokens": int(meta.get("output_tokens") or 0),
    }


def tool_result_value(content):
    """ToolMessage content is a string; hand JSON objects/arrays back to the client decoded, anything else as text."""
    if isinstance(content, str):
        try:
            decoded = json.loads(content)
        except ValueError:
            return content
        return decoded if isinstance(decoded, (dict, list)) else content
    return content


def encode_events(
    events: Iterable[tuple[str, object]],
    collected: list[BaseMessage] | None = None,
) -> Iterator[str]:
    """
    Turn agent events into data stream lines.
    Events: ("text", str), ("step", AIMessage), ("tool", ToolMessage).
    Every finished AIMessage and ToolMessage is appended to `collected` (the response messages).
    """
    total = {"promptTokens": 0, "completionTokens": 0}
    finish_reason = "stop"
    step_open = False

    def start_step() -> str:
        return format_part("f", {"messageId": f"msg-{uuid.uuid4().hex}"})

    for kind, payload in events:
        if kind == "text":
            if not step_open:
                yield start_step()
                step_open = True
            yield format_part("0", payload)
        elif kind == "step":
            if collected is not None:
                collected.append(payload)
            if not step_open:
                yield start_step()
            for tc in payload.tool_calls:
                yield format_part("9", {"toolCallId": tc["id"], "toolName": tc["name"], "args": tc["args"]})
            usage = _usage(payload)
            total["promptTokens"] += usage["promptTokens"]
            total["completionTokens"] += usage["completionTokens"]
            finish_reason = "tool-calls" if payload.tool_calls else "stop"
            yield format_part("e", {"finishReason": finish_reason, "usage": usage, "isContinued": False})
            step_open = False
        elif kind == "tool":
            if collected is not None:
                collected.append(payload)
            msg: ToolMessage = payload
            yield format_part("a", {"toolCallId": msg.tool_call_id, "result": tool_result_value(msg.content)})
        else:
            raise ValueError(f"Unknown agent event: {kind!r}")

    yield format_part("d", {"finishReason": finish_reason, "usage": total})
