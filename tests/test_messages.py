"""Unit tests for client message normalization and filtering."""
from hypothesis import given
from hypothesis import strategies as st
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage, ToolMessage

from app.core.messages import convert_to_core_messages, has_content, to_core_messages
from app.models.schemas import Message


def _msg(role, content="", **extra):
    return Message.model_validate({"role": role, "content": content, **extra})


class TestConvert:
    def test_roles_map_to_langchain_types(self):
        core = convert_to_core_messages([
            _msg("system", "be brief"),
            _msg("user", "hi"),
            _msg("assistant", "hello"),
        ])
        assert [type(m) for m in core] == [SystemMessage, HumanMessage, AIMessage]
        assert [m.content for m in core] == ["be brief", "hi", "hello"]

    def test_attachments_become_content_blocks(self):
        msg = _msg(
            "user",
            "what is this?",
            experimental_attachments=[
                {"name": "cat.png", "contentType": "image/png", "url": "https://files.test/cat.png"},
                {"url": "https://files.test/report.pdf", "contentType": "application/pdf"},
            ],
        )
        (core,) = convert_to_core_messages([msg])
        assert core.content == [
            {"type": "text", "text": "what is this?"},
            {"type": "image", "source_type": "url", "url": "https://files.test/cat.png", "mime_type": "image/png"},
            {"type": "file", "source_type": "url", "url": "https://files.test/report.pdf", "mime_type": "application/pdf"},
        ]

    def test_attachment_only_message_is_kept(self):
        msg = _msg("user", "", experimental_attachments=[{"url": "https://files.test/a.png", "contentType": "image/png"}])
        assert len(to_core_messages([msg])) == 1

    def test_tool_invocations_expand_to_call_and_result(self):
        msg = _msg(
            "assistant",
            "",
            toolInvocations=[
                {
                    "toolCallId": "call-1",
                    "toolName": "getWeather",
                    "args": {"latitude": 1.0, "longitude": 2.0},
                    "state": "result",
                    "result": {"current": {"temperature_2m": 20}},
                }
            ],
        )
        ai, tool = convert_to_core_messages([msg])
        assert isinstance(ai, AIMessage)
        assert ai.tool_calls[0]["id"] == "call-1"
        assert ai.tool_calls[0]["name"] == "getWeather"
        assert ai.tool_calls[0]["args"] == {"latitude": 1.0, "longitude": 2.0}
        assert isinstance(tool, ToolMessage)
        assert tool.tool_call_id == "call-1"
        assert tool.content == '{"current": {"temperature_2m": 20}}'

    def test_unanswered_tool_calls_are_dropped(self):
        msg = _msg(
            "assistant",
            "checking",
            toolInvocations=[
                {"toolCallId": "c1", "toolName": "googleSearch", "args": {"query": "x"}, "state": "call"},
                {"toolCallId": "c2", "toolName": "googleSearch", "args": {"query": "y"}, "state": "partial-call"},
            ],
        )
        core = convert_to_core_messages([msg])
        assert len(core) == 1
        assert core[0].tool_calls == []
        assert core[0].content == "checking"


class TestFilter:
    def test_empty_messages_are_dropped_in_order(self):
        core = to_core_messages([
            _msg("user", "first"),
            _msg("assistant", ""),
            _msg("user", ""),
            _msg("assistant", "second"),
        ])
        assert [m.content for m in core] == ["first", "second"]

    def test_empty_list(self):
        assert to_core_messages([]) == []

    def test_tool_call_message_with_no_text_counts_as_content(self):
        ai = AIMessage(content="", tool_calls=[{"id": "c", "name": "googleSearch", "args": {"query": "q"}}])
        assert has_content(ai)

    @given(st.lists(st.tuples(st.sampled_from(["user", "assistant"]), st.text(max_size=5)), max_size=20))
    def test_filter_keeps_exactly_the_non_empty_messages(self, pairs):
        """Property: empty messages are excluded; the rest keep their original order."""
        messages = [_msg(role, text) for role, text in pairs]
        core = to_core_messages(messages)
        assert [m.content for m in core] == [text for _, text in pairs if text]
