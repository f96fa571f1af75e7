"""
LangGraph agent: Gemini chat model + tool node, built once and streamed per request.

State: MessagesState (single key "messages"). The agent node calls the model with the
tools bound; if the reply has tool calls the tool node runs them and control returns to
the agent. stream_agent() turns a run into a flat sequence of events for the HTTP layer.
"""
import logging
from collections.abc import Iterator
from datetime import datetime, timezone

from langchain_core.messages import AIMessage, BaseMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from langgraph.errors import GraphRecursionError
from langgraph.graph import END, START, MessagesState, StateGraph
from langgraph.prebuilt import ToolNode

from app.core.config import get_settings
from tools.chat_tools import build_chat_tools
from tools.gemini_search import GeminiSearch

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are an intelligent and engaging AI assistant powered by Google's Gemini 3 Pro model.

Your capabilities:
- Provide thoughtful, detailed, and insightful responses on any topic
- Access to Google Search for current, accurate information
- Help with analysis, research, and creative problem-solving
- Assist with writing, coding, and innovative thinking
- Explain complex concepts using analogies and examples
- Use available tools when helpful (like Google Search for facts, weather data, etc.)

Your personality:
- Be enthusiastic and engaging in your responses
- Use vivid language, analogies, and examples to make concepts clear
- Show genuine interest in helping users understand topics deeply
- Be creative and thoughtful, not just factual
- Express ideas in a natural, conversational way

Guidelines:
- Provide comprehensive, well-explained answers (don't be overly brief)
- Today's date is {today}
- If you don't know something, say so honestly
- Be helpful, harmless, and honest
- Make learning enjoyable and interesting"""

# Each tool round trip is two graph steps (agent -> tools); keep room for the final answer.
# A run that hits the cap ends with TOOL_LIMIT_REPLY instead of an error, so the turn is still saved.
MAX_TOOL_ROUNDS = 5
TOOL_LIMIT_REPLY = "I had to stop after several tool calls without reaching an answer. Please try rephrasing your question."


def get_system_prompt(extra: list[str] | None = None) -> str:
    """Persona prompt with today's date filled in at call time. Client-sent system text is appended."""
    today = datetime.now(timezone.utc).strftime("%m/%d/%Y")
    prompt = SYSTEM_PROMPT.format(today=today)
    if extra:
        prompt += "\n\n" + "\n\n".join(extra)
    return prompt


def message_text(content) -> str:
    """Text of a message or chunk. Gemini content may be a string or a list of typed parts."""
    if isinstance(content, str):
        return content
    out = []
    for part in content or []:
        if isinstance(part, str):
            out.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            out.append(part.get("text") or "")
    return "".join(out)


def build_llm() -> ChatGoogleGenerativeAI:
    settings = get_settings()
    return ChatGoogleGenerativeAI(
        model=settings.gemini_model,
        google_api_key=settings.google_api_key,
        temperature=settings.chat_temperature,
        thinking_level=settings.thinking_level,
        # Plain text, not JSON mode: keeps newlines in replies from being escaped
        response_mime_type="text/plain",
    )


def _build_agent(search: GeminiSearch | None = None, llm=None):
    search = search or GeminiSearch.from_settings()
    tools = build_chat_tools(search)
    llm_with_tools = (llm or build_llm()).bind_tools(tools)
    tool_node = ToolNode(tools)

    def agent_node(state: MessagesState) -> dict:
        # Fresh system prompt every call so the date is always today's.
        msgs = state["messages"]
        client_system = [message_text(m.content) for m in msgs if isinstance(m, SystemMessage)]
        history = [m for m in msgs if not isinstance(m, SystemMessage)]
        response = llm_with_tools.invoke([SystemMessage(content=get_system_prompt(client_system))] + history)
        return {"messages": [response]}

    def should_continue(state: MessagesState) -> str:
        last = state["messages"][-1]
        if isinstance(last, AIMessage) and getattr(last, "tool_calls", None):
            return "tools"
        return END

    graph = StateGraph(MessagesState)
    graph.add_node("agent", agent_node)
    graph.add_node("tools", tool_node)
    graph.add_edge(START, "agent")
    graph.add_conditional_edges("agent", should_continue, path_map={"tools": "tools", END: END})
    graph.add_edge("tools", "agent")

    return graph.compile()


# Lazy singleton
_agent = None


def get_agent():
    global _agent
    if _agent is None:
        _agent = _build_agent()
    return _agent


def stream_agent(messages: list[BaseMessage], agent=None) -> Iterator[tuple[str, object]]:
    """
    Run the agent and yield events as they happen:
      ("text", str)          text delta from the model
      ("step", AIMessage)    a finished model turn (may carry tool_calls and usage)
      ("tool", ToolMessage)  a tool result
    """
    agent = agent or get_agent()
    config = {"recursion_limit": 2 * MAX_TOOL_ROUNDS + 1}
    try:
        for mode, payload in agent.stream({"messages": messages}, config, stream_mode=["messages", "updates"]):
            if mode == "messages":
                chunk, meta = payload
                if meta.get("langgraph_node") == "agent" and isinstance(chunk, AIMessage):
                    text = message_text(chunk.content)
                    if text:
                        yield ("text", text)
            elif mode == "updates":
                for node, update in payload.items():
                    for msg in (update or {}).get("messages", []):
                        yield ("step" if node == "agent" else "tool", msg)
    except GraphRecursionError:
        logger.warning("Agent stopped after %d tool rounds without a final answer", MAX_TOOL_ROUNDS)
        yield ("text", TOOL_LIMIT_REPLY)
        yield ("step", AIMessage(content=TOOL_LIMIT_REPLY))


def invoke_agent_and_reply(messages: list[BaseMessage]) -> str:
    """Run the agent to completion and return only the final assistant text."""
    result = get_agent().invoke({"messages": messages}, {"recursion_limit": 2 * MAX_TOOL_ROUNDS + 1})
    msg_list = result.get("messages", [])
    last = msg_list[-1] if msg_list else None
    if last is not None and message_text(last.content):
        return message_text(last.content)
    return str(result)
