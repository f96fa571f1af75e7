"""CLI: ask the chat agent one question (tools included) and print the reply. For the API, use run_api.py."""
import argparse

from dotenv import load_dotenv

load_dotenv()

from langchain_core.messages import HumanMessage

from app.core.agent import invoke_agent_and_reply
from tools.gemini_search import GeminiSearch


def main() -> None:
    ap = argparse.ArgumentParser(description="One-shot chat with the Gemini agent")
    ap.add_argument("prompt", nargs="?", default="What is the weather like in Tokyo?")
    ap.add_argument("--search-only", action="store_true", help="Skip the agent; call Gemini with search grounding directly")
    args = ap.parse_args()

    if args.search_only:
        print(GeminiSearch.from_settings().search(args.prompt))
    else:
        print(invoke_agent_and_reply([HumanMessage(content=args.prompt)]))


if __name__ == "__main__":
    main()
