#!/usr/bin/env python3
"""
Write the chat agent's LangGraph as Mermaid source (and PNG via mermaid.ink when reachable).
Usage (from repo root):
  python scripts/export_agent_graph.py [--output-dir DIR] [--mermaid-only]
Needs GOOGLE_GENERATIVE_AI_API_KEY set (the graph is built with its tools bound).
"""
import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))
_env = ROOT / ".env"
if _env.exists():
    from dotenv import load_dotenv
    load_dotenv(_env, override=True)

from app.core.agent import get_agent


def main() -> None:
    ap = argparse.ArgumentParser(description="Export the chat agent graph")
    ap.add_argument("--output-dir", "-o", type=Path, default=Path.cwd(), help="Directory for output files")
    ap.add_argument("--mermaid-only", action="store_true", help="Skip the PNG render")
    args = ap.parse_args()
    args.output_dir.mkdir(parents=True, exist_ok=True)

    graph = get_agent().get_graph()
    mmd_path = args.output_dir / "chat_agent_graph.mmd"
    mmd_path.write_text(graph.draw_mermaid(), encoding="utf-8")
    print(f"Wrote {mmd_path}")

    if args.mermaid_only:
        return
    png_path = args.output_dir / "chat_agent_graph.png"
    try:
        png_path.write_bytes(graph.draw_mermaid_png())
        print(f"Wrote {png_path}")
    except Exception as e:
        print(f"PNG export failed: {e}", file=sys.stderr)
        print(f"Paste {mmd_path.name} into https://mermaid.live instead.", file=sys.stderr)


if __name__ == "__main__":
    main()
