#!/usr/bin/env python3
"""Run the API with uvicorn. Usage: python run_api.py. HOST=0.0.0.0 to listen on all interfaces, RELOAD=0 for production."""
import os
from pathlib import Path

# .env next to this file wins over the shell so the reload worker sees the same settings.
from dotenv import load_dotenv
load_dotenv(Path(__file__).resolve().parent / ".env", override=True)

import uvicorn


def main() -> None:
    uvicorn.run(
        "app.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("RELOAD", "1").strip().lower() in ("1", "true", "yes"),
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
