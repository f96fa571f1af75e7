"""FastAPI application entrypoint."""
import logging
import os
from pathlib import Path

# Project root (parent of app/)
_ROOT = Path(__file__).resolve().parent.parent

# Load .env FIRST so GOOGLE_*, SUPABASE_*, etc. are set before any app code reads them.
# override=True so .env wins (important when uvicorn reload spawns a worker that may not inherit env).
from dotenv import load_dotenv
load_dotenv(_ROOT / ".env", override=True)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import router
from app.core.config import get_settings

logging.basicConfig(level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO))
_log = logging.getLogger(__name__)

# Keep HTTP client internals quiet (the Gemini REST key travels in the query string)
for _name in ("httpx", "httpcore", "hpack", "urllib3", "google_genai"):
    logging.getLogger(_name).setLevel(logging.WARNING)


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["POST", "DELETE", "GET", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=["x-vercel-ai-data-stream"],
    )
    app.include_router(router)
    return app


app = create_app()

if get_settings().supabase_enabled:
    _log.info("Supabase enabled: auth and chat persistence are on.")
else:
    _log.info("Supabase disabled (SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY not set). Every chat request will get 401.")
if not get_settings().google_api_key:
    _log.warning("GOOGLE_GENERATIVE_AI_API_KEY not set: chat requests will fail.")
