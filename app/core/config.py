"""Application settings from environment."""
import os
from functools import lru_cache


@lru_cache
def get_settings() -> "Settings":
    return Settings()


class Settings:
    """Central config. Load .env in main/run_api before using. Key settings are @property so they read env at access time."""

    # Gemini (properties so they read after .env is loaded)
    @property
    def google_api_key(self) -> str:
        return os.getenv("GOOGLE_GENERATIVE_AI_API_KEY", "").strip()

    @property
    def gemini_model(self) -> str:
        return (os.getenv("GEMINI_MODEL", "") or "").strip() or "gemini-3-pro-preview"

    # Model used by the googleSearch tool; same as the chat model unless overridden
    @property
    def gemini_search_model(self) -> str:
        return (os.getenv("GEMINI_SEARCH_MODEL", "") or "").strip() or self.gemini_model

    @property
    def gemini_api_base(self) -> str:
        raw = os.getenv("GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta")
        return raw.strip().rstrip("/")

    @property
    def chat_temperature(self) -> float:
        raw = os.getenv("CHAT_TEMPERATURE", "0.9").strip()
        try:
            return max(0.0, min(2.0, float(raw)))
        except ValueError:
            return 0.9

    @property
    def thinking_level(self) -> str:
        return os.getenv("THINKING_LEVEL", "high").strip().lower() or "high"

    # Weather (Open-Meteo needs no key)
    @property
    def weather_api_url(self) -> str:
        return os.getenv("WEATHER_API_URL", "https://api.open-meteo.com/v1/forecast").strip()

    # Outbound HTTP (search bridge, weather)
    @property
    def http_timeout_seconds(self) -> float:
        raw = os.getenv("HTTP_TIMEOUT_SECONDS", "60").strip()
        try:
            return max(1.0, min(300.0, float(raw)))
        except ValueError:
            return 60.0

    # Supabase: chat persistence and auth. Use the SERVICE ROLE key, not the anon key.
    @property
    def supabase_url(self) -> str:
        return os.getenv("SUPABASE_URL", "").strip()

    @property
    def supabase_key(self) -> str:
        return (os.getenv("SUPABASE_SERVICE_ROLE_KEY", "") or os.getenv("SUPABASE_KEY", "")).strip()

    @property
    def supabase_enabled(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    @property
    def chats_table(self) -> str:
        return os.getenv("CHATS_TABLE", "chats").strip() or "chats"

    # API
    @property
    def api_title(self) -> str:
        return os.getenv("API_TITLE", "Gemini Chat API").strip()

    @property
    def api_version(self) -> str:
        return os.getenv("API_VERSION", "0.1.0").strip()

    # CORS: comma-separated origins (e.g. http://localhost:3000) or * for all
    @property
    def cors_origins(self) -> list[str]:
        raw = os.getenv("CORS_ORIGINS", "*").strip()
        if not raw or raw == "*":
            return ["*"]
        return [o.strip() for o in raw.split(",") if o.strip()]
