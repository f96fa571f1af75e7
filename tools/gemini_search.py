"""
Gemini with Google Search grounding, called over REST.
The LangChain chat model does not expose the google_search grounding tool alongside
function tools, so the googleSearch tool goes through generateContent directly.
"""
import logging

import requests

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

SEARCH_TEMPERATURE = 0.9


class ConfigurationError(RuntimeError):
    """Required setting is missing."""


class SearchBridgeError(RuntimeError):
    """Gemini returned a non-success status. `detail` holds the response body."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(f"Gemini API error ({status_code}): {detail}")
        self.status_code = status_code
        self.detail = detail


def unescape_text(text: str) -> str:
    """Turn literal two-character \\n and \\t sequences into real newline and tab."""
    return text.replace("\\n", "\n").replace("\\t", "\t")


def _first_part_text(data) -> str:
    """candidates[0].content.parts[0].text, or "" when any level is missing."""
    try:
        text = data["candidates"][0]["content"]["parts"][0].get("text")
    except (KeyError, IndexError, TypeError, AttributeError):
        return ""
    return text if isinstance(text, str) else ""


class GeminiSearch:
    """One-shot search-grounded completion. Raises ConfigurationError if api_key is empty."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-3-pro-preview",
        api_base: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 60.0,
        session: requests.Session | None = None,
    ):
        if not (api_key or "").strip():
            raise ConfigurationError("GOOGLE_GENERATIVE_AI_API_KEY not configured")
        self._api_key = api_key.strip()
        self._model = model
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout
        self._http = session or requests

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "GeminiSearch":
        s = settings or get_settings()
        return cls(
            s.google_api_key,
            model=s.gemini_search_model,
            api_base=s.gemini_api_base,
            timeout=s.http_timeout_seconds,
        )

    @property
    def model(self) -> str:
        return self._model

    def _endpoint(self) -> str:
        return f"{self._api_base}/models/{self._model}:generateContent"

    def search(self, query: str) -> str:
        """Ask Gemini with search grounding enabled; return the answer as plain text."""
        body = {
            "contents": [{"parts": [{"text": query}]}],
            "tools": [{"google_search": {}}],
            "generationConfig": {"temperature": SEARCH_TEMPERATURE},
        }
        resp = self._http.post(
            self._endpoint(),
            params={"key": self._api_key},
            json=body,
            headers={"Content-Type": "application/json"},
            timeout=self._timeout,
        )
        if not resp.ok:
            raise SearchBridgeError(resp.status_code, resp.text)
        text = _first_part_text(resp.json())
        logger.debug("gemini search: query=%r answer_chars=%d", query[:80], len(text))
        return unescape_text(text)
