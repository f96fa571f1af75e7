"""Chat tools: googleSearch (Gemini + search grounding) and getWeather (Open-Meteo)."""
import logging

from langchain.tools import tool

from app.models.schemas import GetWeatherArgs, GoogleSearchArgs
from tools.gemini_search import GeminiSearch
from tools.weather import fetch_weather

logger = logging.getLogger(__name__)

SEARCH_FAILED_REPLY = "Sorry, I couldn't search for that information right now."
WEATHER_FAILED_REPLY = "Sorry, I couldn't get the weather for that location right now."


def build_chat_tools(search: GeminiSearch) -> list:
    """Return [googleSearch, getWeather]. Both return a short apology string instead of raising."""

    @tool("googleSearch", args_schema=GoogleSearchArgs)
    def google_search(query: str) -> str:
        """Search the web using Google to find current, accurate information about any topic. Use this when you need up-to-date information, facts about specific companies/products, or current events."""
        try:
            return search.search(query)
        except Exception as e:
            logger.error("googleSearch failed for query=%r: %s", query[:80], e)
            return SEARCH_FAILED_REPLY

    @tool("getWeather", args_schema=GetWeatherArgs)
    def get_weather(latitude: float, longitude: float) -> dict | str:
        """Get the current weather at a location"""
        try:
            return fetch_weather(latitude, longitude)
        except Exception as e:
            logger.error("getWeather failed for (%s, %s): %s", latitude, longitude, e)
            return WEATHER_FAILED_REPLY

    return [google_search, get_weather]
