"""Current/hourly temperature and sunrise/sunset from Open-Meteo (no API key)."""
import logging

import requests

from app.core.config import get_settings

logger = logging.getLogger(__name__)


def weather_params(latitude: float, longitude: float) -> dict:
    return {
        "latitude": latitude,
        "longitude": longitude,
        "current": "temperature_2m",
        "hourly": "temperature_2m",
        "daily": "sunrise,sunset",
        "timezone": "auto",
    }


def fetch_weather(latitude: float, longitude: float, *, timeout: float | None = None) -> dict:
    """GET the forecast and return the raw JSON payload. Raises requests.RequestException on failure."""
    s = get_settings()
    resp = requests.get(
        s.weather_api_url,
        params=weather_params(latitude, longitude),
        timeout=timeout or s.http_timeout_seconds,
    )
    resp.raise_for_status()
    return resp.json()
