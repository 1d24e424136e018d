"""Shared objects handed to the routers through FastAPI's dependency injection."""

from functools import lru_cache

from src.analysis.correlation.correlation import WeatherCorrelationAnalyzer
from src.config import get_settings


@lru_cache
def get_api_settings():
    return get_settings()


def get_analyzer() -> WeatherCorrelationAnalyzer:
    return _analyzer_for(get_api_settings().database_url, get_api_settings().timezone)


@lru_cache
def _analyzer_for(database_url: str, timezone: str) -> WeatherCorrelationAnalyzer:
    return WeatherCorrelationAnalyzer(database_url, timezone)
