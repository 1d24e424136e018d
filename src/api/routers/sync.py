"""Endpoints that trigger ingestion."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_api_settings
from src.data.github.github_client import GitHubClient
from src.data.github.github_collector import GitHubActivityCollector
from src.data.weather.weather_collector import WeatherCollector

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["sync"])


@router.post("/github/sync")
def sync_github(settings=Depends(get_api_settings)):
    if not GitHubClient(settings.token).check_auth():
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": "GitHub token missing or rejected. Set GITHUB_TOKEN or `token` in the config file."}
        )

    collector = GitHubActivityCollector(
        token=settings.token,
        max_workers=settings.workers,
        database_url=settings.database_url,
        since_years=settings.since_years,
        timezone=settings.timezone
    )
    result = collector.collect()
    return {"success": True, **result}


@router.post("/weather/sync")
def sync_weather(settings=Depends(get_api_settings)):
    collector = WeatherCollector(
        database_url=settings.database_url,
        latitude=settings.latitude,
        longitude=settings.longitude,
        location=settings.location,
        timezone=settings.timezone
    )
    result = collector.sync()
    return {"success": True, **result}
