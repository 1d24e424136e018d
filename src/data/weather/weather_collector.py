import logging

from src.data.repo.repo import CommitRepository, WeatherRepository
from src.storage.unit_of_work import UnitOfWork
from .weather_client import OpenMeteoClient

logger = logging.getLogger(__name__)


class WeatherCollector:
    """Fills weather_data for every day between the first and last stored commit."""

    def __init__(self, database_url, latitude, longitude, location='NYC',
                 timezone='America/New_York', client=None):
        self.database_url = database_url
        self.latitude = latitude
        self.longitude = longitude
        self.location = location
        self.timezone = timezone
        self.client = client or OpenMeteoClient()

        UnitOfWork(database_url).create_tables()
        self.commit_repo = CommitRepository(database_url)
        self.weather_repo = WeatherRepository(database_url)

    def sync(self):
        dates = self.commit_repo.distinct_commit_dates()
        if not dates:
            logger.info("No commit dates found, nothing to fetch")
            return {
                'message': 'No commit dates found. Sync GitHub data first.',
                'weather_added': 0,
                'total_dates': 0
            }

        start_date, end_date = dates[0], dates[-1]
        weather_rows = self.client.get_historical_weather(
            self.latitude, self.longitude, start_date, end_date, self.timezone
        )

        weather_added = 0
        for row in weather_rows:
            if self.weather_repo.insert_observation(row, self.location):
                weather_added += 1

        logger.info("Stored %d new weather days (%s..%s)", weather_added, start_date, end_date)

        return {
            'date_range': {'start_date': start_date.isoformat(), 'end_date': end_date.isoformat()},
            'weather_added': weather_added,
            'total_dates': len(dates)
        }
