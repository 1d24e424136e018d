"""Read-only analytics endpoints."""

from fastapi import APIRouter, Depends

from src.analysis.correlation.correlation import WeatherCorrelationAnalyzer
from src.api.dependencies import get_analyzer
from src.api.schemas import CorrelationsResponse, StatsResponse

router = APIRouter(prefix="/api/analysis", tags=["analysis"])


@router.get("/stats", response_model=StatsResponse)
def get_stats(analyzer: WeatherCorrelationAnalyzer = Depends(get_analyzer)):
    """
    Overview counts: commits, repositories, pull requests and weather days,
    with the date range covered by each table.
    """
    return analyzer.overview()


@router.get("/correlations", response_model=CorrelationsResponse)
def get_correlations(analyzer: WeatherCorrelationAnalyzer = Depends(get_analyzer)):
    """
    Daily aligned series, seasonal / temperature / precipitation breakdowns
    and the three Pearson coefficients against commits per day.
    """
    return analyzer.analyze()
