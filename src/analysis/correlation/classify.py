"""
Category rules shared by the aggregations.

Each classifier is a total function over its domain so that every commit
lands in exactly one season, temperature band and precipitation band.
"""

WINTER = "Winter"
SPRING = "Spring"
SUMMER = "Summer"
FALL = "Fall"

SEASONS = (WINTER, SPRING, SUMMER, FALL)

FREEZING = "< 32°F (Freezing)"
COLD = "32-50°F (Cold)"
COOL = "50-70°F (Cool)"
WARM = "70-85°F (Warm)"
HOT = "85°F+ (Hot)"

TEMP_BUCKETS = (FREEZING, COLD, COOL, WARM, HOT)

# (exclusive upper bound °F, label)
_TEMP_BANDS = (
    (32, FREEZING),
    (50, COLD),
    (70, COOL),
    (85, WARM),
)

NO_RAIN = "No Rain"
LIGHT_RAIN = 'Light Rain (< 0.1")'
MODERATE_RAIN = 'Moderate Rain (0.1-0.5")'
HEAVY_RAIN = 'Heavy Rain (0.5"+)'

PRECIP_BUCKETS = (NO_RAIN, LIGHT_RAIN, MODERATE_RAIN, HEAVY_RAIN)

_SEASON_BY_MONTH = {
    12: WINTER, 1: WINTER, 2: WINTER,
    3: SPRING, 4: SPRING, 5: SPRING,
    6: SUMMER, 7: SUMMER, 8: SUMMER,
    9: FALL, 10: FALL, 11: FALL,
}


def classify_season(month: int) -> str:
    """Meteorological season of a calendar month (1-12)."""
    try:
        return _SEASON_BY_MONTH[int(month)]
    except KeyError:
        raise ValueError(f"month must be in 1..12, got {month!r}") from None


def classify_temp_bucket(temp: float) -> str:
    """Temperature band of a daily mean temperature in °F. Lower bounds are inclusive."""
    for upper, label in _TEMP_BANDS:
        if temp < upper:
            return label
    return HOT


def classify_precip_bucket(precip: float) -> str:
    """Precipitation band of a daily total in inches."""
    if precip == 0:
        return NO_RAIN
    if precip < 0.1:
        return LIGHT_RAIN
    if precip < 0.5:
        return MODERATE_RAIN
    return HEAVY_RAIN
