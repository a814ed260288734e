"""Row builder: turns forecast responses and scraped observations into rows."""

import logging
from collections.abc import Iterable

from weatherfeed.errors import MalformedForecastError
from weatherfeed.models.common import CATEGORY_FIELDS, ObservationCategory
from weatherfeed.models.weather import Location, Observation, WeatherRow, YesterdayRow

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24
DAILY_FIELDS = (
    "temperature_2m_max",
    "temperature_2m_min",
    "wind_speed_10m_max",
    "precipitation_sum",
)


def build_forecast_row(
    location: Location, response: dict, day_offset: int
) -> WeatherRow:
    """Build the row for one location and one day of a forecast response.

    Non-negative offsets count from the start of the daily series
    (0 = today, 1 = tomorrow); negative offsets count from its end.
    """
    daily = response.get("daily")
    if not isinstance(daily, dict):
        raise MalformedForecastError("daily series missing from response")
    for name in DAILY_FIELDS:
        if not isinstance(daily.get(name), list):
            raise MalformedForecastError(f"daily.{name} missing from response")

    series_len = len(daily["temperature_2m_max"])
    base = day_offset if day_offset >= 0 else series_len + day_offset
    if base < 0 or any(base >= len(daily[name]) for name in DAILY_FIELDS):
        raise MalformedForecastError(
            f"day offset {day_offset} outside daily series of length {series_len}"
        )

    values = {name: _number(daily[name][base], name) for name in DAILY_FIELDS}
    precipitation = daily["precipitation_sum"]
    prcp48h: float | None = None
    prcp72h: float | None = None
    if day_offset >= 0:
        prcp48h = _value_or_zero(precipitation, base) + _value_or_zero(precipitation, base + 1)
        prcp72h = prcp48h + _value_or_zero(precipitation, base + 2)

    return WeatherRow(
        city=location.city,
        district=location.district,
        lat=location.lat,
        long=location.lng,
        max_temp=values["temperature_2m_max"],
        min_temp=values["temperature_2m_min"],
        max_wind_speed=values["wind_speed_10m_max"],
        max_cape=_max_cape(response, base, location),
        prcp24h=values["precipitation_sum"],
        prcp48h=prcp48h,
        prcp72h=prcp72h,
    )


def _number(value, name: str) -> float | None:
    """Pass through a numeric or null value; anything else is malformed."""
    if value is None or (isinstance(value, (int, float)) and not isinstance(value, bool)):
        return value
    raise MalformedForecastError(f"{name} holds non-numeric value {value!r}")


def _value_or_zero(series: list, index: int) -> float:
    if index < len(series):
        value = _number(series[index], "precipitation_sum")
        if value is not None:
            return value
    return 0


def _max_cape(response: dict, base: int, location: Location) -> float | None:
    """Maximum of the day's 24 hourly cape values, None if the day is incomplete.

    Nulls count as missing hours; a non-numeric entry makes the response malformed.
    """
    hourly = response.get("hourly")
    cape = hourly.get("cape") if isinstance(hourly, dict) else None
    if not isinstance(cape, list):
        cape = []
    day = [
        v for v in cape[HOURS_PER_DAY * base:HOURS_PER_DAY * (base + 1)]
        if _number(v, "hourly.cape") is not None
    ]
    if len(day) < HOURS_PER_DAY:
        logger.warning(
            "Incomplete hourly cape for %s/%s day %d: %d of %d values",
            location.city, location.district, base, len(day), HOURS_PER_DAY,
        )
        return None
    return max(day)


def split_city_info(city_info: str) -> tuple[str, str]:
    """Split a "City, District" label on its first comma."""
    city, sep, district = city_info.partition(",")
    if not sep:
        raise ValueError(f"Expected 'City, District', got {city_info!r}")
    return city.strip(), district.strip()


def merge_observation_row(
    rows: list[YesterdayRow],
    city_info: str,
    category: str,
    value: float | None,
) -> list[YesterdayRow]:
    """Set one measurement on the row keyed by (city, district).

    The row is created on first sighting and updated in place afterwards.
    Returns ``rows`` for folding.
    """
    field_name = CATEGORY_FIELDS[ObservationCategory(category)]
    city, district = split_city_info(city_info)

    existing = None
    for row in rows:
        if row.city == city and row.district == district:
            existing = row
            break
    if existing is None:
        existing = YesterdayRow(city=city, district=district)
        rows.append(existing)

    setattr(existing, field_name, value)
    return rows


def merge_observations(observations: Iterable[Observation]) -> list[YesterdayRow]:
    """Fold observations into yesterday rows. Unlabelled observations are skipped."""
    rows: list[YesterdayRow] = []
    for obs in observations:
        try:
            merge_observation_row(rows, obs.city_info, obs.category, obs.value)
        except ValueError as e:
            logger.warning("Skipping observation: %s", e)
    return rows
