"""Common types and helpers shared across models."""

from datetime import UTC, datetime
from enum import StrEnum


class ObservationCategory(StrEnum):
    MAX_TEMPERATURE = "Max Temperature (C)"
    MIN_TEMPERATURE = "Min Temperature (C)"
    PRECIPITATION = "Precipitation Sum (mm)"


# YesterdayRow attribute populated by each category
CATEGORY_FIELDS: dict[ObservationCategory, str] = {
    ObservationCategory.MAX_TEMPERATURE: "max_temp",
    ObservationCategory.MIN_TEMPERATURE: "min_temp",
    ObservationCategory.PRECIPITATION: "prcp24h",
}


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()
