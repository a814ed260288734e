"""Default observation pages published by the Turkish State Meteorological Service."""

from weatherfeed.config.schema import ObservationSource
from weatherfeed.models.common import ObservationCategory

DEFAULT_OBSERVATION_SOURCES: list[ObservationSource] = [
    ObservationSource(
        url="https://mgm.gov.tr/sondurum/en-yuksek-sicakliklar.aspx",
        category=ObservationCategory.MAX_TEMPERATURE,
    ),
    ObservationSource(
        url="https://mgm.gov.tr/sondurum/en-dusuk-sicakliklar.aspx",
        category=ObservationCategory.MIN_TEMPERATURE,
    ),
    ObservationSource(
        url="https://mgm.gov.tr/sondurum/toplam-yagis.aspx",
        category=ObservationCategory.PRECIPITATION,
    ),
]
