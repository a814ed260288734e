"""Weather row and dataset models.

Field names are snake_case in Python; ``to_dict`` produces the camelCase
keys the browser client reads.
"""

from dataclasses import dataclass, field

from weatherfeed.errors import LocationListError


@dataclass(frozen=True)
class Location:
    city: str
    district: str
    lat: str
    lng: str

    @classmethod
    def from_record(cls, record: dict) -> "Location":
        """Build a Location from one entry of the location list.

        Accepts the Turkish keys of the published list (``sehir``/``semt``)
        as well as ``city``/``district``.
        """
        if not isinstance(record, dict):
            raise LocationListError(f"Location record is not an object: {record!r}")
        city = record.get("sehir", record.get("city"))
        district = record.get("semt", record.get("district"))
        lat = record.get("lat")
        lng = record.get("lng")
        if city is None or district is None or lat is None or lng is None:
            raise LocationListError(f"Incomplete location record: {record!r}")
        try:
            float(lat)
            float(lng)
        except (TypeError, ValueError) as e:
            raise LocationListError(f"Bad coordinates in {record!r}: {e}") from e
        return cls(city=str(city), district=str(district), lat=str(lat), lng=str(lng))

    @property
    def latitude(self) -> float:
        return float(self.lat)

    @property
    def longitude(self) -> float:
        return float(self.lng)


@dataclass(frozen=True)
class WeatherRow:
    city: str
    district: str
    lat: str
    long: str
    max_temp: float | None
    min_temp: float | None
    max_wind_speed: float | None
    max_cape: float | None
    prcp24h: float | None
    prcp48h: float | None
    prcp72h: float | None

    def to_dict(self) -> dict:
        return {
            "city": self.city,
            "district": self.district,
            "lat": self.lat,
            "long": self.long,
            "maxTemp": self.max_temp,
            "minTemp": self.min_temp,
            "maxWindSpeed": self.max_wind_speed,
            "maxCape": self.max_cape,
            "prcp24h": self.prcp24h,
            "prcp48h": self.prcp48h,
            "prcp72h": self.prcp72h,
        }


@dataclass(frozen=True)
class ForecastPage:
    today: list[WeatherRow] = field(default_factory=list)
    tomorrow: list[WeatherRow] = field(default_factory=list)


@dataclass(frozen=True)
class Observation:
    city_info: str  # "City, District"
    value: float | None
    category: str


@dataclass
class YesterdayRow:
    city: str
    district: str
    max_temp: float | None = None
    min_temp: float | None = None
    prcp24h: float | None = None

    def to_dict(self) -> dict:
        return {
            "city": self.city,
            "district": self.district,
            "maxTemp": self.max_temp,
            "minTemp": self.min_temp,
            "prcp24h": self.prcp24h,
        }


@dataclass(frozen=True)
class Dataset:
    today: tuple[WeatherRow, ...] = ()
    tomorrow: tuple[WeatherRow, ...] = ()
    yesterday: tuple[YesterdayRow, ...] = ()

    @classmethod
    def empty(cls) -> "Dataset":
        return cls()

    def to_dict(self) -> dict:
        return {
            "today": [r.to_dict() for r in self.today],
            "tomorrow": [r.to_dict() for r in self.tomorrow],
            "yesterday": [r.to_dict() for r in self.yesterday],
        }
