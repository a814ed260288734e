"""Domain errors raised by the ingest pipeline."""


class WeatherFeedError(Exception):
    """Base class for weatherfeed errors."""


class LocationListError(WeatherFeedError):
    """The location list could not be read or parsed. Fatal to a refresh."""


class MalformedForecastError(WeatherFeedError):
    """A forecast response lacks the daily series a row needs."""
