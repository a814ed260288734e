"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from weatherfeed.models.common import ObservationCategory

DEFAULT_FORECAST_URL = (
    "https://8ohij8472m.execute-api.eu-central-1.amazonaws.com/prod/forecast"
)


class ForecastConfig(BaseModel):
    model_config = {"extra": "forbid"}

    url: str = DEFAULT_FORECAST_URL
    timeout_seconds: float = Field(default=30.0, gt=0.0)
    page_size: int = Field(default=20, ge=1)
    page_delay_seconds: float = Field(default=1.0, ge=0.0)
    # Position of today in the daily series; 1 when the API also returns yesterday
    today_index: int = Field(default=0, ge=0)


class ObservationSource(BaseModel):
    model_config = {"extra": "forbid"}

    url: str
    category: ObservationCategory


class ScrapeConfig(BaseModel):
    model_config = {"extra": "forbid"}

    row_selector: str = "tr.ng-scope"
    cell_selector: str = "td.ng-binding"
    headless: bool = True
    timeout_ms: int = Field(default=30000, ge=0)
    sources: list[ObservationSource] = []


class ScheduleConfig(BaseModel):
    model_config = {"extra": "forbid"}

    enabled: bool = True
    hour: int = Field(default=6, ge=0, le=23)
    minute: int = Field(default=0, ge=0, le=59)
    refresh_on_startup: bool = True


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    static_dir: str = "public"


class FeedConfig(BaseModel):
    model_config = {"extra": "forbid"}

    locations_path: str = "filtered_ililce.json"
    forecast: ForecastConfig = ForecastConfig()
    scrape: ScrapeConfig = ScrapeConfig()
    schedule: ScheduleConfig = ScheduleConfig()
    server: ServerConfig = ServerConfig()
