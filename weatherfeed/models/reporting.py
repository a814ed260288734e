"""Refresh reporting models."""

from dataclasses import asdict, dataclass


@dataclass
class RefreshSummary:
    started_at: str
    completed_at: str = ""
    status: str = "running"  # "running", "completed" or "failed"
    pages_fetched: int = 0
    today_rows: int = 0
    tomorrow_rows: int = 0
    yesterday_rows: int = 0
    duration_seconds: float = 0.0
    error: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)
