"""In-memory holder for the latest dataset snapshot."""

from dataclasses import replace

from weatherfeed.models.weather import Dataset, WeatherRow, YesterdayRow


class DatasetStore:
    """Single writer, any number of readers.

    Snapshots are immutable and swapped wholesale, so a reader always sees
    one consistent (possibly partially populated) dataset.
    """

    def __init__(self, initial: Dataset | None = None):
        self._dataset = initial if initial is not None else Dataset.empty()

    def get(self) -> Dataset:
        return self._dataset

    def replace(self, dataset: Dataset) -> None:
        self._dataset = dataset

    def set_yesterday(self, rows: list[YesterdayRow]) -> None:
        self.replace(replace(self._dataset, yesterday=tuple(rows)))

    def append_forecast(
        self, today: list[WeatherRow], tomorrow: list[WeatherRow]
    ) -> None:
        current = self._dataset
        self.replace(
            replace(
                current,
                today=current.today + tuple(today),
                tomorrow=current.tomorrow + tuple(tomorrow),
            )
        )
