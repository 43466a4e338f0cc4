"""Load the holiday table from JSON file."""

import json
import logging
import os
from pathlib import Path
from typing import Any

from models.crowd import Holiday

logger = logging.getLogger(__name__)

# Path to holiday data JSON
DATA_FILE = Path(
    os.environ.get(
        "HOLIDAYS_FILE",
        Path(__file__).parent.parent.parent / "data" / "holidays.json",
    )
)


class HolidayLoader:
    """Load and transform the season-keyed holiday table."""

    def __init__(self, data_file: Path = DATA_FILE):
        self.data_file = Path(data_file)
        self._data: dict[str, Any] | None = None

    def load(self) -> dict[str, Any]:
        """Load data from JSON file."""
        if self._data is None:
            if not self.data_file.exists():
                raise FileNotFoundError(f"Holiday data file not found: {self.data_file}")

            with open(self.data_file, "r", encoding="utf-8") as f:
                self._data = json.load(f)

            logger.info(f"Loaded {len(self._data)} holiday seasons from {self.data_file}")

        return self._data

    def get_seasons(self) -> list[str]:
        """Get season keys, e.g. ['2025-2026', '2026-2027']."""
        return sorted(self.load().keys())

    def get_holidays(self, season: str | None = None) -> dict[str, Holiday]:
        """
        Get holidays keyed by date.

        Args:
            season: Optional season filter (e.g., '2025-2026'); all seasons by default

        Returns:
            Mapping of YYYY-MM-DD to Holiday
        """
        data = self.load()
        seasons = [season] if season else self.get_seasons()

        holidays: dict[str, Holiday] = {}
        for key in seasons:
            for raw in data.get(key, []):
                try:
                    holiday = self._transform_holiday(raw)
                except Exception as e:
                    label = raw.get("date", "unknown") if isinstance(raw, dict) else repr(raw)
                    logger.warning(f"Skipping holiday entry {label}: {e}")
                    continue
                holidays[holiday.date] = holiday

        return holidays

    def _transform_holiday(self, raw: dict[str, Any]) -> Holiday:
        """Transform a raw JSON entry to a Holiday model."""
        return Holiday(
            date=raw["date"],
            name=raw["name"],
            crowd_impact=raw.get("crowdImpact", raw.get("crowd_impact")),
        )
