"""Day-by-day conditions outlook for a resort ("spy mode")."""

import logging
from datetime import UTC, datetime, timedelta

from models.resort import Resort
from models.spy import SpyDay, SpyReport
from models.weather import DailyWeather, RecentWeather
from services.best_window_service import BestWindowService
from services.openmeteo_service import OpenMeteoService
from services.ridability_service import RidabilityService
from utils.constants import OPEN_METEO_FORECAST_MAX_DAYS
from utils.date_utils import format_date
from utils.exceptions import UpstreamFetchError

logger = logging.getLogger(__name__)

# Days of observed history ahead of today used as scoring context
RECENT_PAST_DAYS = 2
DATE_MISMATCH_NOTE = "Date mismatch: showing available data"


def clamp_days(days: int | str | None) -> int:
    """Requested horizon clamped to the forecast limit; invalid input means the limit."""
    try:
        requested = int(days) if days is not None else 0
    except (TypeError, ValueError):
        requested = 0
    if requested <= 0:
        return OPEN_METEO_FORECAST_MAX_DAYS
    return min(requested, OPEN_METEO_FORECAST_MAX_DAYS)


def recent_context(weather: list[DailyWeather], index: int) -> RecentWeather:
    """Summarize the two records before ``index``; missing days count as 0."""
    previous = [weather[i] if i >= 0 else None for i in (index - 1, index - 2)]
    return RecentWeather(
        rain_mm=0.0,
        snow_cm=sum(d.snowfall_sum for d in previous if d is not None),
        temp_min=min(d.temp_min if d is not None else 0.0 for d in previous),
        temp_max=max(d.temp_max if d is not None else 0.0 for d in previous),
    )


def find_today_index(weather: list[DailyWeather], today: str) -> tuple[int, bool]:
    """Index of today's record and whether an exact match was missing.

    Falls back to the first later date, then to the first record.
    """
    for i, day in enumerate(weather):
        if day.date == today:
            return i, False
    if not weather:
        return 0, False
    for i, day in enumerate(weather):
        if day.date > today:
            return i, True
    return 0, True


class SpyService:
    """Combine recent history and the forecast into a per-day outlook."""

    def __init__(
        self,
        openmeteo_service: OpenMeteoService | None = None,
        ridability_service: RidabilityService | None = None,
        best_window_service: BestWindowService | None = None,
    ):
        self.openmeteo_service = openmeteo_service or OpenMeteoService()
        self.ridability_service = ridability_service or RidabilityService()
        self.best_window_service = best_window_service or BestWindowService()

    def get_report(
        self,
        resort: Resort,
        days: int | str | None = None,
        now: datetime | None = None,
    ) -> SpyReport:
        """
        Build the outlook for a resort.

        Args:
            resort: Resort to report on
            days: Forecast horizon; clamped to the provider's limit
            now: Current time (UTC); defaults to the wall clock

        Returns:
            SpyReport with one entry per available forecast day

        Raises:
            UpstreamFetchError: If the forecast fetch fails
        """
        horizon = clamp_days(days)
        now = now or datetime.now(UTC)
        today = now.date()

        history = self._fetch_recent(resort, today)
        forecast = self.openmeteo_service.get_forecast(
            resort.latitude,
            resort.longitude,
            today,
            today + timedelta(days=horizon - 1),
            today=today,
        )

        all_weather = history + forecast.weather

        # "Today" in the resort's own timezone
        resort_today = format_date(
            (now + timedelta(seconds=forecast.utc_offset_seconds)).date()
        )
        today_index, mismatch = find_today_index(all_weather, resort_today)
        if mismatch:
            logger.warning(
                f"No weather for {resort_today} at {resort.resort_id}, "
                f"starting at {all_weather[today_index].date}"
            )

        data: list[SpyDay] = []
        for offset in range(horizon):
            index = today_index + offset
            if index >= len(all_weather):
                break
            day = all_weather[index]
            data.append(
                SpyDay(
                    date=day.date,
                    weather=day,
                    ridability=self.ridability_service.score(
                        day, recent_context(all_weather, index), resort.ride_region
                    ),
                    best_window=self.best_window_service.recommend(day, resort.ride_region),
                    notes=[DATE_MISMATCH_NOTE] if offset == 0 and mismatch else [],
                )
            )

        recent = RecentWeather()
        if today_index >= RECENT_PAST_DAYS:
            recent = RecentWeather(
                snow_cm=all_weather[today_index - 1].snowfall_sum
                + all_weather[today_index - 2].snowfall_sum
            )

        return SpyReport(resort=resort, days=len(data), data=data, recent=recent)

    def _fetch_recent(self, resort: Resort, today) -> list[DailyWeather]:
        """Recent observed days; the report degrades to forecast-only on failure."""
        try:
            return self.openmeteo_service.get_recent_history(
                resort.latitude, resort.longitude, days=RECENT_PAST_DAYS, today=today
            ).weather
        except UpstreamFetchError as e:
            logger.warning(f"Recent history unavailable for {resort.resort_id}: {e}")
            return []
