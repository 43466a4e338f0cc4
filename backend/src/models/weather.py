"""Daily weather data models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Region(str, Enum):
    """Snowpack regions with different sensitivity to rain."""

    EAST = "east"  # Maritime-influenced, rain-sensitive
    WEST = "west"


class DailyWeather(BaseModel):
    """One calendar day of forecast, observed or averaged weather."""

    date: str = Field(..., description="Calendar date (YYYY-MM-DD)")
    temp_min: float = Field(default=0.0, description="Minimum temperature (°C)")
    temp_max: float = Field(default=0.0, description="Maximum temperature (°C)")
    precipitation_sum: float = Field(
        default=0.0, description="Total precipitation (mm)"
    )
    snowfall_sum: float = Field(default=0.0, description="Total snowfall (cm)")
    precipitation_probability: float = Field(
        default=0.0, ge=0, le=100, description="Chance of precipitation (%)"
    )
    weather_code: int = Field(default=0, description="WMO weather code")
    wind_speed_max: float = Field(default=0.0, description="Max wind speed (km/h)")
    uv_index_max: float = Field(default=0.0, description="Max UV index")

    # Only set on multi-year historical averages
    sample_years: int | None = Field(
        None, ge=0, description="Number of years averaged into this record"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("date")
    @classmethod
    def validate_date_format(cls, v: str) -> str:
        """Validate date format is YYYY-MM-DD, dropping any time component."""
        v = v.split("T")[0]
        try:
            datetime.strptime(v, "%Y-%m-%d")
            return v
        except ValueError:
            raise ValueError("Date must be in YYYY-MM-DD format")

    @property
    def temp_avg(self) -> float:
        """Midpoint of the daily temperature range."""
        return (self.temp_min + self.temp_max) / 2

    @property
    def estimated_rain_mm(self) -> float:
        """Precipitation not accounted for by snowfall (1cm snow ~ 1mm water x10)."""
        return max(0.0, self.precipitation_sum - self.snowfall_sum * 10)


class WeatherSeries(BaseModel):
    """Row-oriented daily series reshaped from a provider response."""

    weather: list[DailyWeather] = Field(default_factory=list)
    timezone: str = Field(default="GMT", description="Resort timezone name")
    utc_offset_seconds: int = Field(
        default=0, description="Resort offset from UTC in seconds"
    )


class RecentWeather(BaseModel):
    """Weather over the days leading up to a scored day."""

    rain_mm: float = Field(default=0.0, description="Rain over the period (mm)")
    snow_cm: float = Field(default=0.0, description="Snowfall over the period (cm)")
    temp_min: float = Field(default=0.0, description="Lowest temperature (°C)")
    temp_max: float = Field(default=0.0, description="Highest temperature (°C)")
