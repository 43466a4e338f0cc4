"""Forecast-versus-historical comparison models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Verdict(str, Enum):
    """Forecast snowfall relative to the historical average."""

    ABOVE_AVG = "above_avg"
    AVERAGE = "average"
    BELOW_AVG = "below_avg"


class ComparisonConfidence(str, Enum):
    """Reliability of a forecast based on lead time."""

    HIGH = "high"  # Within a week
    MEDIUM = "medium"  # Within two weeks
    LOW = "low"  # Beyond two weeks


class ForecastSnapshot(BaseModel):
    snowfall: float = Field(..., description="Forecast snowfall (cm)")
    temp_avg: float = Field(..., description="Forecast mean temperature (°C)")


class HistoricalSnapshot(BaseModel):
    snowfall: float = Field(..., description="Average historical snowfall (cm)")
    temp_avg: float = Field(..., description="Average historical temperature (°C)")
    sample_years: int = Field(..., ge=0, description="Years in the average")


class ComparisonDelta(BaseModel):
    snowfall: float = Field(..., description="Forecast minus historical (cm)")
    snowfall_pct: float = Field(..., description="Percent above/below average")
    temp: float = Field(..., description="Forecast minus historical (°C)")


class ComparisonResult(BaseModel):
    """Comparison of one forecast day against its historical counterpart."""

    date: str
    forecast: ForecastSnapshot
    historical: HistoricalSnapshot
    delta: ComparisonDelta
    verdict: Verdict
    confidence: ComparisonConfidence

    model_config = ConfigDict(use_enum_values=True)


class TripComparisonSummary(BaseModel):
    """Trip-level roll-up of the daily comparisons."""

    total_forecast_snow: float = Field(..., description="Sum of forecast snow (cm)")
    total_historical_snow: float = Field(
        ..., description="Sum of historical average snow (cm)"
    )
    snow_diff_pct: float = Field(..., description="Trip-level snowfall difference (%)")
    snowfall_verdict: str = Field(..., description="e.g. '25% above average'")
    temp_verdict: str = Field(..., description="e.g. '2.0°C colder than usual'")
    best_day: str = Field(..., description="e.g. 'Saturday looks best'")
    caption: str = Field(..., description="One-sentence summary")
    days_until_trip: int | None = Field(
        None, description="Days from today until the trip starts"
    )


class TripComparison(BaseModel):
    """Daily comparisons plus a trip summary."""

    daily: list[ComparisonResult] = Field(default_factory=list)
    summary: TripComparisonSummary
