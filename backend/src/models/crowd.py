"""Crowd prediction data models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from utils.constants import FIRST_LIFT_HOUR, LAST_LIFT_HOUR


class DayType(str, Enum):
    """Calendar classification of a ski day."""

    WEEKDAY = "weekday"
    WEEKEND = "weekend"
    HOLIDAY = "holiday"


class Holiday(BaseModel):
    """An entry in the holiday table."""

    date: str = Field(..., description="Holiday date (YYYY-MM-DD)")
    name: str = Field(..., description="Holiday name, e.g. 'Christmas Day'")
    crowd_impact: int = Field(..., ge=1, le=5, description="Base crowd level")

    model_config = ConfigDict(frozen=True)


class HourlyCrowd(BaseModel):
    """Estimated crowd level for one lift hour."""

    hour: int = Field(..., ge=0, le=23, description="Hour of day (24h)")
    crowd_level: int = Field(..., ge=1, le=5, description="1 (very light) to 5")
    source: str = Field(default="heuristic", description="heuristic, google, community")


class DailyCrowd(BaseModel):
    """Crowd prediction for a single date."""

    date: str = Field(..., description="Date (YYYY-MM-DD)")
    day_type: DayType = Field(..., description="weekday, weekend or holiday")
    holiday_name: str | None = Field(None, description="Holiday name if any")
    overall_level: int = Field(..., ge=1, le=5, description="Overall crowd level")
    hourly_breakdown: list[HourlyCrowd] = Field(
        ..., description="One entry per lift hour, 7am to 5pm"
    )
    peak_hours: str = Field(..., description="Busiest window, e.g. '9am – 12pm'")
    best_arrival_time: str = Field(..., description="e.g. 'Before 8:30am'")
    community_notes: list[str] = Field(
        default_factory=list, description="Community tips for the day"
    )

    model_config = ConfigDict(use_enum_values=True)

    @model_validator(mode="after")
    def validate_hourly_shape(self) -> "DailyCrowd":
        """Require exactly one entry per lift hour, in order."""
        hours = [h.hour for h in self.hourly_breakdown]
        expected = list(range(FIRST_LIFT_HOUR, LAST_LIFT_HOUR + 1))
        if hours != expected:
            raise ValueError(
                f"hourly_breakdown must cover hours {FIRST_LIFT_HOUR}-{LAST_LIFT_HOUR} in order"
            )
        return self
