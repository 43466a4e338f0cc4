"""Trip planning request models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Discipline(str, Enum):
    SKI = "ski"
    SNOWBOARD = "snowboard"


class SkillLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class Coordinates(BaseModel):
    """A point to fetch weather for."""

    latitude: float = Field(..., ge=-90, le=90, description="Latitude coordinate")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude coordinate")


class TripDates(BaseModel):
    """An inclusive trip date range."""

    start_date: str = Field(..., description="Trip start date (YYYY-MM-DD)")
    end_date: str = Field(..., description="Trip end date (YYYY-MM-DD)")

    @field_validator("start_date", "end_date")
    @classmethod
    def validate_date_format(cls, v: str) -> str:
        """Validate date format is YYYY-MM-DD."""
        try:
            datetime.strptime(v, "%Y-%m-%d")
            return v
        except ValueError:
            raise ValueError("Date must be in YYYY-MM-DD format")

    @field_validator("end_date")
    @classmethod
    def validate_end_after_start(cls, v: str, info) -> str:
        """Validate end date is after or equal to start date."""
        start_date = info.data.get("start_date")
        if start_date and v < start_date:
            raise ValueError("End date must be on or after start date")
        return v

    @property
    def duration_days(self) -> int:
        """Trip duration in days (inclusive)."""
        start = datetime.strptime(self.start_date, "%Y-%m-%d")
        end = datetime.strptime(self.end_date, "%Y-%m-%d")
        return (end - start).days + 1


class TripConfig(BaseModel):
    """A planned trip and the rider's profile."""

    trip_id: str = Field(..., description="Unique trip identifier")
    resort_id: str = Field(..., description="Resort for this trip")
    dates: TripDates
    discipline: Discipline = Field(default=Discipline.SKI, validate_default=True)
    skill_level: SkillLevel = Field(default=SkillLevel.INTERMEDIATE, validate_default=True)

    model_config = ConfigDict(use_enum_values=True)
