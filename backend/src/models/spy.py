"""Day-by-day conditions outlook ("spy mode") models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .resort import Resort
from .weather import DailyWeather, RecentWeather


class RidabilityLabel(str, Enum):
    """Qualitative bands of the ridability score."""

    POOR = "Poor"
    FAIR = "Fair"
    GOOD = "Good"
    GREAT = "Great"
    PRIME = "Prime"


class Ridability(BaseModel):
    """How favorable a day looks for skiing/riding."""

    score: int = Field(..., ge=0, le=100, description="0-100 composite score")
    label: RidabilityLabel = Field(..., description="Band for the score")
    reasons: list[str] = Field(
        default_factory=list, description="Triggered rules, in evaluation order"
    )

    model_config = ConfigDict(use_enum_values=True)


class BestWindow(BaseModel):
    """Recommended time on the hill for a day."""

    window: str = Field(..., description="e.g. 'Opening to 11am'")
    note: str = Field(..., description="Short reason for the window")

    model_config = ConfigDict(frozen=True)


class SpyDay(BaseModel):
    """One day of the conditions outlook."""

    date: str
    weather: DailyWeather
    ridability: Ridability
    best_window: BestWindow | None = None
    notes: list[str] = Field(default_factory=list)


class SpyReport(BaseModel):
    """Conditions outlook for a resort over the forecast horizon."""

    resort: Resort
    days: int = Field(..., description="Number of days in the report")
    data: list[SpyDay] = Field(default_factory=list)
    recent: RecentWeather = Field(default_factory=RecentWeather)
