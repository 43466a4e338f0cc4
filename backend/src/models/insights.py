"""Output schema of the narrative insight generator."""

from pydantic import BaseModel, Field


class RunsByLevel(BaseModel):
    beginner: list[str] = Field(default_factory=list)
    intermediate: list[str] = Field(default_factory=list)
    advanced: list[str] = Field(default_factory=list)
    expert: list[str] = Field(default_factory=list)


class FoodRecommendations(BaseModel):
    on_mountain: list[str] = Field(default_factory=list)
    base: list[str] = Field(default_factory=list)


class ResortInsights(BaseModel):
    """Community-sourced overview and tips for a resort."""

    resort_id: str
    generated_at: str = Field(..., description="ISO timestamp of generation")
    overview: str = Field(..., description="2-3 sentence resort summary")
    local_tips: list[str] = Field(default_factory=list)
    best_runs_by_level: RunsByLevel = Field(default_factory=RunsByLevel)
    hidden_gems: list[str] = Field(default_factory=list)
    avoid_list: list[str] = Field(default_factory=list)
    food_recs: FoodRecommendations = Field(default_factory=FoodRecommendations)
    parking_strategy: str = ""
    crowd_patterns: str = ""
    sources: list[str] = Field(default_factory=list)


class DailyGamePlan(BaseModel):
    date: str
    recommendation: str
    best_time_slot: str = ""
    target_zones: list[str] = Field(default_factory=list)


class TripBrief(BaseModel):
    """Personalized plan for a trip built from forecast and crowd data."""

    trip_id: str
    generated_at: str
    weather_fingerprint: str | None = None
    summary: str
    daily_game_plan: list[DailyGamePlan] = Field(default_factory=list)
    gear_considerations: list[str] = Field(default_factory=list)
    warnings_and_alerts: list[str] = Field(default_factory=list)
