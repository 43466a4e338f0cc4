"""Single-day ridability scoring.

The score starts at 50 and each rule in RIDABILITY_RULES adds or subtracts
points. Rules are evaluated in a fixed order and every triggered rule appends
its reason, so the reasons read in the same order for every day.
"""

from collections.abc import Callable
from typing import NamedTuple

from models.spy import BestWindow, Ridability, RidabilityLabel
from models.weather import DailyWeather, RecentWeather, Region
from utils.constants import (
    RAIN_WEATHER_CODES,
    RIDABILITY_BASE_SCORE,
    RIDABILITY_MAX_SCORE,
    RIDABILITY_MIN_SCORE,
)


class RegionProfile(NamedTuple):
    """Region-specific knobs for the scorer and window advisor."""

    rain_multiplier: float
    corn_window: BestWindow


REGION_PROFILES: dict[str, RegionProfile] = {
    Region.EAST.value: RegionProfile(
        rain_multiplier=1.2,
        corn_window=BestWindow(window="9am–11am", note="Wait for crust to soften."),
    ),
    Region.WEST.value: RegionProfile(
        rain_multiplier=1.0,
        corn_window=BestWindow(window="11am–2pm", note="Late morning corn snow."),
    ),
}


def get_region_profile(region: Region | str | None) -> RegionProfile:
    """Profile for a region; unknown regions score like the east."""
    key = region.value if isinstance(region, Region) else region
    return REGION_PROFILES.get(key or Region.EAST.value, REGION_PROFILES[Region.EAST.value])


class RuleResult(NamedTuple):
    points: float
    reason: str


Rule = Callable[[DailyWeather, RecentWeather, RegionProfile], RuleResult | None]

# (minimum snowfall cm, points, reason), highest tier first
SNOWFALL_TIERS: list[tuple[float, float, str]] = [
    (20.0, 20.0, "Deep fresh snow (>20cm)"),
    (10.0, 12.0, "Good snow accumulation (10-19cm)"),
    (3.0, 6.0, "Dusting of fresh snow"),
]

# (minimum precipitation mm, base penalty, reason), highest tier first
RAIN_TIERS: list[tuple[float, float, str]] = [
    (10.0, -20.0, "Heavy rain expected"),
    (3.0, -12.0, "Light rain / Wet conditions"),
    (float("-inf"), -6.0, "Possible drizzle"),
]

# (maximum tempMax °C, points, reason), coldest tier first; None means neutral
TEMPERATURE_TIERS: list[tuple[float, float, str | None]] = [
    (-6.0, 10.0, "Cold, preservable temps"),
    (-2.0, 6.0, "Cold enough"),
    (1.0, 0.0, None),
    (3.0, -8.0, "Warm (soft/heavy)"),
    (float("inf"), -15.0, "Very warm (slush/spring)"),
]

# (minimum wind km/h, points, reason), strongest tier first
WIND_TIERS: list[tuple[float, float, str]] = [
    (40.0, -6.0, "High winds"),
    (24.0, -3.0, "Breezy"),
]

# Daytime thaw above this max with a refreeze at or below this min
THAW_TEMP_MAX = 0.0
REFREEZE_TEMP_MIN = -4.0
# Rain only counts toward the mixed-precip check when it is this warm
RAIN_TEMP_MAX = 2.0


def is_rainy(day: DailyWeather) -> bool:
    """Rain code, or precipitation beyond the snowfall's water equivalent on a warm day."""
    if day.weather_code in RAIN_WEATHER_CODES:
        return True
    return day.estimated_rain_mm > 0 and day.temp_max > RAIN_TEMP_MAX


def is_corn_cycle(day: DailyWeather) -> bool:
    """Daytime thaw followed by a hard overnight refreeze."""
    return day.temp_max > THAW_TEMP_MAX and day.temp_min <= REFREEZE_TEMP_MIN


def snowfall_rule(day, recent, profile) -> RuleResult | None:
    for minimum, points, reason in SNOWFALL_TIERS:
        if day.snowfall_sum >= minimum:
            return RuleResult(points, reason)
    return None


def rain_rule(day, recent, profile) -> RuleResult | None:
    if not is_rainy(day):
        return None
    for minimum, penalty, reason in RAIN_TIERS:
        if day.precipitation_sum >= minimum:
            return RuleResult(penalty * profile.rain_multiplier, reason)
    return None


def temperature_rule(day, recent, profile) -> RuleResult | None:
    for maximum, points, reason in TEMPERATURE_TIERS:
        if day.temp_max <= maximum:
            return RuleResult(points, reason) if reason else None
    return None


def thaw_refreeze_rule(day, recent, profile) -> RuleResult | None:
    if is_corn_cycle(day):
        return RuleResult(8.0, "Corn snow cycle (Melt/Freeze)")
    return None


def wind_rule(day, recent, profile) -> RuleResult | None:
    for minimum, points, reason in WIND_TIERS:
        if day.wind_speed_max >= minimum:
            return RuleResult(points, reason)
    return None


RIDABILITY_RULES: list[Rule] = [
    snowfall_rule,
    rain_rule,
    temperature_rule,
    thaw_refreeze_rule,
    wind_rule,
]

# (minimum score, label), highest first
LABEL_THRESHOLDS: list[tuple[int, RidabilityLabel]] = [
    (90, RidabilityLabel.PRIME),
    (80, RidabilityLabel.GREAT),
    (60, RidabilityLabel.GOOD),
    (40, RidabilityLabel.FAIR),
]


def score_to_label(score: float) -> RidabilityLabel:
    for minimum, label in LABEL_THRESHOLDS:
        if score >= minimum:
            return label
    return RidabilityLabel.POOR


class RidabilityService:
    """Score how good a single day will be on the hill."""

    def __init__(self, rules: list[Rule] | None = None):
        self.rules = rules if rules is not None else RIDABILITY_RULES

    def score(
        self,
        day: DailyWeather,
        recent: RecentWeather | None = None,
        region: Region | str = Region.EAST,
    ) -> Ridability:
        """
        Score a day's forecast.

        Args:
            day: Forecast for the day being scored
            recent: Weather over the two preceding days
            region: east or west; scales the rain penalty

        Returns:
            Ridability with a 0-100 score, its label and triggered reasons
        """
        profile = get_region_profile(region)
        recent = recent or RecentWeather()

        score = RIDABILITY_BASE_SCORE
        reasons: list[str] = []
        for rule in self.rules:
            result = rule(day, recent, profile)
            if result is None:
                continue
            score += result.points
            reasons.append(result.reason)

        score = max(RIDABILITY_MIN_SCORE, min(RIDABILITY_MAX_SCORE, score))
        rounded = int(round(score))

        return Ridability(score=rounded, label=score_to_label(rounded), reasons=reasons)


def score_ridability(
    day: DailyWeather,
    recent: RecentWeather | None = None,
    region: Region | str = Region.EAST,
) -> Ridability:
    return RidabilityService().score(day, recent, region)
