"""Rule-based recommendation of the best time on the hill for a day."""

from collections.abc import Callable
from typing import NamedTuple

from models.spy import BestWindow
from models.weather import DailyWeather, Region
from services.ridability_service import RegionProfile, get_region_profile, is_corn_cycle


class WindowBranch(NamedTuple):
    name: str
    matches: Callable[[DailyWeather], bool]
    window: Callable[[RegionProfile], BestWindow]


def _fixed(window: str, note: str) -> Callable[[RegionProfile], BestWindow]:
    best = BestWindow(window=window, note=note)
    return lambda profile: best


# First matching branch wins; the last branch always matches.
WINDOW_BRANCHES: list[WindowBranch] = [
    WindowBranch(
        "powder",
        lambda d: d.snowfall_sum >= 10 and d.temp_max <= -2,
        _fixed("Opening to 11am", "Fresh tracks! Get there early."),
    ),
    WindowBranch(
        "windy",
        lambda d: d.wind_speed_max >= 40,
        _fixed("Midday sheltered areas", "High winds, stay low/trees."),
    ),
    WindowBranch(
        "cold_stable",
        lambda d: d.temp_max <= -4,
        _fixed("All day (best 9am–2pm)", "Cold & consistent surface."),
    ),
    WindowBranch(
        "corn_cycle",
        is_corn_cycle,
        lambda profile: profile.corn_window,
    ),
    WindowBranch(
        "warm",
        lambda d: d.temp_max >= 1,
        _fixed("Early morning only", "Before it gets too slushy/sticky."),
    ),
    WindowBranch(
        "default",
        lambda d: True,
        _fixed("9am–3pm", "Standard resort hours."),
    ),
]


class BestWindowService:
    """Pick exactly one recommended window per day."""

    def __init__(self, branches: list[WindowBranch] | None = None):
        self.branches = branches if branches is not None else WINDOW_BRANCHES

    def recommend(self, day: DailyWeather, region: Region | str = Region.EAST) -> BestWindow:
        profile = get_region_profile(region)
        for branch in self.branches:
            if branch.matches(day):
                return branch.window(profile)
        return WINDOW_BRANCHES[-1].window(profile)

    def matching_branch(self, day: DailyWeather) -> str:
        """Name of the branch that decides the window, for debugging and tests."""
        for branch in self.branches:
            if branch.matches(day):
                return branch.name
        return WINDOW_BRANCHES[-1].name


def recommend_best_window(day: DailyWeather, region: Region | str = Region.EAST) -> BestWindow:
    return BestWindowService().recommend(day, region)
