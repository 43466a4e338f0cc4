"""Narrative resort insights and trip briefs from an LLM on AWS Bedrock."""

import hashlib
import json
import logging
import os
from datetime import UTC, datetime
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError as ModelValidationError

from models.crowd import DailyCrowd
from models.insights import ResortInsights, TripBrief
from models.resort import Resort
from models.trip import TripConfig
from models.weather import DailyWeather
from utils.cache import get_cache_key, get_insights_cache
from utils.constants import CROWD_LEVEL_LABELS
from utils.exceptions import InsightGenerationError

logger = logging.getLogger(__name__)

BEDROCK_MODEL_ID = os.environ.get(
    "BEDROCK_MODEL_ID", "us.anthropic.claude-sonnet-4-20250514-v1:0"
)
BEDROCK_REGION = os.environ.get("BEDROCK_REGION", "us-west-2")

SYSTEM_PROMPT = (
    "You are a local ski expert helping trip planners. "
    "Respond with a single JSON object and nothing else."
)

WINDY_DAY_KMH = 40
WET_DAY_PROBABILITY = 60

RESORT_INSIGHTS_SCHEMA = """{
  "overview": "2-3 sentence resort character summary",
  "local_tips": ["5-8 actionable insider tips"],
  "best_runs_by_level": {
    "beginner": ["run names"],
    "intermediate": ["run names"],
    "advanced": ["run names"],
    "expert": ["run names"]
  },
  "hidden_gems": ["lesser-known spots locals love"],
  "avoid_list": ["tourist traps, inefficient lifts, overpriced spots"],
  "food_recs": {"on_mountain": ["lodges/restaurants"], "base": ["nearby town spots"]},
  "parking_strategy": "when to arrive, which lots, tips",
  "crowd_patterns": "general crowd behavior and patterns"
}"""

TRIP_BRIEF_SCHEMA = """{
  "summary": "3-4 sentences mentioning the specific temperatures and conditions",
  "daily_game_plan": [
    {
      "date": "YYYY-MM-DD",
      "recommendation": "Specific advice for this day",
      "best_time_slot": "e.g. 8:30am-11am",
      "target_zones": ["areas of the mountain to hit"]
    }
  ],
  "gear_considerations": ["gear advice matching the temperature range"],
  "warnings_and_alerts": ["weather, crowd or closure warnings"]
}"""


def create_bedrock_client(region_name: str = BEDROCK_REGION):
    """Build a Bedrock runtime client for InsightService."""
    return boto3.client("bedrock-runtime", region_name=region_name)


def weather_fingerprint(weather: list[DailyWeather]) -> str:
    """Stable hash of the forecast a brief was generated from."""
    payload = json.dumps([w.model_dump() for w in weather], sort_keys=True)
    return hashlib.sha256(payload.encode()).hexdigest()[:16]


def _parse_json(text: str) -> dict[str, Any]:
    """Parse a JSON object, tolerating a fenced code block around it."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.strip("`")
        if cleaned.startswith("json"):
            cleaned = cleaned[len("json"):]
    data = json.loads(cleaned)
    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object")
    return data


class InsightService:
    """Generate narrative insights using an injected Bedrock runtime client."""

    def __init__(self, bedrock_client, model_id: str = BEDROCK_MODEL_ID):
        """Initialize the insight service.

        Args:
            bedrock_client: Object with a Bedrock ``converse`` method
            model_id: Bedrock model identifier
        """
        self.bedrock = bedrock_client
        self.model_id = model_id

    def generate_resort_insights(
        self, resort: Resort, community_context: str | None = None
    ) -> ResortInsights:
        """Summarize community knowledge about a resort.

        Raises:
            InsightGenerationError: If the model call fails or returns bad JSON
        """
        cache = get_insights_cache()
        cache_key = get_cache_key("resort", resort.resort_id, community_context)
        if cache_key in cache:
            return cache[cache_key]

        if community_context:
            context = (
                "Based on the following community discussions and reviews:\n"
                f"<community_data>\n{community_context}\n</community_data>"
            )
        else:
            context = (
                "Using your knowledge as a local ski expert and reputable sources "
                "(e.g., OnTheSnow, PeakRankings),"
            )

        prompt = (
            f"You are synthesizing community knowledge about {resort.name} "
            f"({resort.region}).\n\n{context}\n\n"
            f"Generate insights in the following JSON structure:\n{RESORT_INSIGHTS_SCHEMA}\n\n"
            "Be specific. Use actual run names, lift names, and locations."
        )

        data = self._generate(prompt)
        try:
            insights = ResortInsights(
                **{
                    **data,
                    "resort_id": resort.resort_id,
                    "generated_at": datetime.now(UTC).isoformat(),
                    "sources": ["Reddit", "Forums"] if community_context else [],
                }
            )
        except (ModelValidationError, TypeError) as e:
            raise InsightGenerationError(f"Malformed resort insights: {e}") from e

        cache[cache_key] = insights
        return insights

    def generate_trip_brief(
        self,
        trip: TripConfig,
        weather: list[DailyWeather],
        crowds: list[DailyCrowd],
        insights: ResortInsights | None,
        resort_name: str,
    ) -> TripBrief:
        """Build a day-by-day plan grounded in the exact forecast values.

        Raises:
            InsightGenerationError: If the model call fails or returns bad JSON
        """
        prompt = build_trip_brief_prompt(trip, weather, crowds, insights, resort_name)
        data = self._generate(prompt)
        try:
            return TripBrief(
                **{
                    **data,
                    "trip_id": trip.trip_id,
                    "generated_at": datetime.now(UTC).isoformat(),
                    "weather_fingerprint": weather_fingerprint(weather),
                }
            )
        except (ModelValidationError, TypeError) as e:
            raise InsightGenerationError(f"Malformed trip brief: {e}") from e

    def _generate(self, prompt: str) -> dict[str, Any]:
        try:
            response = self.bedrock.converse(
                modelId=self.model_id,
                system=[{"text": SYSTEM_PROMPT}],
                messages=[{"role": "user", "content": [{"text": prompt}]}],
                inferenceConfig={"maxTokens": 2048, "temperature": 0.4},
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Bedrock call failed: {e}")
            raise InsightGenerationError(f"Failed to generate insights: {e}") from e

        blocks = response.get("output", {}).get("message", {}).get("content", [])
        text = "".join(b["text"] for b in blocks if "text" in b)
        try:
            return _parse_json(text)
        except ValueError as e:
            logger.error(f"Model returned non-JSON output: {text[:200]!r}")
            raise InsightGenerationError(f"Model returned invalid JSON: {e}") from e


def build_trip_brief_prompt(
    trip: TripConfig,
    weather: list[DailyWeather],
    crowds: list[DailyCrowd],
    insights: ResortInsights | None,
    resort_name: str,
) -> str:
    """Prompt for a trip brief, quoting the forecast so the model cannot drift."""
    temp_min = min((d.temp_min for d in weather), default=0.0)
    temp_max = max((d.temp_max for d in weather), default=0.0)
    total_snow = sum(d.snowfall_sum for d in weather)
    snow_days = [d.date for d in weather if d.snowfall_sum > 0]
    windy_days = [d.date for d in weather if d.wind_speed_max > WINDY_DAY_KMH]

    weather_lines = []
    for d in weather:
        conditions = []
        if d.snowfall_sum > 0:
            conditions.append(f"{d.snowfall_sum}cm snow")
        if d.wind_speed_max > WINDY_DAY_KMH:
            conditions.append(f"windy ({d.wind_speed_max}km/h)")
        if d.precipitation_probability > WET_DAY_PROBABILITY:
            conditions.append(f"{d.precipitation_probability:.0f}% precip")
        suffix = f" - {', '.join(conditions)}" if conditions else ""
        weather_lines.append(f"{d.date}: {d.temp_min}°C to {d.temp_max}°C{suffix}")

    crowd_lines = []
    for c in crowds:
        if c.holiday_name:
            note = f" ({c.holiday_name})"
        elif c.day_type == "weekend":
            note = " (Weekend)"
        else:
            note = ""
        crowd_lines.append(f"{c.date}: {CROWD_LEVEL_LABELS[c.overall_level]}{note}")

    best_runs = "See trail map"
    tips = "None available"
    if insights:
        runs = getattr(insights.best_runs_by_level, trip.skill_level, [])
        best_runs = ", ".join(runs) or best_runs
        tips = "; ".join(insights.local_tips[:3]) or tips

    notes = []
    if temp_max > 5:
        notes.append("NOTE: This is a WARM trip. Do NOT recommend heavy insulation.")
    if temp_min < -10:
        notes.append("NOTE: This is a COLD trip. Emphasize warmth and skin protection.")
    if total_snow > 30:
        notes.append("NOTE: Significant snow expected. Mention powder strategy.")

    sections = [
        "You are generating a ski trip brief. You MUST use the exact weather data provided below.",
        "## TRIP INFO",
        f"- Resort: {resort_name}",
        f"- Dates: {trip.dates.start_date} to {trip.dates.end_date}",
        f"- Rider: {trip.skill_level} {trip.discipline}",
        "## WEATHER FORECAST (USE THESE EXACT VALUES)",
        f"Temperature range for trip: {temp_min}°C to {temp_max}°C",
        f"Total snowfall expected: {total_snow:g}cm",
        f"Snow days: {', '.join(snow_days)}" if snow_days else "No snow expected",
    ]
    if windy_days:
        sections.append(f"High wind days: {', '.join(windy_days)}")
    sections += [
        "Daily breakdown:",
        *weather_lines,
        "## CROWD FORECAST",
        *crowd_lines,
        "## RESORT INFO",
        f"Best runs for {trip.skill_level}: {best_runs}",
        f"Local tips: {tips}",
        *notes,
        f"Generate a JSON response with one daily_game_plan entry per date "
        f"({', '.join(d.date for d in weather)}) in this structure:",
        TRIP_BRIEF_SCHEMA,
    ]
    return "\n".join(sections)
