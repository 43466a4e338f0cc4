"""Resort data models."""

from pydantic import BaseModel, ConfigDict, Field

from .weather import Region


class Resort(BaseModel):
    """Ski resort as consumed from the static resort catalog."""

    resort_id: str = Field(..., description="Unique identifier, e.g. 'heavenly-tahoe'")
    name: str = Field(..., description="Resort display name")
    region: str = Field(..., description="Display region, e.g. 'Lake Tahoe'")
    state: str | None = Field(None, description="State/Province code")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude coordinate")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude coordinate")
    ride_region: Region = Field(
        default=Region.EAST, description="Snowpack region used for scoring"
    )
    subreddit: str | None = Field(None, description="Community subreddit, e.g. 'tahoe'")

    model_config = ConfigDict(use_enum_values=True)
