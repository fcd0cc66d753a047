"""Read-only views handed to a chart presenter."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class EpisodePopularity(BaseModel):
    """One bar of the episode popularity chart."""

    model_config = ConfigDict(frozen=True)

    title: Optional[str] = Field(default=None, description="Episode title")
    season: str = Field(..., description="Season label")
    rating: Optional[float] = Field(default=None, description="User rating, None if missing")


class CharacterProminence(BaseModel):
    """One bar of the character prominence chart."""

    model_config = ConfigDict(frozen=True)

    character_name: str = Field(..., description="Character name")
    total_appearances: int = Field(..., description="Number of episodes the character is credited in")
