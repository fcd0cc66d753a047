"""Character models derived from the episode dataset."""

from typing import Optional

from pydantic import BaseModel, Field


class CharacterAppearance(BaseModel):
    """One character credited in one episode."""

    sequence_number: int = Field(..., description="Sequence number of the episode")
    episode_title: Optional[str] = Field(default=None, description="Title of the episode")
    character_name: str = Field(..., description="Normalized character name")


class CharacterSummary(BaseModel):
    """Appearance count for one character across the series."""

    character_name: str = Field(..., description="Normalized character name")
    total_appearances: int = Field(..., ge=0, description="Number of appearance rows")
