"""Episode models for the assembled series dataset."""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from ..constants.config import MAX_RATING, MIN_RATING
from ..errors import InvalidIndex


class PilotRef(BaseModel):
    """Reference to the pilot, which has no episode number of its own."""

    kind: Literal["pilot"] = "pilot"

    @property
    def sequence_number(self) -> int:
        return 0


class NumberedRef(BaseModel):
    """Reference to a regular numbered episode."""

    kind: Literal["numbered"] = "numbered"
    number: int = Field(..., ge=1, description="Episode number as used by the wiki")

    @property
    def sequence_number(self) -> int:
        return self.number


EpisodeRef = Annotated[Union[PilotRef, NumberedRef], Field(discriminator="kind")]


def episode_ref(index: int) -> Union[PilotRef, NumberedRef]:
    """
    Turn a sequence index into an episode reference.

    Args:
        index: 0 for the pilot, 1..N for numbered episodes

    Returns:
        PilotRef or NumberedRef

    Raises:
        InvalidIndex: if index is negative
    """
    if index < 0:
        raise InvalidIndex(f"Episode index must be >= 0, got {index}")
    if index == 0:
        return PilotRef()
    return NumberedRef(number=index)


def series_refs(episode_count: int) -> List[Union[PilotRef, NumberedRef]]:
    """Pilot followed by numbered episodes 1..episode_count, in broadcast order."""
    return [episode_ref(index) for index in range(episode_count + 1)]


class Episode(BaseModel):
    """Pydantic model for one episode of the assembled dataset."""

    sequence_number: int = Field(..., ge=0, description="0 for the pilot, 1..N otherwise")
    ref: EpisodeRef = Field(..., description="Pilot or numbered episode reference")
    title: Optional[str] = Field(
        default=None,
        description="Normalized title, None when the episode page was unavailable",
    )
    season: str = Field(..., description="Season label, e.g. 'Season 1'")
    rating: Optional[float] = Field(
        default=None,
        ge=MIN_RATING,
        le=MAX_RATING,
        description="User rating, None when no rating was scraped",
    )
    characters: List[str] = Field(
        default_factory=list,
        description="Character names in credit order",
    )
