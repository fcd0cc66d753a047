"""Source URL builders for episode and season pages."""

from typing import Union

from ..constants.config import VALID_SEASONS
from ..constants.urls import (
    EPISODE_PAGE_PATTERN,
    PILOT_PAGE,
    RATINGS_BASE_URL,
    SEASON_QUERY_PATTERN,
    WIKI_BASE_URL,
)
from ..errors import InvalidIndex
from ..models.episode import NumberedRef, PilotRef, episode_ref


def build_episode_url(
    episode: Union[int, PilotRef, NumberedRef],
    base_url: str = WIKI_BASE_URL,
) -> str:
    """
    Build the wiki URL of an episode page.

    Args:
        episode: Sequence index (0 is the pilot) or an episode reference
        base_url: Wiki base URL

    Returns:
        The episode page URL; the pilot has its own page name

    Raises:
        InvalidIndex: if an integer index is negative
    """
    ref = episode_ref(episode) if isinstance(episode, int) else episode
    if isinstance(ref, PilotRef):
        return f"{base_url}/{PILOT_PAGE}"
    return f"{base_url}/{EPISODE_PAGE_PATTERN.format(number=ref.number)}"


def build_season_url(season: int, base_url: str = RATINGS_BASE_URL) -> str:
    """
    Build the ratings listing URL for a season.

    Raises:
        InvalidIndex: if the season has no ratings page
    """
    if season not in VALID_SEASONS:
        raise InvalidIndex(f"Season must be one of {VALID_SEASONS}, got {season}")
    return f"{base_url}?{SEASON_QUERY_PATTERN.format(season=season)}"
