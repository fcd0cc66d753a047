"""Join scraped titles, ratings and character lists into the episode dataset."""

import logging
from typing import List, Mapping, Optional, Sequence

from ..constants.config import TITLE_CORRECTIONS
from ..errors import AlignmentError
from ..models.episode import Episode, episode_ref

logger = logging.getLogger(__name__)


def season_label(season: int) -> str:
    return f"Season {season}"


def correct_title(title: Optional[str]) -> Optional[str]:
    """Replace titles the wiki records under an alternate name with the fan-recognized one."""
    if title is None:
        return None
    for marker, replacement in TITLE_CORRECTIONS.items():
        if marker in title:
            return replacement
    return title


def assemble(
    titles: Sequence[Optional[str]],
    ratings_by_season: Mapping[int, Sequence[Optional[float]]],
    characters_by_episode: Sequence[Sequence[str]],
) -> List[Episode]:
    """
    Build the episode dataset by joining the three sources on position.

    Args:
        titles: Normalized titles in broadcast order, pilot first
        ratings_by_season: Ratings per season number, each in broadcast order
        characters_by_episode: Character names per episode, pilot first

    Returns:
        Episodes in broadcast order

    Raises:
        AlignmentError: if the three sources do not have the same length
    """
    rating_count = sum(len(ratings) for ratings in ratings_by_season.values())
    if not len(titles) == rating_count == len(characters_by_episode):
        raise AlignmentError(len(titles), rating_count, len(characters_by_episode))

    seasons: List[str] = []
    ratings: List[Optional[float]] = []
    for season in sorted(ratings_by_season):
        season_ratings = ratings_by_season[season]
        seasons.extend([season_label(season)] * len(season_ratings))
        ratings.extend(season_ratings)

    episodes: List[Episode] = []
    for index, (title, season, rating, characters) in enumerate(
        zip(titles, seasons, ratings, characters_by_episode)
    ):
        ref = episode_ref(index)
        episodes.append(
            Episode(
                sequence_number=ref.sequence_number,
                ref=ref,
                title=correct_title(title),
                season=season,
                rating=rating,
                characters=list(characters),
            )
        )

    logger.info("Assembled %d episodes across %d seasons", len(episodes), len(ratings_by_season))
    return episodes
