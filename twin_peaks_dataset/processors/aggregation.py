"""Character appearance aggregation and the presenter views."""

from typing import Dict, Iterable, List, Sequence

from ..constants.config import MIN_APPEARANCES
from ..models.character import CharacterAppearance, CharacterSummary
from ..models.episode import Episode
from ..models.views import CharacterProminence, EpisodePopularity


def expand_appearances(episodes: Iterable[Episode]) -> List[CharacterAppearance]:
    """One row per (episode, character), in episode order then credit order."""
    return [
        CharacterAppearance(
            sequence_number=episode.sequence_number,
            episode_title=episode.title,
            character_name=name,
        )
        for episode in episodes
        for name in episode.characters
    ]


def summarize(appearances: Iterable[CharacterAppearance]) -> List[CharacterSummary]:
    """
    Count appearance rows per character.

    Names are grouped by exact, case-sensitive match. Results are sorted by
    count descending; characters with equal counts keep the order in which
    they were first seen.
    """
    counts: Dict[str, int] = {}
    for appearance in appearances:
        counts[appearance.character_name] = counts.get(appearance.character_name, 0) + 1

    # sorted() is stable and dicts keep insertion order, so ties stay first-seen
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [
        CharacterSummary(character_name=name, total_appearances=count)
        for name, count in ranked
    ]


def filter_by_minimum(summaries: Sequence[CharacterSummary], threshold: int) -> List[CharacterSummary]:
    """Keep characters with strictly more than threshold appearances, order preserved."""
    return [summary for summary in summaries if summary.total_appearances > threshold]


def episode_popularity_view(episodes: Iterable[Episode]) -> List[EpisodePopularity]:
    return [
        EpisodePopularity(title=episode.title, season=episode.season, rating=episode.rating)
        for episode in episodes
    ]


def character_prominence_view(
    episodes: Sequence[Episode],
    threshold: int = MIN_APPEARANCES,
) -> List[CharacterProminence]:
    """Characters credited in more than threshold episodes, most prominent first."""
    summaries = filter_by_minimum(summarize(expand_appearances(episodes)), threshold)
    return [
        CharacterProminence(
            character_name=summary.character_name,
            total_appearances=summary.total_appearances,
        )
        for summary in summaries
    ]
