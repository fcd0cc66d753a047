"""Episode scraper for the Twin Peaks Wiki and the season ratings listings."""

import asyncio
import logging
import re
from typing import Dict, List, Optional, Sequence, Tuple

from ..config import PipelineConfig
from ..constants.config import MAX_RATING, MIN_RATING, RATING_PRECISION, SEASON_EPISODE_COUNTS
from ..constants.urls import CAST_CREDIT_SELECTOR, EPISODE_TITLE_SELECTOR, RATING_SELECTOR
from ..errors import ExtractionMiss, InvalidIndex
from ..models.episode import series_refs
from ..models.report import BatchReport, PipelineResult
from ..processors.credits import characters_from_credits
from ..processors.dataset import assemble
from ..utils.extraction import extract_many, parse_html, require_single
from ..utils.normalization import collapse_whitespace, normalize_title
from .fetch import fetch_pages
from .urls import build_episode_url, build_season_url

logger = logging.getLogger(__name__)

_RATING_RE = re.compile(r"\d+(?:\.\d+)?")


def parse_episode_page(html: str, url: str, report: BatchReport) -> Tuple[Optional[str], List[str]]:
    """
    Parse an episode page into its title and credited characters.

    A missing title is recorded in the report and returned as None.

    Args:
        html: Raw HTML content
        url: Page URL, used for reporting
        report: Batch report to record gaps in

    Returns:
        Tuple of (normalized title or None, character names)
    """
    document = parse_html(html)

    title: Optional[str] = None
    try:
        title = normalize_title(require_single(document, EPISODE_TITLE_SELECTOR, url)) or None
    except ExtractionMiss as e:
        report.record(url, e)

    credits = extract_many(document, CAST_CREDIT_SELECTOR)
    if not credits:
        report.record(url, ExtractionMiss(url, CAST_CREDIT_SELECTOR))
    characters = characters_from_credits(credits)
    logger.debug("%s: %r with %d of %d credits kept", url, title, len(characters), len(credits))
    return title, characters


def parse_rating(text: str, precision: int = RATING_PRECISION) -> Optional[float]:
    """
    Parse a rating like '8.7' or '8.7/10'.

    Returns:
        The rating rounded to precision decimals, or None if the text holds
        no number in the valid range
    """
    match = _RATING_RE.search(text)
    if match is None:
        return None
    rating = round(float(match.group()), precision)
    if not MIN_RATING <= rating <= MAX_RATING:
        return None
    return rating


def parse_season_ratings(
    html: str,
    url: str,
    report: BatchReport,
    precision: int = RATING_PRECISION,
    expected_count: int = 0,
) -> List[Optional[float]]:
    """
    Parse a season listing into one rating per episode, None where it is unreadable.

    A listing without any ratings is recorded in the report and yields
    expected_count missing ratings, so the season still lines up with its
    episodes.
    """
    document = parse_html(html)
    texts = extract_many(document, RATING_SELECTOR)
    if not texts:
        report.record(url, ExtractionMiss(url, RATING_SELECTOR))
        return [None] * expected_count

    ratings: List[Optional[float]] = []
    for text in texts:
        rating = parse_rating(collapse_whitespace(text), precision)
        if rating is None:
            report.record(url, ExtractionMiss(url, f"{RATING_SELECTOR} (unreadable {text!r})"))
        ratings.append(rating)
    return ratings


def expected_season_counts(seasons: Sequence[int], episode_total: int) -> Dict[int, int]:
    """
    How many episodes each season covers in a run of episode_total episodes.

    Seasons take their broadcast episode count in order, capped at whatever
    is left, so a shortened run still gives every season a matching count.
    """
    counts: Dict[int, int] = {}
    remaining = episode_total
    for season in sorted(seasons):
        counts[season] = min(SEASON_EPISODE_COUNTS[season], remaining)
        remaining -= counts[season]
    return counts


async def scrape_series(config: Optional[PipelineConfig] = None) -> PipelineResult:
    """
    Fetch every episode page and season listing, then assemble the dataset.

    Pages that fail to fetch do not stop the run: an episode page failure
    leaves the episode without title and characters, a season page failure
    leaves that season's episodes without ratings. Each gap is recorded in
    the returned report.

    Args:
        config: Pipeline settings (defaults when None)

    Returns:
        PipelineResult with the episodes and the batch report

    Raises:
        AlignmentError: if titles, ratings and character lists cannot be joined
    """
    config = config or PipelineConfig()
    report = BatchReport()

    episode_urls = [build_episode_url(ref, config.wiki_base_url) for ref in series_refs(config.episode_count)]
    season_urls: Dict[int, str] = {}
    for season in config.seasons:
        try:
            season_urls[season] = build_season_url(season, config.ratings_base_url)
        except InvalidIndex as e:
            report.record(f"season:{season}", e)

    logger.info(
        "Fetching %d episode pages and %d season pages with %d concurrent requests",
        len(episode_urls),
        len(season_urls),
        config.concurrency,
    )
    results = await fetch_pages(
        [*episode_urls, *season_urls.values()],
        concurrency=config.concurrency,
        timeout=config.timeout_seconds,
    )
    episode_results = results[: len(episode_urls)]
    season_results = dict(zip(season_urls, results[len(episode_urls):]))

    titles: List[Optional[str]] = []
    characters_by_episode: List[List[str]] = []
    for result in episode_results:
        if not result.ok:
            report.record(result.url, result.error)
            titles.append(None)
            characters_by_episode.append([])
            continue
        title, characters = parse_episode_page(result.html, result.url, report)
        titles.append(title)
        characters_by_episode.append(characters)

    season_counts = expected_season_counts(list(season_urls), len(episode_urls))
    ratings_by_season: Dict[int, List[Optional[float]]] = {}
    for season, result in season_results.items():
        if not result.ok:
            report.record(result.url, result.error)
            ratings_by_season[season] = [None] * season_counts[season]
            continue
        ratings_by_season[season] = parse_season_ratings(
            result.html, result.url, report, config.rating_precision, season_counts[season]
        )

    episodes = assemble(titles, ratings_by_season, characters_by_episode)
    if report.has_failures:
        logger.warning("%d pages had missing data", len(report.urls))
    return PipelineResult(episodes=episodes, report=report)


def run_pipeline(config: Optional[PipelineConfig] = None) -> PipelineResult:
    """Synchronous entry point for scrape_series."""
    return asyncio.run(scrape_series(config))
