"""CLI entry point for building the Twin Peaks dataset."""

import json
import logging
import sys

import click

from .config import PipelineConfig
from .constants.config import (
    EPISODE_COUNT,
    MAX_CONCURRENT_REQUESTS,
    MIN_APPEARANCES,
    REQUEST_TIMEOUT_SECONDS,
    VALID_SEASONS,
)
from .constants.urls import RATINGS_BASE_URL, WIKI_BASE_URL


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug output, including dropped credits")
def cli(verbose: bool):
    """Twin Peaks dataset - episode popularity and character prominence."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command("urls")
def urls():
    """Print every episode and season URL the scraper fetches.

    Examples:

        tpds urls
    """
    from .models.episode import series_refs
    from .scrapers.urls import build_episode_url, build_season_url

    config = PipelineConfig()
    for ref in series_refs(config.episode_count):
        click.echo(build_episode_url(ref, config.wiki_base_url))
    for season in config.seasons:
        click.echo(build_season_url(season, config.ratings_base_url))


@cli.command("scrape")
@click.option(
    "--concurrency",
    default=MAX_CONCURRENT_REQUESTS,
    type=click.IntRange(min=1),
    help=f"Number of concurrent requests (default: {MAX_CONCURRENT_REQUESTS})"
)
@click.option(
    "--timeout",
    default=REQUEST_TIMEOUT_SECONDS,
    type=click.FloatRange(min=0, min_open=True),
    help=f"Per-page timeout in seconds (default: {REQUEST_TIMEOUT_SECONDS})"
)
@click.option(
    "--min-appearances",
    default=MIN_APPEARANCES,
    type=click.IntRange(min=0),
    help=f"Only list characters credited in more episodes than this (default: {MIN_APPEARANCES})"
)
@click.option(
    "--episode-count",
    default=EPISODE_COUNT,
    type=click.IntRange(min=0),
    help=f"Numbered episodes after the pilot (default: {EPISODE_COUNT})"
)
@click.option(
    "--season", "seasons",
    multiple=True,
    type=int,
    default=VALID_SEASONS,
    help="Season to collect ratings for (can specify multiple, default: all)"
)
@click.option("--wiki-url", default=WIKI_BASE_URL, help="Base URL of the episode wiki")
@click.option("--ratings-url", default=RATINGS_BASE_URL, help="Base URL of the season ratings listing")
@click.option("--json", "as_json", is_flag=True, help="Print the views and report as JSON")
def scrape(
    concurrency: int,
    timeout: float,
    min_appearances: int,
    episode_count: int,
    seasons: tuple[int, ...],
    wiki_url: str,
    ratings_url: str,
    as_json: bool,
):
    """Scrape titles, ratings and cast credits and print both summary views.

    Examples:

        tpds scrape

        tpds scrape --min-appearances 5

        tpds scrape --concurrency 2 --json
    """
    from .errors import AlignmentError
    from .processors.aggregation import character_prominence_view, episode_popularity_view
    from .scrapers.episodes import run_pipeline

    config = PipelineConfig(
        wiki_base_url=wiki_url,
        ratings_base_url=ratings_url,
        seasons=seasons,
        episode_count=episode_count,
        concurrency=concurrency,
        timeout_seconds=timeout,
        min_appearances=min_appearances,
    )
    if not as_json:
        click.echo(f"Scraping {config.episode_count + 1} episodes with {concurrency} concurrent requests...")

    try:
        result = run_pipeline(config)
    except AlignmentError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    popularity = episode_popularity_view(result.episodes)
    prominence = character_prominence_view(result.episodes, config.min_appearances)

    if as_json:
        click.echo(json.dumps(
            {
                "episodes": [row.model_dump() for row in popularity],
                "characters": [row.model_dump() for row in prominence],
                "failures": [failure.model_dump() for failure in result.report.failures],
            },
            indent=2,
            ensure_ascii=False,
        ))
        return

    click.echo("\nEpisode popularity:")
    for row in popularity:
        rating = f"{row.rating:.{config.rating_precision}f}" if row.rating is not None else "n/a"
        click.echo(f"  {row.season}  {rating:>5}  {row.title or '(unavailable)'}")

    click.echo(f"\nCharacters in more than {config.min_appearances} episodes:")
    for row in prominence:
        click.echo(f"  {row.total_appearances:>3}  {row.character_name}")

    if result.report.has_failures:
        click.echo(f"\n{len(result.report.failures)} problems on {len(result.report.urls)} pages:", err=True)
        for failure in result.report.failures:
            click.echo(f"  [{failure.kind}] {failure.message}", err=True)
