"""Mock wiki and ratings site for pipeline tests.

Serves a four episode slice of the series: the pilot plus episodes 1-3,
all in season 1. Episode pages mimic the wiki layout (portable infobox
title, a Cast section followed by a Notes section); the season page mimics
the ratings listing.
"""

import asyncio
from dataclasses import dataclass, field
from html import escape

from aiohttp import web

from twin_peaks_dataset.config import PipelineConfig


@dataclass
class MockEpisode:
    """An episode page on the mock wiki."""

    page: str
    title_html: str
    credits: list[str]
    notes: list[str] = field(default_factory=list)


EPISODES: list[MockEpisode] = [
    MockEpisode(
        page="Pilot",
        title_html="Northwest Passage",
        credits=[
            "Kyle MacLachlan as Dale Cooper",
            "Michael Ontkean as Harry S. Truman",
            "Sheryl Lee as Laura Palmer",
            "Julee Cruise as Roadhouse Singer (performer)",
            "Frank Silva as Killer BOB (credit only)",
        ],
        notes=["Directed by David Lynch"],
    ),
    MockEpisode(
        page="Episode_1",
        title_html="Traces to Nowhere<sup>[1]</sup>",
        credits=[
            "Kyle MacLachlan as Dale Cooper",
            "Michael Ontkean as Harry S. Truman",
            "Sheryl Lee as Laura Palmer (archive footage)",
            "Al Strobel as Phillip Gerard, the One-Armed Man",
        ],
    ),
    MockEpisode(
        page="Episode_2",
        title_html="Zen, or the Skill to Catch a Killer",
        credits=[
            "Kyle MacLachlan as   Dale Cooper",
            "Michael Ontkean as Harry S. Truman",
            "Catherine E. Coulson as Margaret Lanterman, the Log Lady",
            "Lara Flynn Boyle as Donna Hayward (Invitation To Love)",
        ],
        notes=["Written by Mark Frost"],
    ),
    MockEpisode(
        page="Episode_3",
        title_html="Or: The Night of Decision <sup>[2]</sup>",
        credits=[
            "Kyle MacLachlan as Dale Cooper",
            "Jan D'Arcy as Sylvia Horne",
            "Dana Ashbrook as Bobby Briggs",
        ],
    ),
]

EXPECTED_TITLES = [
    "Northwest Passage",
    "Traces to Nowhere",
    "Zen, or the Skill to Catch a Killer",
    "Miss Twin Peaks",
]

EXPECTED_CHARACTERS = [
    ["Dale Cooper", "Harry S. Truman", "Laura Palmer"],
    ["Dale Cooper", "Harry S. Truman", "Phillip Gerard"],
    ["Dale Cooper", "Harry S. Truman"],
    ["Dale Cooper", "Sylvia Horne", "Bobby Briggs"],
]

SEASON_RATINGS: dict[int, list[str]] = {
    1: ["8.9", "8.2", "8.04", "7.6"],
}


def generate_episode_html(episode: MockEpisode) -> str:
    """Render an episode page in the wiki's layout."""
    credits = "\n".join(f"<li>{escape(credit)}</li>" for credit in episode.credits)
    notes = "\n".join(f"<li>{escape(note)}</li>" for note in episode.notes)
    return f"""<html><body>
<aside class="portable-infobox">
<h2 class="pi-item pi-item-spacer pi-title" data-source="title">{episode.title_html}</h2>
</aside>
<div class="mw-parser-output">
<h2><span class="mw-headline" id="Cast">Cast</span></h2>
<ul>
{credits}
</ul>
<h2><span class="mw-headline" id="Notes">Notes</span></h2>
<ul>
{notes}
</ul>
</div>
</body></html>"""


def generate_season_html(ratings: list[str]) -> str:
    """Render a season listing with one rating per episode."""
    items = "\n".join(
        f'<article class="episode-item"><span class="ipc-rating-star--rating">{rating}</span>'
        f'<span class="ipc-rating-star--voteCount">(2.1K)</span></article>'
        for rating in ratings
    )
    return f"<html><body><section>{items}</section></body></html>"


def create_app(
    episodes: list[MockEpisode] = EPISODES,
    season_ratings: dict[int, list[str]] = SEASON_RATINGS,
    broken_paths: frozenset[str] = frozenset(),
    slow_paths: frozenset[str] = frozenset(),
    slow_seconds: float = 1.0,
    garbled_paths: frozenset[str] = frozenset(),
) -> web.Application:
    """Create the aiohttp application serving the mock wiki and ratings listing.

    Args:
        episodes: Episode pages served under /wiki/<page>
        season_ratings: Ratings listed per season under /episodes?season=N
        broken_paths: Paths (path plus query) that answer with HTTP 500
        slow_paths: Paths that wait slow_seconds before answering
        garbled_paths: Paths that answer with bytes that are not valid UTF-8

    Returns:
        Configured aiohttp Application.
    """
    pages = {episode.page: episode for episode in episodes}

    async def guard(request: web.Request) -> web.Response | None:
        if request.path_qs in slow_paths:
            await asyncio.sleep(slow_seconds)
        if request.path_qs in broken_paths:
            raise web.HTTPInternalServerError()
        if request.path_qs in garbled_paths:
            return web.Response(body=b"<html>\xff\xfe\xfa</html>", content_type="text/html", charset="utf-8")
        return None

    async def handle_episode(request: web.Request) -> web.Response:
        garbled = await guard(request)
        if garbled is not None:
            return garbled
        episode = pages.get(request.match_info["page"])
        if episode is None:
            raise web.HTTPNotFound()
        return web.Response(text=generate_episode_html(episode), content_type="text/html")

    async def handle_season(request: web.Request) -> web.Response:
        garbled = await guard(request)
        if garbled is not None:
            return garbled
        ratings = season_ratings.get(int(request.query.get("season", "0")))
        if ratings is None:
            raise web.HTTPNotFound()
        return web.Response(text=generate_season_html(ratings), content_type="text/html")

    app = web.Application()
    app.router.add_get("/wiki/{page}", handle_episode)
    app.router.add_get("/episodes", handle_season)
    return app


def config_for(url: str, **overrides) -> PipelineConfig:
    """Pipeline config pointed at a mock site serving the mock episodes."""
    settings = dict(
        wiki_base_url=f"{url}/wiki",
        ratings_base_url=f"{url}/episodes",
        seasons=(1,),
        episode_count=len(EPISODES) - 1,
        concurrency=2,
        timeout_seconds=5.0,
    )
    settings.update(overrides)
    return PipelineConfig(**settings)
