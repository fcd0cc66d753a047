"""Shared fixtures: canned pages and a threaded mock site server."""

import asyncio
import socket
import threading
import time
from collections.abc import Callable, Generator
from contextlib import closing

import pytest
from aiohttp import web

from tests.mock_site import EPISODES, SEASON_RATINGS, create_app, generate_episode_html, generate_season_html
from twin_peaks_dataset.models.episode import Episode, episode_ref


def find_free_port() -> int:
    """Find a free port on localhost."""
    with closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind(("", 0))
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        return s.getsockname()[1]


class AioHttpTestServer:
    """Run an aiohttp app in a background thread so sync code can call it."""

    def __init__(self, app: web.Application, port: int) -> None:
        self.app = app
        self.port = port
        self.host = "127.0.0.1"
        self._loop: asyncio.AbstractEventLoop | None = None
        self._runner: web.AppRunner | None = None
        self._thread: threading.Thread | None = None

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def start(self) -> None:
        self._thread = threading.Thread(target=self._run_server, daemon=True)
        self._thread.start()
        time.sleep(0.1)

    def _run_server(self) -> None:
        self._loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self._loop)

        async def start() -> None:
            self._runner = web.AppRunner(self.app)
            await self._runner.setup()
            site = web.TCPSite(self._runner, self.host, self.port)
            await site.start()

        self._loop.run_until_complete(start())
        self._loop.run_forever()

    def stop(self) -> None:
        if self._loop and self._runner:
            future = asyncio.run_coroutine_threadsafe(self._runner.cleanup(), self._loop)
            try:
                future.result(timeout=2.0)
            except Exception:
                pass  # Best effort cleanup

        if self._loop:
            self._loop.call_soon_threadsafe(self._loop.stop)

        if self._thread:
            self._thread.join(timeout=2.0)


@pytest.fixture
def mock_site() -> Generator[Callable[..., AioHttpTestServer], None, None]:
    """Factory starting a mock site server; create_app kwargs customize it.

    Every server started through the factory is stopped at teardown.
    """
    servers: list[AioHttpTestServer] = []

    def start(**app_kwargs) -> AioHttpTestServer:
        server = AioHttpTestServer(create_app(**app_kwargs), find_free_port())
        server.start()
        servers.append(server)
        return server

    yield start

    for server in servers:
        server.stop()


@pytest.fixture
def site_url(mock_site) -> str:
    """Base URL of a mock site serving the default episodes and ratings."""
    return mock_site().url


@pytest.fixture
def pilot_html() -> str:
    return generate_episode_html(EPISODES[0])


@pytest.fixture
def season_html() -> str:
    return generate_season_html(SEASON_RATINGS[1])


@pytest.fixture
def make_episodes() -> Callable[[list[list[str]]], list[Episode]]:
    """Build season 1 episodes with the given character lists."""

    def build(character_lists: list[list[str]]) -> list[Episode]:
        episodes = []
        for index, characters in enumerate(character_lists):
            ref = episode_ref(index)
            episodes.append(
                Episode(
                    sequence_number=ref.sequence_number,
                    ref=ref,
                    title=f"Episode {index}",
                    season="Season 1",
                    rating=8.0,
                    characters=characters,
                )
            )
        return episodes

    return build
