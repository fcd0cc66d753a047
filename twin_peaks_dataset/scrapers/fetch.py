"""Page fetching with bounded concurrency."""

import asyncio
import logging
from typing import List, Optional, Sequence

import aiohttp
from pydantic import BaseModel, ConfigDict, Field

from ..constants.config import MAX_CONCURRENT_REQUESTS, REQUEST_TIMEOUT_SECONDS
from ..errors import FetchError

logger = logging.getLogger(__name__)


class FetchResult(BaseModel):
    """Outcome of fetching one URL: either the page HTML or the error."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    url: str = Field(..., description="Requested URL")
    html: Optional[str] = Field(default=None, description="Page HTML when the fetch succeeded")
    error: Optional[FetchError] = Field(default=None, description="Failure when it did not")

    @property
    def ok(self) -> bool:
        return self.error is None


async def fetch_page(
    session: aiohttp.ClientSession,
    url: str,
    semaphore: asyncio.Semaphore,
    timeout: float = REQUEST_TIMEOUT_SECONDS,
) -> str:
    """
    Fetch a single page.

    Args:
        session: aiohttp session
        url: URL to fetch
        semaphore: Semaphore bounding concurrent requests
        timeout: Total seconds allowed for the request

    Returns:
        Page HTML

    Raises:
        FetchError: on connection failure, non-200 status or timeout
    """
    async with semaphore:
        try:
            async with session.get(url, timeout=aiohttp.ClientTimeout(total=timeout)) as response:
                if response.status != 200:
                    raise FetchError(url, f"HTTP {response.status}")
                return await response.text()
        except asyncio.TimeoutError as e:
            raise FetchError(url, f"timed out after {timeout}s") from e
        except UnicodeDecodeError as e:
            raise FetchError(url, "undecodable body") from e
        except aiohttp.ClientError as e:
            raise FetchError(url, str(e) or type(e).__name__) from e


async def fetch_pages(
    urls: Sequence[str],
    concurrency: int = MAX_CONCURRENT_REQUESTS,
    timeout: float = REQUEST_TIMEOUT_SECONDS,
) -> List[FetchResult]:
    """
    Fetch many pages concurrently.

    A failed fetch is captured in its FetchResult and never cancels the
    others. Results come back in the same order as urls.
    """
    semaphore = asyncio.Semaphore(concurrency)

    async def fetch_one(session: aiohttp.ClientSession, url: str) -> FetchResult:
        try:
            html = await fetch_page(session, url, semaphore, timeout)
        except FetchError as e:
            logger.warning("%s", e)
            return FetchResult(url=url, error=e)
        logger.debug("Fetched %s", url)
        return FetchResult(url=url, html=html)

    async with aiohttp.ClientSession() as session:
        return list(await asyncio.gather(*(fetch_one(session, url) for url in urls)))
