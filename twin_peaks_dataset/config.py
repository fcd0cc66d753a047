"""Runtime configuration for a pipeline run."""

from typing import Tuple

from pydantic import BaseModel, Field

from .constants.config import (
    EPISODE_COUNT,
    MAX_CONCURRENT_REQUESTS,
    MIN_APPEARANCES,
    RATING_PRECISION,
    REQUEST_TIMEOUT_SECONDS,
    VALID_SEASONS,
)
from .constants.urls import RATINGS_BASE_URL, WIKI_BASE_URL


class PipelineConfig(BaseModel):
    """Settings for one scrape; every field defaults to the module constants."""

    wiki_base_url: str = Field(default=WIKI_BASE_URL, description="Base URL of the episode wiki")
    ratings_base_url: str = Field(default=RATINGS_BASE_URL, description="Base URL of the season ratings listing")
    seasons: Tuple[int, ...] = Field(default=VALID_SEASONS, description="Seasons to collect ratings for")
    episode_count: int = Field(default=EPISODE_COUNT, ge=0, description="Numbered episodes after the pilot")
    concurrency: int = Field(default=MAX_CONCURRENT_REQUESTS, ge=1, description="Maximum concurrent requests")
    timeout_seconds: float = Field(default=REQUEST_TIMEOUT_SECONDS, gt=0, description="Per-fetch timeout")
    rating_precision: int = Field(default=RATING_PRECISION, ge=0, description="Decimal places kept on ratings")
    min_appearances: int = Field(
        default=MIN_APPEARANCES,
        ge=0,
        description="Character prominence view keeps characters above this count",
    )
