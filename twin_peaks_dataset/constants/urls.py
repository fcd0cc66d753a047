"""Source URL constants."""

# Episode pages on the Twin Peaks Wiki
WIKI_BASE_URL = "https://twinpeaks.fandom.com/wiki"
PILOT_PAGE = "Pilot"
EPISODE_PAGE_PATTERN = "Episode_{number}"

# Per-season episode listings on IMDb (carry the user ratings)
RATINGS_BASE_URL = "https://www.imdb.com/title/tt0098936/episodes"
SEASON_QUERY_PATTERN = "season={season}"

# CSS selectors
EPISODE_TITLE_SELECTOR = "h2.pi-title[data-source='title']"
CAST_CREDIT_SELECTOR = "h2:has(> span#Cast) ~ ul > li"
RATING_SELECTOR = "span.ipc-rating-star--rating"
