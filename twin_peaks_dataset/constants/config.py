"""Pipeline configuration constants."""

# Seasons with a ratings page, and how many episodes each one lists
VALID_SEASONS = (1, 2)
SEASON_EPISODE_COUNTS = {1: 8, 2: 22}

# Numbered episodes after the pilot
EPISODE_COUNT = 29

# Fetching
MAX_CONCURRENT_REQUESTS = 5
REQUEST_TIMEOUT_SECONDS = 30.0

# Ratings are published with a single decimal
RATING_PRECISION = 1
MIN_RATING = 0.0
MAX_RATING = 10.0

# Credit filtering
CREDIT_SEPARATOR = " as "
MAX_CREDIT_LENGTH = 50
CREDIT_DENYLIST = (
    "credit only",
    "performer",
    "voice",
    "deleted scene",
    "archive footage",
    "citation needed",
    "Invitation To Love",
)

# Fan-recognized names for episodes the wiki records under an alternate title
TITLE_CORRECTIONS = {
    "The Night of Decision": "Miss Twin Peaks",
}

# Character prominence view keeps characters seen in more episodes than this
MIN_APPEARANCES = 10
