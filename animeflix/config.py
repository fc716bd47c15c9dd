"""Configuration constants and runtime settings for Animeflix."""

from dataclasses import dataclass

JIKAN_BASE_URL = "https://api.jikan.moe/v4"
DEFAULT_TIMEOUT = 30.0  # seconds
# Only edits that arrive while a query is in flight can be merged
DEFAULT_DEBOUNCE = 0.0  # seconds

# Browse mode: item 0 is featured, items 1-9 fill the carousel, the rest go to the grid
CAROUSEL_SIZE = 10

# Display limits
MAX_VISIBLE_PAGES = 7
SYNOPSIS_PREVIEW_LENGTH = 200

# Genre name lookup
GENRE_MATCH_THRESHOLD = 80


@dataclass(frozen=True)
class Settings:
    """Runtime settings, usually filled in from CLI options/environment."""

    api_url: str = JIKAN_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    debounce: float = DEFAULT_DEBOUNCE
    log_level: str = "WARNING"
