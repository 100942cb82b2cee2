import os
from dataclasses import dataclass

@dataclass
class Config:
    """Holds all application configuration."""
    API_BASE_URL: str = "https://api.artic.edu"
    SEARCH_PATH: str = "/api/v1/artists/search"
    MIN_QUERY_LENGTH: int = 3
    DEBOUNCE_SECONDS: float = 0.4
    REQUEST_TIMEOUT_SECONDS: float = 10.0
    LOG_LEVEL: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Builds a config, letting ARTISTS_* environment variables override the defaults."""
        defaults = cls()
        return cls(
            API_BASE_URL=os.getenv("ARTISTS_API_BASE_URL", defaults.API_BASE_URL),
            SEARCH_PATH=os.getenv("ARTISTS_SEARCH_PATH", defaults.SEARCH_PATH),
            MIN_QUERY_LENGTH=int(os.getenv("ARTISTS_MIN_QUERY_LENGTH", defaults.MIN_QUERY_LENGTH)),
            DEBOUNCE_SECONDS=float(os.getenv("ARTISTS_DEBOUNCE_SECONDS", defaults.DEBOUNCE_SECONDS)),
            REQUEST_TIMEOUT_SECONDS=float(
                os.getenv("ARTISTS_REQUEST_TIMEOUT_SECONDS", defaults.REQUEST_TIMEOUT_SECONDS)
            ),
            LOG_LEVEL=os.getenv("ARTISTS_LOG_LEVEL", defaults.LOG_LEVEL).upper(),
        )
