"""
Centralized configuration for Brand Audit
All environment variables and settings are defined here
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Provides centralized configuration with validation and defaults.
    """

    # ======================
    # API Configuration
    # ======================
    ANTHROPIC_API_KEY: str = Field(default="", description="Anthropic API key")
    ANTHROPIC_MODEL: str = Field(
        default="claude-sonnet-4-20250514",
        description="Claude model to use for every inference stage"
    )

    # ======================
    # Token Limits (per stage)
    # ======================
    SUGGEST_MAX_TOKENS: int = Field(default=400, description="Competitor suggestion reply limit")
    MESSAGING_MAX_TOKENS: int = Field(default=300, description="Messaging extraction reply limit")
    VISUALS_MAX_TOKENS: int = Field(default=250, description="Visual identity reply limit")
    FIRST_IMPRESSION_MAX_TOKENS: int = Field(default=300, description="First impression reply limit")
    COMPARISON_MAX_TOKENS: int = Field(default=800, description="Comparator reply limit")
    TAKEAWAYS_MAX_TOKENS: int = Field(default=500, description="Takeaway generator reply limit")

    # ======================
    # Pacing Configuration
    # ======================
    LLM_CALL_DELAY: float = Field(
        default=0.5,
        description="Minimum seconds between consecutive LLM calls of one audit"
    )
    COMPARATOR_DELAY: float = Field(
        default=1.0,
        description="Minimum seconds before the comparator call"
    )

    # ======================
    # Fetch Configuration
    # ======================
    FETCH_TIMEOUT: float = Field(default=15.0, description="HTML fetch timeout in seconds")
    USER_AGENT: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
        ),
        description="User-Agent sent by the fetcher and the browser"
    )

    # ======================
    # Browser Pool Configuration
    # ======================
    ENABLE_SCREENSHOTS: bool = Field(
        default=True,
        description="Capture site and search-result screenshots"
    )
    BROWSER_POOL_SIZE: int = Field(
        default=3,
        description="Maximum pages open at once on the shared browser"
    )
    BROWSER_LAUNCH_TIMEOUT: int = Field(
        default=20,
        description="Timeout for launching browser in seconds"
    )

    # ======================
    # Screenshot Configuration
    # ======================
    PAGE_LOAD_TIMEOUT: int = Field(
        default=15000,
        description="Page navigation timeout in milliseconds"
    )
    SITE_VIEWPORT_WIDTH: int = Field(default=1440, description="Site screenshot viewport width")
    SITE_VIEWPORT_HEIGHT: int = Field(default=900, description="Site screenshot viewport height")
    SEARCH_VIEWPORT_WIDTH: int = Field(default=1200, description="Search screenshot viewport width")
    SEARCH_VIEWPORT_HEIGHT: int = Field(default=800, description="Search screenshot viewport height")
    SITE_SETTLE_MS: int = Field(
        default=1000,
        description="Wait after load for animations and lazy loading"
    )
    SEARCH_SETTLE_MS: int = Field(default=500, description="Wait after search results load")
    SCREENSHOT_QUALITY: int = Field(default=80, description="JPEG quality of captured screenshots")
    MAX_SCREENSHOT_DIMENSION: int = Field(
        default=1800,
        description="Maximum screenshot dimension in pixels"
    )

    # ======================
    # Logging Configuration
    # ======================
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"  # Allow extra env vars in .env file


# Global settings instance
settings = Settings()


# ======================
# Convenience Functions
# ======================

def get_anthropic_api_key() -> str:
    """Get Anthropic API key"""
    return settings.ANTHROPIC_API_KEY


def get_anthropic_model() -> str:
    """Get Anthropic model name"""
    return settings.ANTHROPIC_MODEL


def screenshots_enabled() -> bool:
    """Check if screenshot capture is turned on"""
    return settings.ENABLE_SCREENSHOTS
