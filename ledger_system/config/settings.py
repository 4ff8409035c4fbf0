"""Ledger settings, read from LEDGER_* environment variables or a .env file."""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Attributes:
        database_url: SQLAlchemy async database URL
        database_echo: Echo emitted SQL (debugging only)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log output format (json for production, console for dev)
        trending_window_hours: Trailing window used by trending and "updates today"
        default_page_size: Default page size for fact listings
        max_page_size: Upper bound accepted for fact listing page size
        default_trending_limit: Default number of trending facts
        max_trending_limit: Upper bound accepted for trending limit
        search_fact_limit: Cap on fact-level search hits
        search_revision_limit: Cap on facts reached through revision text
    """

    database_url: str = Field(
        default="sqlite+aiosqlite:///./ledger.db",
        description="SQLAlchemy async database URL"
    )
    database_echo: bool = Field(
        default=False,
        description="Echo SQL statements to the log"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: str = Field(
        default="json",
        description="Log output format: json or console"
    )
    trending_window_hours: int = Field(
        default=24,
        ge=1,
        description="Trailing window (hours) for trending and daily update counts"
    )
    default_page_size: int = Field(
        default=20,
        ge=1,
        description="Default number of facts per page"
    )
    max_page_size: int = Field(
        default=100,
        ge=1,
        description="Maximum number of facts per page"
    )
    default_trending_limit: int = Field(
        default=5,
        ge=1,
        description="Default number of trending facts"
    )
    max_trending_limit: int = Field(
        default=20,
        ge=1,
        description="Maximum number of trending facts"
    )
    search_fact_limit: int = Field(
        default=50,
        ge=1,
        description="Maximum fact-level search hits"
    )
    search_revision_limit: int = Field(
        default=20,
        ge=1,
        description="Maximum facts reached through revision-level search hits"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "env_prefix": "LEDGER_",
    }


# Shared instance imported by every component
settings = Settings()
