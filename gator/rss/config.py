# -*- coding: utf-8 -*-
"""
RSS module configuration

Public API:
- `rss_config`
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RSSConfig(BaseSettings):
    """RSS module configuration"""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # HTTP
    rss_http_timeout: float = Field(
        default=10.0,
        title="HTTP timeout",
        description="Upper bound in seconds for one feed fetch",
    )

    rss_user_agent: str = Field(
        default="gator",
        title="User-Agent",
        description="Client identifier sent with every feed request",
    )

    # Scheduling
    rss_retry_transient_errors: bool = Field(
        default=False,
        title="Retry transient errors first",
        description=(
            "Leave last_fetched_at unchanged after a network error or timeout so "
            "the feed is selected again on the next cycle"
        ),
    )

    # Browsing
    rss_default_browse_limit: int = Field(
        default=2,
        title="Default browse limit",
        description="Number of posts shown by `browse` when no limit is given",
    )


rss_config = RSSConfig()
