"""
customer_intel.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the panel service.
- Hold the fixed timing/limit constants of the fetch chain in one place.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    One settings object is built at startup and handed to every component that
    needs it; nothing reads the environment directly.
    """

    model_config = SettingsConfigDict(env_prefix="CUSTOMER_INTEL_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "customer-intel"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Customer directory
    directory_base_url: str = "https://jsonplaceholder.typicode.com"
    directory_timeout_seconds: float = Field(default=5.0, gt=0)
    # The panel never shows more than three posts; overrides may only lower it.
    posts_limit: int = Field(default=3, ge=0, le=3)

    # Host embedding
    host_handshake_timeout_seconds: float = Field(default=15.0, gt=0)
    # URL the panel was loaded from; drives development-context detection.
    panel_url: str = ""
    dev_query_marker: str = "zat=true"
    dev_hostnames: tuple[str, ...] = ("localhost", "127.0.0.1")

    # Reply draft
    draft_delay_seconds: float = Field(default=0.3, ge=0)
    default_tone: Literal["friendly", "concise"] = "friendly"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Timeouts are expressed in seconds because asyncio and httpx both take seconds.
