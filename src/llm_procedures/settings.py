"""Process-wide provider defaults read from the environment."""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_API_HOST = "https://api.openai.com"


class ProviderDefaults(BaseSettings):
    """Fallbacks used when a caller leaves an ``AccessConfig`` field empty.

    Field names match the environment variables (``OPENAI_API_KEY`` and so
    on). Loaded once per process by :func:`load_defaults`; tests build their
    own instance and hand it to the router instead.
    """

    model_config = SettingsConfigDict(frozen=True, extra="ignore")

    openai_api_key: str = ""
    openai_api_org_id: str = ""
    openai_api_host: str = DEFAULT_API_HOST
    helicone_api_key: str = ""


@lru_cache(maxsize=1)
def load_defaults() -> ProviderDefaults:
    """Return the environment defaults, reading them on first use only."""
    defaults = ProviderDefaults()
    if not defaults.openai_api_key:
        logger.warning(
            "OPENAI_API_KEY has not been provided in this environment; "
            "every call will need a client-supplied key."
        )
    return defaults
