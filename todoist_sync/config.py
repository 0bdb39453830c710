"""
Configuration settings for the Todoist Sync client, loaded from environment variables.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict

from todoist_sync.api.client import DEFAULT_BASE_URL, DEFAULT_USER_AGENT


class Settings(BaseSettings):
    """Client settings; every field maps to a ``TODOIST_*`` variable (or a line in ``.env``)."""

    model_config = SettingsConfigDict(
        env_prefix='TODOIST_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    # An empty token is rejected by the client, not here.
    api_token: str = ''
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    debug: bool = False
    connect_timeout: float = 5.0
    read_timeout: float = 30.0


def get_settings(**overrides) -> Settings:
    """Get a fresh settings instance; keyword overrides win over the environment."""
    return Settings(**overrides)
