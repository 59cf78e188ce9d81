"""
Configuration management for the action gateway.

Loads settings from environment variables with sensible defaults.
"""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings

# Load .env file from project root
_project_root = Path(__file__).parent.parent.parent
_env_file = _project_root / '.env'
if _env_file.exists():
    load_dotenv(_env_file)


class Settings(BaseSettings):
    """Gateway settings loaded from environment variables."""

    # Envelope interception
    ACTIONS_ENABLED: bool = False
    ACTIONS_PATH: str = '/actions'
    ACTIONS_FORWARD: bool = True
    ACTIONS_PAYLOAD_KEY: str = 'actionPayload'

    # Logging
    LOG_LEVEL: str = 'INFO'
    LOG_JSON: bool = False

    @field_validator('ACTIONS_PATH')
    @classmethod
    def _normalize_path(cls, value: str) -> str:
        if not value.startswith('/'):
            raise ValueError('ACTIONS_PATH must start with "/"')
        return value.rstrip('/') or '/'

    @field_validator('ACTIONS_PAYLOAD_KEY')
    @classmethod
    def _payload_key_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError('ACTIONS_PAYLOAD_KEY must not be empty')
        return value


@lru_cache
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()
