# oaiweave/config.py
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import __version__
from .types import PostRequestHook, PreRequestHook

DEFAULT_USER_AGENT = f"oaiweave/{__version__}"


class OaiPmhSettings(BaseSettings):
    """
    Manages user-configurable settings for the OAI-PMH client, primarily
    loaded from environment variables (prefixed with 'OAIWEAVE_') or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "secrets.env"),
        env_file_encoding="utf-8",
        env_prefix="OAIWEAVE_",
        extra="ignore",
        case_sensitive=False,
        arbitrary_types_allowed=True,  # Allow hook callables
    )

    # --- Client Behavior Settings ---
    request_timeout: float = Field(
        default=30.0, description="Default request timeout in seconds"
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User-Agent header for requests",
    )
    follow_redirects: bool = Field(
        default=True, description="Follow HTTP redirects issued by the repository"
    )
    default_metadata_prefix: str = Field(
        default="oai_dc",
        description="metadataPrefix used when list options do not name one",
    )

    # --- Hook Settings ---
    pre_request_hooks: list[PreRequestHook] = Field(
        default_factory=list,
        description="List of hooks to call before a request is made.",
    )
    post_request_hooks: list[PostRequestHook] = Field(
        default_factory=list,
        description="List of hooks to call after a response is received and decoded.",
    )


@lru_cache
def get_settings() -> OaiPmhSettings:
    """
    Provides access to the oaiweave settings.

    Settings are loaded from environment variables or .env/secrets.env files.
    The instance is cached for performance.

    Returns:
        OaiPmhSettings: The settings instance.
    """
    return OaiPmhSettings()
