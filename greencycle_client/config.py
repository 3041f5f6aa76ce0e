"""Client configuration settings."""

from pydantic import Field
from pydantic import PositiveFloat
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class ClientConfig(BaseSettings):
    """Client configuration settings.

    Every field can be overridden by a ``GREENCYCLE_<FIELD_NAME>`` environment
    variable, for example ``GREENCYCLE_BASE_URL`` or ``GREENCYCLE_PHONE_TTL=none``.
    """

    model_config = SettingsConfigDict(
        env_prefix="GREENCYCLE_",
        env_ignore_empty=True,
        env_parse_none_str="none",
        extra="ignore",
    )

    # API settings
    base_url: str = Field(
        default="http://10.0.0.162:8000/v1",
        description="Base URL of the Green Cycle REST API",
    )
    timeout: float = Field(
        default=10.0,
        gt=0,
        description="HTTP request timeout in seconds",
    )
    user_agent: str = Field(
        default="greencycle-client",
        description="User-Agent header sent with every request",
    )

    # Cache settings
    collection_ttl: PositiveFloat | None = Field(
        default=300,
        description="Seconds a cached collection detail stays fresh (default: 5 minutes)",
    )
    phone_ttl: PositiveFloat | None = Field(
        default=None,
        description="Seconds a cached phone number stays fresh (None = never expires)",
    )
    cleanup_interval: float = Field(
        default=60,
        gt=0,
        description="Seconds between sweeps of stale cache entries",
    )
