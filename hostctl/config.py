"""
hostctl configuration management.

Loads configuration from environment variables or .env file.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class HostctlConfig(BaseSettings):
    """
    hostctl configuration settings.

    Can be loaded from:
    1. Environment variables (HOSTCTL_API_URL, HOSTCTL_SESSION_TOKEN, etc.)
    2. .env file in the working directory
    3. Direct instantiation with kwargs

    Example:
        ```python
        # From environment
        config = HostctlConfig()

        # Direct instantiation
        config = HostctlConfig(
            api_url="https://api.example-host.io/api",
            session_token="your-session-token",
            user_id="11111111-2222-3333-4444-555555555555",
        )
        ```
    """

    model_config = SettingsConfigDict(
        env_prefix="HOSTCTL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Remote API connection
    api_url: str = Field(
        ...,
        description="Base URL of the hosting platform API (e.g., https://api.example-host.io/api)",
    )

    session_token: str = Field(
        ...,
        description="Session token sent as a bearer credential on every request",
    )

    user_id: str = Field(
        ...,
        description="ID of the user the session token belongs to",
    )

    # Transport
    page_size: int = Field(
        default=100,
        ge=1,
        le=500,
        description="Records requested per page when listing paged collections",
    )

    http_timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP timeout in seconds for a single request",
    )

    # Workflow polling
    workflow_poll_interval: float = Field(
        default=3.0,
        ge=0,
        description="Seconds to wait before the first workflow status poll",
    )

    workflow_poll_backoff: float = Field(
        default=1.5,
        ge=1.0,
        description="Multiplier applied to the poll interval after every poll",
    )

    workflow_max_poll_interval: float = Field(
        default=15.0,
        ge=0,
        description="Upper bound for the poll interval in seconds",
    )

    workflow_timeout: float = Field(
        default=600.0,
        gt=0,
        description="Maximum seconds to wait for a workflow to settle",
    )

    # Output
    date_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="strftime format used for timestamps in listings",
    )

    # Debug
    debug: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Ensure the API URL is valid."""
        if not v.startswith("https://"):
            raise ValueError("api_url must start with https://")
        return v.rstrip("/")

    @field_validator("session_token")
    @classmethod
    def validate_session_token(cls, v: str) -> str:
        """Ensure the session token is not empty."""
        if not v or len(v) < 10:
            raise ValueError("session_token appears invalid (too short)")
        return v


def load_config(**kwargs) -> HostctlConfig:
    """
    Load hostctl configuration.

    Priority order:
    1. Keyword arguments
    2. Environment variables (HOSTCTL_*)
    3. .env file

    Args:
        **kwargs: Override configuration values

    Returns:
        HostctlConfig instance

    Raises:
        ValidationError: If required fields are missing or invalid

    Example:
        ```python
        # Load from environment
        config = load_config()

        # Override specific values
        config = load_config(debug=True)
        ```
    """
    return HostctlConfig(**kwargs)
