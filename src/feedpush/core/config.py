"""
Push session configuration.

Values come from CLI options first and fall back to environment variables:
- FEEDPUSH_SOURCE: Feed upload URL for primary packages
- FEEDPUSH_SYMBOL_SOURCE: Feed upload URL for symbol packages
- FEEDPUSH_API_KEY: Opaque API key sent with every upload
- FEEDPUSH_TIMEOUT: Per-upload timeout in seconds
"""

import os

from pydantic import BaseModel, Field, ValidationError, field_validator

from feedpush.core.exceptions import ConfigurationError
from feedpush.core.models import PushOptions, PushTarget

DEFAULT_TIMEOUT_SECONDS = 300.0

ENV_SOURCE = "FEEDPUSH_SOURCE"
ENV_SYMBOL_SOURCE = "FEEDPUSH_SYMBOL_SOURCE"
ENV_API_KEY = "FEEDPUSH_API_KEY"
ENV_TIMEOUT = "FEEDPUSH_TIMEOUT"


class PushConfig(BaseModel):
    """Configuration for one push session."""

    source: str
    symbol_source: str | None = None
    api_key: str | None = None
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    skip_duplicate: bool = False
    stop_on_error: bool = False

    model_config = {"frozen": True}

    @field_validator("source", "symbol_source")
    @classmethod
    def _check_url(cls, value: str | None) -> str | None:
        if value is None:
            return value
        value = value.strip()
        if not value.lower().startswith(("http://", "https://")):
            raise ValueError(f"not an http(s) URL: {value!r}")
        return value

    @classmethod
    def load(
        cls,
        *,
        source: str | None = None,
        symbol_source: str | None = None,
        api_key: str | None = None,
        timeout_seconds: float | None = None,
        skip_duplicate: bool = False,
        stop_on_error: bool = False,
    ) -> "PushConfig":
        """
        Build a configuration from explicit values and the environment.

        Raises:
            ConfigurationError: If the source is missing or a value is invalid
        """
        source = source or os.getenv(ENV_SOURCE)
        if not source:
            raise ConfigurationError(
                f"No feed source given. Pass --source or set {ENV_SOURCE}.",
                env_var=ENV_SOURCE,
                config_key="source",
            )

        if timeout_seconds is None:
            raw_timeout = os.getenv(ENV_TIMEOUT)
            if raw_timeout:
                try:
                    timeout_seconds = float(raw_timeout)
                except ValueError:
                    raise ConfigurationError(
                        f"Invalid timeout in {ENV_TIMEOUT}: {raw_timeout!r}",
                        env_var=ENV_TIMEOUT,
                        config_key="timeout_seconds",
                    )
            else:
                timeout_seconds = DEFAULT_TIMEOUT_SECONDS

        try:
            return cls(
                source=source,
                symbol_source=symbol_source or os.getenv(ENV_SYMBOL_SOURCE) or None,
                api_key=api_key or os.getenv(ENV_API_KEY) or None,
                timeout_seconds=timeout_seconds,
                skip_duplicate=skip_duplicate,
                stop_on_error=stop_on_error,
            )
        except ValidationError as e:
            first = e.errors()[0]
            key = ".".join(str(part) for part in first.get("loc", ()))
            raise ConfigurationError(
                f"Invalid configuration for {key}: {first.get('msg')}",
                config_key=key,
            )

    def target(self) -> PushTarget:
        """Return the feed endpoints for this session."""
        return PushTarget(
            primary_endpoint=self.source,
            symbol_endpoint=self.symbol_source,
        )

    def options(self) -> PushOptions:
        """Return the per-upload options for this session."""
        return PushOptions(
            timeout_seconds=self.timeout_seconds,
            skip_duplicate=self.skip_duplicate,
            stop_on_error=self.stop_on_error,
            api_key=self.api_key,
        )
