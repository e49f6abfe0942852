"""
FeedPush Exception Hierarchy.

Defines the exceptions raised while preparing and running a push session.
Per-artifact upload faults are not raised; they become outcomes.
"""

from typing import Any


class FeedPushError(Exception):
    """
    Base exception for all FeedPush errors.

    All custom exceptions inherit from this class, allowing
    the CLI to catch them in one place.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None):
        """
        Initialize a FeedPushError.

        Args:
            message: Human-readable error message
            details: Optional structured data for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation with details."""
        base = self.message
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{base} ({details_str})"
        return base

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ArtifactNotFoundError(FeedPushError):
    """
    Raised when a push argument resolves to no files.

    The message carries the literal argument the caller typed, so a
    pattern is reported as the pattern and not as an expanded name.
    """

    def __init__(self, argument: str, *, details: dict[str, Any] | None = None):
        super().__init__(f"File does not exist ({argument})", details=details)
        self.argument = argument

    def __str__(self) -> str:
        return self.message


class UploadError(FeedPushError):
    """
    Errors raised by the upload transport itself.

    Raised only for misuse of the transport (for example a closed client);
    server responses and network faults are reported as outcomes instead.
    """

    def __init__(
        self,
        message: str,
        *,
        endpoint: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if endpoint:
            details["endpoint"] = endpoint
        if status_code is not None:
            details["status_code"] = status_code

        super().__init__(message, details=details)
        self.endpoint = endpoint
        self.status_code = status_code


class ConfigurationError(FeedPushError):
    """
    Errors in configuration loading or validation.

    Raised when:
    - Required options are missing and no environment fallback is set
    - Environment variables hold values of the wrong type
    - Configuration values are out of range
    """

    def __init__(
        self,
        message: str,
        *,
        env_var: str | None = None,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize a ConfigurationError.

        Args:
            message: Human-readable error message
            env_var: Environment variable name if applicable
            config_key: Configuration key if applicable
            details: Optional structured data for debugging
        """
        details = details or {}
        if env_var:
            details["env_var"] = env_var
        if config_key:
            details["config_key"] = config_key

        super().__init__(message, details=details)
        self.env_var = env_var
        self.config_key = config_key
