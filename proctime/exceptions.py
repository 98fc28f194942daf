"""Custom exceptions for proctime.

Provides a small exception hierarchy separating operating system query
failures from configuration problems.
"""

from typing import Optional, Any


class TimerException(Exception):
    """Base exception for all proctime errors."""

    def __init__(self, message: str, details: Optional[Any] = None):
        """Initialize with message and optional details."""
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        """String representation with details if available."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class PlatformException(TimerException):
    """Exceptions raised while talking to the operating system."""

    pass


class PlatformQueryError(PlatformException):
    """An OS accounting query reported failure (checked mode only)."""

    pass


class PlatformUnsupportedError(PlatformException):
    """The requested timer backend cannot be loaded on this platform."""

    pass


class ConfigurationException(TimerException):
    """Exceptions related to configuration management."""

    pass


class InvalidConfigError(ConfigurationException):
    """Configuration file is invalid or malformed."""

    pass


class ConfigValidationError(ConfigurationException):
    """Configuration validation failed."""

    pass
