"""TimerConfiguration model for proctime.

Represents the settings shared by the timer factory, the cross-check
diagnostics and the command line interface.
"""

import json
import os
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogLevel(str, Enum):
    """Available log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class TimerBackend(str, Enum):
    """Timer backend selection.

    ``AUTO`` picks the variant matching the running platform.
    """

    AUTO = "auto"
    WINDOWS = "windows"
    POSIX = "posix"


def _default_crosscheck() -> Dict[str, Any]:
    return {
        "tolerance_seconds": 0.05,
        "burn_seconds": 0.25,
    }


class TimerConfiguration(BaseModel):
    """Model representing proctime configuration settings."""

    config_version: str = Field(default="1.0.0")
    last_modified: Optional[str] = Field(default=None)

    log_level: LogLevel = Field(default=LogLevel.WARN)
    log_file_path: Optional[str] = Field(default=None)

    backend: TimerBackend = Field(default=TimerBackend.AUTO)
    # Raise PlatformQueryError on OS failures instead of returning the buffer
    checked: bool = Field(default=False)

    crosscheck: Dict[str, Any] = Field(default_factory=_default_crosscheck)

    model_config = ConfigDict(validate_assignment=True)

    @field_validator("log_level", mode="before")
    def normalize_log_level(cls, value: Any) -> LogLevel:
        """Ensure log level values resolve to LogLevel enum members."""
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, str):
            normalized = value.upper()
            if normalized == "WARNING":
                normalized = "WARN"
            try:
                return LogLevel(normalized)
            except ValueError as exc:
                raise ValueError(f"Invalid log level: {value}") from exc
        raise ValueError("Log level must be a string or LogLevel enum")

    @field_validator("backend", mode="before")
    def normalize_backend(cls, value: Any) -> TimerBackend:
        if isinstance(value, TimerBackend):
            return value
        if isinstance(value, str):
            try:
                return TimerBackend(value.lower())
            except ValueError as exc:
                raise ValueError(f"Invalid timer backend: {value}") from exc
        raise ValueError("Backend must be a string or TimerBackend enum")

    @field_validator("crosscheck", mode="before")
    def merge_crosscheck_defaults(cls, v: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        merged = _default_crosscheck()
        if isinstance(v, dict):
            merged.update(v)
        return merged

    @field_validator("crosscheck")
    def validate_crosscheck_settings(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        """Validate cross-check configuration."""
        limits = {"tolerance_seconds": 10, "burn_seconds": 60}
        for key, upper in limits.items():
            try:
                value = float(v[key])
            except (TypeError, ValueError):
                raise ValueError(f"{key} must be a number, got {v[key]!r}")
            if not 0 < value <= upper:
                raise ValueError(
                    f"{key} must be greater than 0 and at most {upper} seconds"
                )
            v[key] = value
        return v

    def get_log_file_path(self) -> Optional[str]:
        """Get the resolved log file path, or None for console-only logging."""
        if self.log_file_path:
            return os.path.expandvars(os.path.expanduser(self.log_file_path))
        return None

    def get_tolerance_seconds(self) -> float:
        return float(self.crosscheck["tolerance_seconds"])

    def get_burn_seconds(self) -> float:
        return float(self.crosscheck["burn_seconds"])

    def update_setting(self, section: str, key: str, value: Any) -> None:
        """Update a configuration setting."""
        if section == "crosscheck":
            updated = dict(self.crosscheck)
            updated[key] = value
            # Reassign so validate_assignment runs the range checks
            self.crosscheck = updated
        elif hasattr(self, key):
            setattr(self, key, value)
        else:
            raise ValueError(f"Unknown setting: {section}.{key}")

    @classmethod
    def create_default(cls) -> "TimerConfiguration":
        """Create a default configuration instance."""
        return cls()

    def to_file(self, file_path: str) -> None:
        """Save configuration to JSON file."""
        self.last_modified = datetime.now().isoformat()

        directory = os.path.dirname(file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2, ensure_ascii=False)

    @staticmethod
    def _merge_dict(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge helper for configuration dictionaries."""
        result = base.copy()
        for key, value in overrides.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = TimerConfiguration._merge_dict(result[key], value)
            else:
                result[key] = value
        return result

    @classmethod
    def from_file(cls, file_path: str) -> "TimerConfiguration":
        """Load configuration from JSON file with default merge."""
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError("Configuration file must contain a JSON object")

        default_dict = cls.create_default().model_dump(mode="json")
        return cls(**cls._merge_dict(default_dict, data))

    def __str__(self) -> str:
        return (
            f"TimerConfiguration("
            f"backend={self.backend.value}, "
            f"checked={self.checked}, "
            f"log_level={self.log_level.value}"
            f")"
        )
