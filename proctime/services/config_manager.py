"""ConfigManager service for configuration management.

Handles loading, saving and validation of the timer configuration, with
support for environment variable overrides.
"""

import json
import os
import shutil
import sys
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import ValidationError

from ..exceptions import ConfigValidationError, InvalidConfigError
from ..models.timer_configuration import TimerBackend, TimerConfiguration
from ..utils.logging import get_logger

logger = get_logger(__name__)

# Timers built on a clock coarser than this cannot resolve the tolerance
MIN_USEFUL_TOLERANCE_SECONDS = 0.01


def _parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in ("1", "true", "yes", "on"):
        return True
    if normalized in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"Not a boolean: {value!r}")


class ConfigValidationResult:
    """Result of configuration validation."""

    def __init__(self):
        self.is_valid = True
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def add_error(self, error: str) -> None:
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)


class ConfigManager:
    """Service for managing proctime configuration."""

    def __init__(self, config_file: Optional[str] = None):
        self.config_file = config_file
        self.current_config: Optional[TimerConfiguration] = None
        self._lock = threading.RLock()

        self.env_var_mapping: Dict[str, Tuple[str, Callable[[str], Any]]] = {
            "PROCTIME_LOG_LEVEL": ("log_level", str),
            "PROCTIME_BACKEND": ("backend", str),
            "PROCTIME_CHECKED": ("checked", _parse_bool),
            "PROCTIME_TOLERANCE": ("crosscheck.tolerance_seconds", float),
            "PROCTIME_BURN_SECONDS": ("crosscheck.burn_seconds", float),
        }

    def load_default_config(self) -> TimerConfiguration:
        """Load default configuration."""
        with self._lock:
            self.current_config = TimerConfiguration.create_default()
            return self.current_config

    def load_config(self, file_path: Optional[str] = None) -> TimerConfiguration:
        """
        Load configuration from file.

        A missing path yields the default configuration.

        Args:
            file_path: Path to configuration file

        Returns:
            TimerConfiguration instance

        Raises:
            InvalidConfigError: If the file cannot be parsed
            ConfigValidationError: If the parsed configuration is invalid
        """
        config_path = file_path or self.config_file

        if not config_path or not os.path.exists(config_path):
            logger.debug("No configuration file, using defaults", path=config_path)
            return self.load_default_config()

        with self._lock:
            try:
                config = TimerConfiguration.from_file(config_path)
            except (json.JSONDecodeError, ValueError, ValidationError, OSError) as e:
                raise InvalidConfigError(
                    f"Cannot load configuration from {config_path}",
                    details={"error": str(e)},
                ) from e

            validation = self.validate_config(config)
            if not validation.is_valid:
                raise ConfigValidationError(
                    "Invalid configuration", details={"errors": validation.errors}
                )
            for warning in validation.warnings:
                logger.warning("Configuration warning", warning=warning)

            self.current_config = config
            self.config_file = config_path
            return config

    def load_config_with_env_override(
        self, file_path: Optional[str] = None
    ) -> TimerConfiguration:
        """
        Load configuration, then apply environment variable overrides.

        Overrides that fail to convert or validate are logged and skipped.
        """
        config = self.load_config(file_path)

        for env_var, (config_path, convert) in self.env_var_mapping.items():
            env_value = os.environ.get(env_var)
            if env_value is None:
                continue

            try:
                converted_value = convert(env_value)
                if "." in config_path:
                    section, key = config_path.split(".", 1)
                    config.update_setting(section, key, converted_value)
                else:
                    setattr(config, config_path, converted_value)
            except (ValueError, ValidationError) as e:
                logger.warning(
                    "Ignoring environment override",
                    variable=env_var,
                    value=env_value,
                    error=str(e),
                )

        return config

    def save_config(
        self, config: TimerConfiguration, file_path: Optional[str] = None
    ) -> bool:
        """
        Save configuration to file.

        Returns:
            True if saved successfully, False on I/O failure

        Raises:
            ValueError: If no target path is known
            ConfigValidationError: If the configuration is invalid
        """
        target_path = file_path or self.config_file

        if not target_path:
            raise ValueError("No configuration file path specified")

        validation = self.validate_config(config)
        if not validation.is_valid:
            raise ConfigValidationError(
                "Cannot save invalid configuration",
                details={"errors": validation.errors},
            )

        with self._lock:
            backup_path = f"{target_path}.backup"
            backed_up = False
            try:
                if os.path.exists(target_path):
                    shutil.copy2(target_path, backup_path)
                    backed_up = True

                config.to_file(target_path)
            except OSError as e:
                logger.error(
                    "Failed to save configuration", path=target_path, error=str(e)
                )
                if backed_up:
                    self._restore_backup(backup_path, target_path)
                return False

            self.current_config = config
            self.config_file = target_path
            return True

    @staticmethod
    def _restore_backup(backup_path: str, target_path: str) -> None:
        try:
            shutil.copy2(backup_path, target_path)
        except OSError as e:
            logger.error(
                "Failed to restore configuration backup",
                path=target_path,
                backup=backup_path,
                error=str(e),
            )

    def validate_config(self, config: TimerConfiguration) -> ConfigValidationResult:
        """
        Validate configuration against platform and usability rules.

        Field ranges are already enforced by the model; this checks what
        depends on the running platform.
        """
        result = ConfigValidationResult()

        native = TimerBackend.WINDOWS if sys.platform == "win32" else TimerBackend.POSIX
        if config.backend not in (TimerBackend.AUTO, native):
            result.add_error(
                f"Backend '{config.backend.value}' cannot run on {sys.platform}"
            )

        if config.get_tolerance_seconds() < MIN_USEFUL_TOLERANCE_SECONDS:
            result.add_warning(
                "Cross-check tolerance is below typical clock tick resolution"
            )

        return result
