"""Utility modules for proctime."""

from .logging import StructuredLogger, configure_default_logger, get_logger

__all__ = [
    "StructuredLogger",
    "get_logger",
    "configure_default_logger",
]
