"""Configuration module."""

from stockledger.config.logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
    current_request_id,
    get_logger,
)
from stockledger.config.settings import Settings, get_settings, reset_settings

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
    "bind_request_context",
    "clear_request_context",
    "current_request_id",
]
