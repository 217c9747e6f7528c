"""
NanoStore publisher utilities.

This module provides logging and input validation helpers for the SDK.
"""

from nanostore_publisher.utils.logging import (
    configure_logging,
    disable_logging,
    enable_debug,
    get_logger,
    set_level,
)
from nanostore_publisher.utils.validation import (
    is_integer,
    is_loopback_url,
    is_non_empty_string,
    is_positive_integer,
    is_positive_number,
    require,
    sanitize_for_logging,
    validate_service_url,
)

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_level",
    "disable_logging",
    "enable_debug",
    # Validation
    "is_integer",
    "is_positive_integer",
    "is_positive_number",
    "is_non_empty_string",
    "is_loopback_url",
    "require",
    "sanitize_for_logging",
    "validate_service_url",
]
