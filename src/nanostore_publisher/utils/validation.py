"""
Validation utilities for the NanoStore publisher SDK.

Provides predicates and validators for:
- File sizes and retention periods (positive finite numbers)
- Satoshi amounts and output indexes (integers)
- Required string parameters
- Service URLs (well-formed http/https, loopback detection)

Validators raise the caller-supplied NanoStoreError subclass so that each
operation can report its own named error.
"""

from __future__ import annotations

import ipaddress
import math
from numbers import Integral, Real
from typing import Any, Callable, Optional
from urllib.parse import urlparse, urlunparse

from nanostore_publisher.errors import InvalidConfigError, ValidationError

LOOPBACK_HOSTNAMES = frozenset({"localhost"})


def is_positive_number(value: Any) -> bool:
    """
    Check that a value is a real, finite, strictly positive number.

    Booleans are rejected even though ``bool`` subclasses ``int``.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    try:
        return math.isfinite(value) and value > 0
    except (TypeError, ValueError, OverflowError):
        return False


def is_integer(value: Any) -> bool:
    """Check for an integral number (``5`` and ``5.0`` pass, ``5.5`` and ``True`` do not)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, Integral):
        return True
    return isinstance(value, float) and math.isfinite(value) and value.is_integer()


def is_positive_integer(value: Any) -> bool:
    """Check for an integral number greater than zero."""
    return is_integer(value) and value > 0


def is_non_empty_string(value: Any) -> bool:
    """Check for a string with at least one non-whitespace character."""
    return isinstance(value, str) and value.strip() != ""


def require(
    predicate: Callable[[Any], bool],
    value: Any,
    error_factory: Callable[[Any], ValidationError],
) -> Any:
    """
    Return ``value`` if ``predicate(value)`` holds, otherwise raise.

    Args:
        predicate: Check to apply
        value: Value to check
        error_factory: Called with the offending value to build the error

    Example:
        >>> require(is_positive_number, 0, InvalidFileSizeError)
        Traceback (most recent call last):
        ...
        InvalidFileSizeError: [ERR_INVALID_FILE_SIZE] Invalid file size
    """
    if not predicate(value):
        raise error_factory(value)
    return value


def validate_service_url(url: Any, field_name: str = "storage_service_url") -> str:
    """
    Validate a service base URL.

    Args:
        url: URL to validate
        field_name: Field name for error messages

    Returns:
        The URL without a trailing slash

    Raises:
        InvalidConfigError: If the URL is empty or malformed
    """
    if not is_non_empty_string(url):
        raise InvalidConfigError(f"{field_name} is required", field=field_name)

    parsed = urlparse(url.strip())
    if parsed.scheme not in ("http", "https"):
        raise InvalidConfigError(
            f"Invalid {field_name}: scheme must be http or https",
            field=field_name,
            value=url,
        )
    if not parsed.hostname:
        raise InvalidConfigError(
            f"Invalid {field_name}: missing hostname",
            field=field_name,
            value=url,
        )

    return url.strip().rstrip("/")


def is_loopback_url(url: Optional[str]) -> bool:
    """
    Check whether a URL points at a local development server.

    Matches plain-http URLs whose host is ``localhost`` or a loopback IP
    address (``127.0.0.0/8``, ``::1``).
    """
    if not url:
        return False
    parsed = urlparse(url)
    if parsed.scheme != "http" or not parsed.hostname:
        return False

    hostname = parsed.hostname.lower()
    if hostname in LOOPBACK_HOSTNAMES:
        return True
    try:
        return ipaddress.ip_address(hostname).is_loopback
    except ValueError:
        return False


def sanitize_for_logging(url: Optional[str]) -> str:
    """
    Strip credentials and query strings from a URL before logging it.

    Upload URLs are usually pre-signed, so their query string is a secret.
    """
    if not url:
        return ""
    parsed = urlparse(url)
    netloc = parsed.hostname or ""
    if parsed.port:
        netloc = f"{netloc}:{parsed.port}"
    return urlunparse((parsed.scheme, netloc, parsed.path, "", "", ""))
