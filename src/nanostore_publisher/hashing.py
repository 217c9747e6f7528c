"""
Content locators (UHRP URLs).

A UHRP URL identifies a file by its content: the SHA-256 digest of the bytes,
prefixed with ``0xce00`` and Base58Check encoded. Anyone holding the bytes can
recompute it, so a download from any host can be verified against it.
"""

from __future__ import annotations

import hashlib
from typing import Protocol, runtime_checkable

import base58

UHRP_PREFIX = bytes.fromhex("ce00")
URL_SCHEMES = ("uhrp://", "uhrp:", "web+uhrp://")
DIGEST_SIZE = 32


@runtime_checkable
class ContentHasher(Protocol):
    """Maps file bytes to a content locator string."""

    def hash(self, data: bytes) -> str:
        ...


def get_url_for_hash(digest: bytes) -> str:
    """
    Encode a SHA-256 digest as a UHRP URL.

    Raises:
        ValueError: If the digest is not 32 bytes
    """
    if len(digest) != DIGEST_SIZE:
        raise ValueError("Hash length must be 32 bytes (sha256)")
    return base58.b58encode_check(UHRP_PREFIX + digest).decode("ascii")


def get_url_for_file(data: bytes) -> str:
    """UHRP URL for a file's bytes."""
    return get_url_for_hash(hashlib.sha256(data).digest())


def _strip_scheme(url: str) -> str:
    for scheme in URL_SCHEMES:
        if url.lower().startswith(scheme):
            return url[len(scheme):]
    return url


def get_hash_from_url(url: str) -> bytes:
    """
    Decode a UHRP URL back into its SHA-256 digest.

    Accepts bare locators as well as ``uhrp:`` / ``uhrp://`` prefixed ones.

    Raises:
        ValueError: On a bad checksum, prefix or length
    """
    payload = base58.b58decode_check(_strip_scheme(url.strip()))
    if payload[: len(UHRP_PREFIX)] != UHRP_PREFIX:
        raise ValueError("Bad prefix")
    digest = payload[len(UHRP_PREFIX):]
    if len(digest) != DIGEST_SIZE:
        raise ValueError("Invalid length!")
    return digest


def is_valid_url(url: str) -> bool:
    """Whether a string is a well-formed UHRP URL."""
    try:
        get_hash_from_url(url)
    except (ValueError, TypeError, AttributeError):
        return False
    return True


def verify_content(url: str, data: bytes) -> bool:
    """Check downloaded bytes against their locator."""
    try:
        return get_hash_from_url(url) == hashlib.sha256(data).digest()
    except (ValueError, TypeError, AttributeError):
        return False


class UHRPHasher:
    """Default :class:`ContentHasher`: SHA-256 based UHRP URLs."""

    def hash(self, data: bytes) -> str:
        return get_url_for_file(bytes(data))
