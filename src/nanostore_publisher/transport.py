"""
Signed-request transport for the NanoStore API.

Every request to the storage service is a JSON ``POST`` whose body is signed
by the caller's identity key. Signing is pluggable:

- :class:`KeySigner` signs with a private key held in process;
- :class:`WalletSigner` asks a wallet to sign, so the key never leaves it.

Signatures cover ``sha256(nonce || body)`` and travel in the
``x-authrite-identity-key``, ``x-authrite-nonce`` and ``x-authrite-signature``
headers.
"""

from __future__ import annotations

import base64
import hashlib
import json
import secrets
from typing import TYPE_CHECKING, Any, Dict, Optional, Protocol, runtime_checkable

import httpx

from nanostore_publisher.errors import TransportError
from nanostore_publisher.keys import public_key_from_private, sign_digest
from nanostore_publisher.utils.logging import get_logger
from nanostore_publisher.utils.validation import sanitize_for_logging

if TYPE_CHECKING:
    from nanostore_publisher.wallet import Wallet

_logger = get_logger(__name__)

HEADER_IDENTITY_KEY = "x-authrite-identity-key"
HEADER_NONCE = "x-authrite-nonce"
HEADER_SIGNATURE = "x-authrite-signature"

SIGNATURE_PROTOCOL_ID = [2, "authrite message signature"]
NONCE_BYTES = 32


def encode_body(body: Any) -> bytes:
    """Compact JSON encoding used for both the wire and the signature."""
    return json.dumps(body, separators=(",", ":")).encode("utf-8")


def new_nonce() -> str:
    return base64.b64encode(secrets.token_bytes(NONCE_BYTES)).decode("ascii")


def signing_digest(nonce: str, payload: bytes) -> bytes:
    return hashlib.sha256(nonce.encode("utf-8") + payload).digest()


@runtime_checkable
class RequestSigner(Protocol):
    """Produces authentication headers for a request body."""

    async def sign_request(self, payload: bytes) -> Dict[str, str]:
        ...


class KeySigner:
    """Signs requests with a private key held by the caller."""

    def __init__(self, private_key: str) -> None:
        self._private_key = private_key
        self._identity_key = public_key_from_private(private_key)

    @property
    def identity_key(self) -> str:
        return self._identity_key

    async def sign_request(self, payload: bytes) -> Dict[str, str]:
        nonce = new_nonce()
        signature = sign_digest(self._private_key, signing_digest(nonce, payload))
        return {
            HEADER_IDENTITY_KEY: self._identity_key,
            HEADER_NONCE: nonce,
            HEADER_SIGNATURE: signature,
        }


class WalletSigner:
    """Signs requests through a wallet's ``createSignature`` capability."""

    def __init__(self, wallet: "Wallet") -> None:
        self._wallet = wallet
        self._identity_key: Optional[str] = None

    async def sign_request(self, payload: bytes) -> Dict[str, str]:
        if self._identity_key is None:
            self._identity_key = await self._wallet.get_identity_key()
        nonce = new_nonce()
        signature = await self._wallet.create_signature(
            data=signing_digest(nonce, payload),
            protocol_id=SIGNATURE_PROTOCOL_ID,
            key_id=nonce,
            counterparty="anyone",
        )
        return {
            HEADER_IDENTITY_KEY: self._identity_key,
            HEADER_NONCE: nonce,
            HEADER_SIGNATURE: signature,
        }


class SignedRequestClient:
    """
    Authenticated JSON client for one service base URL.

    No retries and no timeout beyond httpx's default are applied; failures
    surface immediately as :class:`TransportError`.

    Example:
        ```python
        client = SignedRequestClient(
            "https://nanostore.babbage.systems",
            KeySigner(private_key),
        )
        invoice = await client.create_signed_request(
            "/invoice", {"fileSize": 1024, "retentionPeriod": 60}
        )
        ```
    """

    def __init__(self, base_url: str, signer: Optional[RequestSigner] = None) -> None:
        self._base_url = base_url.rstrip("/")
        self._signer = signer

    @property
    def base_url(self) -> str:
        return self._base_url

    def url_for(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    async def create_signed_request(self, path: str, body: Dict[str, Any]) -> Any:
        """
        POST a signed JSON body and decode the JSON response.

        A body of the form ``{"status": "error", ...}`` is returned as-is even
        on a 4xx/5xx status so callers can surface the service's own
        description and code.

        Raises:
            TransportError: On network failure, an undecodable body, or an
                error status without a service error body
        """
        url = self.url_for(path)
        payload = encode_body(body)
        headers = {"Content-Type": "application/json"}
        if self._signer is not None:
            headers.update(await self._signer.sign_request(payload))

        _logger.debug("Sending signed request", extra={"url": sanitize_for_logging(url)})

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(url, content=payload, headers=headers)
        except httpx.HTTPError as exc:
            raise TransportError(
                f"Request to {path} failed: {exc}",
                url=sanitize_for_logging(url),
                cause=exc,
            ) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise TransportError(
                f"Invalid JSON from {path}: HTTP {response.status_code}",
                url=sanitize_for_logging(url),
                status_code=response.status_code,
                cause=exc,
            ) from exc

        if isinstance(data, dict) and data.get("status") == "error":
            return data

        if response.status_code >= 400:
            raise TransportError(
                f"Request to {path} failed: HTTP {response.status_code}",
                url=sanitize_for_logging(url),
                status_code=response.status_code,
            )

        return data
