"""
Wallet capabilities used to pay for hosting.

Two implementations of the :class:`Wallet` protocol:

- :class:`RemoteWallet` delegates everything to a wallet service (the local
  MetaNet client by default) over its JSON API at ``{wallet_url}/v1/<call>``.
  Keys never leave the wallet.
- :class:`KeyWallet` holds a private key: it derives keys and signs locally
  and asks a transaction-builder backend to fund and assemble transactions.

Both derive payment keys identically (BRC-42, see :mod:`nanostore_publisher.keys`).
"""

from __future__ import annotations

import base64
import hashlib
from typing import Any, Dict, List, Optional, Protocol, Sequence, Union, runtime_checkable

import httpx

from nanostore_publisher.errors import TransportError, WalletError
from nanostore_publisher.keys import (
    derive_child_public_key,
    public_key_from_private,
    sign_digest,
)
from nanostore_publisher.transport import KeySigner, SignedRequestClient
from nanostore_publisher.utils.logging import get_logger

_logger = get_logger(__name__)

ProtocolID = Sequence[Union[int, str]]


@runtime_checkable
class Wallet(Protocol):
    """Key derivation, signing and transaction creation."""

    async def get_identity_key(self) -> str:
        ...

    async def derive_public_key(
        self,
        protocol_id: ProtocolID,
        key_id: str,
        counterparty: str,
    ) -> str:
        ...

    async def create_signature(
        self,
        data: bytes,
        protocol_id: ProtocolID,
        key_id: str,
        counterparty: str,
    ) -> str:
        ...

    async def create_action(
        self,
        outputs: List[Dict[str, Any]],
        description: str,
        labels: Optional[List[str]] = None,
        topics: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        ...

    async def get_transaction_with_outputs(
        self,
        outputs: List[Dict[str, Any]],
        note: str,
    ) -> Dict[str, Any]:
        ...


def _signature_to_hex(value: Any) -> str:
    if isinstance(value, list):
        return bytes(value).hex()
    if isinstance(value, dict) and "signature" in value:
        return _signature_to_hex(value["signature"])
    if isinstance(value, str):
        return value
    raise WalletError(f"Unexpected signature format: {type(value).__name__}", call="createSignature")


class RemoteWallet:
    """
    Wallet reached over HTTP.

    Example:
        ```python
        wallet = RemoteWallet("http://localhost:3301")
        identity = await wallet.get_identity_key()
        ```
    """

    def __init__(self, base_url: str = "http://localhost:3301") -> None:
        self._base_url = base_url.rstrip("/")

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _call(self, name: str, params: Dict[str, Any]) -> Any:
        url = f"{self._base_url}/v1/{name}"
        _logger.debug("Calling wallet", extra={"call": name})

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(url, json=params)
        except httpx.HTTPError as exc:
            raise WalletError(f"Wallet call {name} failed: {exc}", call=name, cause=exc) from exc

        if response.status_code >= 400:
            raise WalletError(
                f"Wallet call {name} failed: HTTP {response.status_code}",
                call=name,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise WalletError(f"Invalid JSON from wallet call {name}", call=name, cause=exc) from exc

    async def _public_key(self, params: Dict[str, Any]) -> str:
        result = await self._call("getPublicKey", params)
        if isinstance(result, dict):
            if result.get("status") == "error":
                raise WalletError(
                    result.get("description") or "getPublicKey failed",
                    call="getPublicKey",
                    service_code=result.get("code"),
                )
            result = result.get("publicKey")
        if not isinstance(result, str) or not result:
            raise WalletError("Wallet returned no public key", call="getPublicKey")
        return result

    async def get_identity_key(self) -> str:
        return await self._public_key({"identityKey": True})

    async def derive_public_key(
        self,
        protocol_id: ProtocolID,
        key_id: str,
        counterparty: str,
    ) -> str:
        return await self._public_key(
            {
                "protocolID": list(protocol_id),
                "keyID": key_id,
                "counterparty": counterparty,
            }
        )

    async def create_signature(
        self,
        data: bytes,
        protocol_id: ProtocolID,
        key_id: str,
        counterparty: str,
    ) -> str:
        result = await self._call(
            "createSignature",
            {
                "data": base64.b64encode(data).decode("ascii"),
                "protocolID": list(protocol_id),
                "keyID": key_id,
                "counterparty": counterparty,
            },
        )
        return _signature_to_hex(result)

    async def create_action(
        self,
        outputs: List[Dict[str, Any]],
        description: str,
        labels: Optional[List[str]] = None,
        topics: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """
        Ask the wallet to fund, sign and return a transaction.

        The raw response is returned, including ``{"status": "error"}``
        bodies; interpreting them is left to the caller.
        """
        params: Dict[str, Any] = {"outputs": outputs, "description": description}
        if labels:
            params["labels"] = labels
        if topics:
            params["topics"] = topics
        result = await self._call("createAction", params)
        if not isinstance(result, dict):
            raise WalletError("Invalid createAction response", call="createAction")
        return result

    async def get_transaction_with_outputs(
        self,
        outputs: List[Dict[str, Any]],
        note: str,
    ) -> Dict[str, Any]:
        return await self.create_action(outputs, note)


class KeyWallet:
    """
    Wallet backed by a private key held in process.

    Example:
        ```python
        wallet = KeyWallet(private_key, "https://dojo.babbage.systems")
        envelope = await wallet.get_transaction_with_outputs(
            [payment_info.output.model_dump()], note="Payment for file hosting"
        )
        ```
    """

    def __init__(
        self,
        private_key: str,
        backend_url: str,
        client: Optional[SignedRequestClient] = None,
    ) -> None:
        self._private_key = private_key
        self._client = client or SignedRequestClient(backend_url, KeySigner(private_key))

    async def get_identity_key(self) -> str:
        return public_key_from_private(self._private_key)

    async def derive_public_key(
        self,
        protocol_id: ProtocolID,
        key_id: str,
        counterparty: str,
    ) -> str:
        level, protocol = protocol_id
        invoice_number = f"{level}-{protocol}-{key_id}"
        return derive_child_public_key(self._private_key, counterparty, invoice_number)

    async def create_signature(
        self,
        data: bytes,
        protocol_id: ProtocolID,
        key_id: str,
        counterparty: str,
    ) -> str:
        return sign_digest(self._private_key, hashlib.sha256(data).digest())

    async def create_action(
        self,
        outputs: List[Dict[str, Any]],
        description: str,
        labels: Optional[List[str]] = None,
        topics: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        return await self.get_transaction_with_outputs(outputs, description)

    async def get_transaction_with_outputs(
        self,
        outputs: List[Dict[str, Any]],
        note: str,
    ) -> Dict[str, Any]:
        """
        Have the backend build a funded transaction paying ``outputs``.

        Raises:
            WalletError: If the backend is unreachable or reports an error
        """
        try:
            result = await self._client.create_signed_request(
                "/getTransactionWithOutputs",
                {"outputs": outputs, "note": note},
            )
        except TransportError as exc:
            raise WalletError(
                f"Transaction backend request failed: {exc.message}",
                call="getTransactionWithOutputs",
                cause=exc,
            ) from exc

        if not isinstance(result, dict):
            raise WalletError("Invalid transaction backend response", call="getTransactionWithOutputs")
        if result.get("status") == "error":
            raise WalletError(
                result.get("description") or "Transaction creation failed",
                call="getTransactionWithOutputs",
                service_code=result.get("code"),
            )
        return result
