"""
Shared fixtures for NanoStore publisher tests.
"""

from typing import Any, Dict, Optional
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from nanostore_publisher.config import PublisherConfig
from nanostore_publisher.keys import public_key_from_private
from nanostore_publisher.types import InvoiceResult, PaymentResult


# =============================================================================
# Test Constants
# =============================================================================

# Valid secp256k1 private keys (hex)
SENDER_PRIVATE_KEY = "11" * 32
RECIPIENT_PRIVATE_KEY = "22" * 32

# Generator point: public key of private key 1
GENERATOR_PUBLIC_KEY = "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"

STORAGE_URL = "https://nanostore.example.com"
LOCAL_URL = "http://localhost:3104"
UPLOAD_URL = "https://storage.example.com/upload/abc?X-Goog-Signature=secret"
PUBLIC_URL = "https://nanostore.example.com/cdn/abc"
ORDER_ID = "order-123"
AMOUNT = 1500


# =============================================================================
# Helpers for mocking httpx
# =============================================================================


def create_mock_response(
    status_code: int = 200,
    json_data: Any = None,
    text: str = "",
) -> MagicMock:
    """Create a mock httpx Response."""
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    if json_data is None:
        response.json.side_effect = ValueError("No JSON body")
    else:
        response.json.return_value = json_data
    if status_code >= 400:
        response.raise_for_status.side_effect = _http_status_error(status_code)
    return response


def _http_status_error(status_code: int) -> Exception:
    request = httpx.Request("POST", "https://example.com")
    return httpx.HTTPStatusError(
        f"HTTP {status_code}",
        request=request,
        response=httpx.Response(status_code, request=request),
    )


def create_mock_client(**methods: Any) -> AsyncMock:
    """Create a mock httpx.AsyncClient usable as an async context manager."""
    mock_client = AsyncMock()
    for name, value in methods.items():
        setattr(mock_client, name, value)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=None)
    return mock_client


def create_signed_client(response: Any = None, side_effect: Any = None) -> MagicMock:
    """Create a mock SignedRequestClient."""
    client = MagicMock()
    client.url_for.side_effect = lambda path: f"{STORAGE_URL}/{path.lstrip('/')}"
    client.create_signed_request = AsyncMock(return_value=response, side_effect=side_effect)
    return client


# =============================================================================
# Fixtures - Keys and configurations
# =============================================================================


@pytest.fixture
def recipient_public_key() -> str:
    """Compressed public key of RECIPIENT_PRIVATE_KEY."""
    return public_key_from_private(RECIPIENT_PRIVATE_KEY)


@pytest.fixture
def sender_public_key() -> str:
    """Compressed public key of SENDER_PRIVATE_KEY."""
    return public_key_from_private(SENDER_PRIVATE_KEY)


@pytest.fixture
def wallet_config() -> PublisherConfig:
    """Config delegating to a remote wallet."""
    return PublisherConfig(storage_service_url=STORAGE_URL)


@pytest.fixture
def key_config() -> PublisherConfig:
    """Config paying with a private key."""
    return PublisherConfig(
        storage_service_url=STORAGE_URL,
        client_private_key=SENDER_PRIVATE_KEY,
    )


# =============================================================================
# Fixtures - Wallets and service responses
# =============================================================================


@pytest.fixture
def mock_wallet(recipient_public_key: str) -> MagicMock:
    """Mock Wallet returning a fixed derived key and a signed envelope."""
    wallet = MagicMock()
    wallet.get_identity_key = AsyncMock(return_value=GENERATOR_PUBLIC_KEY)
    wallet.derive_public_key = AsyncMock(return_value=recipient_public_key)
    wallet.create_signature = AsyncMock(return_value="3045")
    wallet.create_action = AsyncMock(
        return_value={"rawTx": "0100abcd", "inputs": {}, "mapiResponses": []}
    )
    wallet.get_transaction_with_outputs = AsyncMock(
        return_value={"rawTx": "0100beef", "inputs": {}, "mapiResponses": []}
    )
    return wallet


@pytest.fixture
def invoice_response(recipient_public_key: str) -> Dict[str, Any]:
    """Successful /invoice body."""
    return {
        "status": "success",
        "message": "Invoice created",
        "ORDER_ID": ORDER_ID,
        "identityKey": recipient_public_key,
        "amount": AMOUNT,
        "publicURL": PUBLIC_URL,
    }


@pytest.fixture
def pay_response() -> Dict[str, Any]:
    """Successful /pay body."""
    return {"status": "success", "uploadURL": UPLOAD_URL, "publicURL": PUBLIC_URL}


@pytest.fixture
def invoice_result(invoice_response: Dict[str, Any]) -> InvoiceResult:
    return InvoiceResult.model_validate(invoice_response)


@pytest.fixture
def payment_result(pay_response: Dict[str, Any]) -> PaymentResult:
    return PaymentResult.model_validate(pay_response)


def error_body(description: str, code: Optional[str] = None) -> Dict[str, Any]:
    """Service error body."""
    body: Dict[str, Any] = {"status": "error", "description": description}
    if code:
        body["code"] = code
    return body
