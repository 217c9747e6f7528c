"""
Data types for the NanoStore publishing pipeline.

Every model is immutable and lives for a single publish attempt:

    InvoiceResult -> PaymentInfo -> SignedPayment -> PaymentResult -> UploadResult

Wire payloads use the service's camelCase names (``ORDER_ID``, ``publicURL``,
``rawTx`` ...); Python attributes use snake_case. Models accept either form.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

PAYMENT_BASKET = "nanostore"
"""Basket label under which hosting payment outputs are tracked."""

PAYMENT_DESCRIPTION = "Payment for file hosting"
"""Fixed description attached to hosting payment outputs."""

STATUS_SUCCESS = "success"
STATUS_ERROR = "error"


# ============================================================================
# Invoice
# ============================================================================

class InvoiceResult(BaseModel):
    """
    Hosting invoice returned by ``POST /invoice``.

    The service is trusted over its authenticated channel, so no field is
    required beyond what it chose to send; unknown fields are preserved.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    order_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("ORDER_ID", "orderId", "orderID", "order_id"),
        serialization_alias="ORDER_ID",
    )
    recipient_public_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("identityKey", "recipientPublicKey", "recipient_public_key"),
        serialization_alias="identityKey",
    )
    amount: Optional[Union[int, float]] = Field(default=None, description="Price in satoshis")
    public_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("publicURL", "public_url"),
        serialization_alias="publicURL",
    )
    status: Optional[str] = None
    message: Optional[str] = None

    @field_validator("order_id", mode="before")
    @classmethod
    def _order_id_as_text(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


# ============================================================================
# Payment
# ============================================================================

class PaymentOutput(BaseModel):
    """A transaction output paying the host: locking script plus amount."""

    model_config = ConfigDict(frozen=True)

    script: str = Field(..., description="Locking script, hex encoded")
    satoshis: int = Field(..., gt=0)
    basket: str = PAYMENT_BASKET
    description: str = PAYMENT_DESCRIPTION


class PaymentInfo(BaseModel):
    """
    One-time payment destination derived for a single invoice.

    The derivation prefix/suffix pair must never be reused: together with
    the sender and recipient keys it determines the output's key.
    """

    model_config = ConfigDict(frozen=True)

    derivation_prefix: str
    derivation_suffix: str
    derived_public_key: str
    output: PaymentOutput


class SignedPayment(BaseModel):
    """
    Opaque transaction envelope produced by a wallet.

    Only the envelope's shape is known here (``inputs``, ``mapiResponses``,
    ``rawTx``); anything else the wallet returns is carried along unchanged.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    inputs: Any = None
    mapi_responses: Any = Field(
        default=None,
        validation_alias=AliasChoices("mapiResponses", "mapi_responses"),
        serialization_alias="mapiResponses",
    )
    raw_tx: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("rawTx", "raw_tx"),
        serialization_alias="rawTx",
    )

    def to_wire(self) -> Dict[str, Any]:
        """Serialize with wire field names, extras included."""
        return self.model_dump(by_alias=True, exclude_none=True)


class PaymentResult(BaseModel):
    """Upload credentials returned by ``POST /pay``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    upload_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("uploadURL", "upload_url"),
        serialization_alias="uploadURL",
    )
    public_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("publicURL", "public_url"),
        serialization_alias="publicURL",
    )
    status: Optional[str] = None


# ============================================================================
# Upload
# ============================================================================

class UploadResult(BaseModel):
    """Terminal artifact of a publish: where the file lives and its locator."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    published: bool = True
    public_url: str = Field(
        ...,
        validation_alias=AliasChoices("publicURL", "public_url"),
        serialization_alias="publicURL",
    )
    hash: str = Field(..., description="Content locator (UHRP URL)")
    status: str = STATUS_SUCCESS


@dataclass(frozen=True)
class UploadProgress:
    """Byte-transfer progress reported to upload callbacks."""

    loaded: int
    total: Optional[int] = None

    @property
    def fraction(self) -> Optional[float]:
        """Completed share in ``[0, 1]``, or None when the size is unknown."""
        if not self.total:
            return None
        return min(self.loaded / self.total, 1.0)


def output_descriptor(vout: int, satoshis: int, derivation_suffix: str) -> List[Dict[str, Any]]:
    """Build the ``outputs`` list the service uses to locate the paying output."""
    return [
        {
            "vout": vout,
            "satoshis": satoshis,
            "derivationSuffix": derivation_suffix,
        }
    ]
