"""
Payment output derivation.

Produces the output that pays for a hosting contract without spending
anything. Pay it with :func:`nanostore_publisher.pay.pay`, or include it in a
transaction of your own and call :func:`nanostore_publisher.pay.submit_payment`.
"""

from __future__ import annotations

import base64
import secrets
from typing import Optional

from nanostore_publisher.clients import default_wallet
from nanostore_publisher.config import PublisherConfig, resolve_config
from nanostore_publisher.errors import (
    CreateScriptError,
    CryptoFailureError,
    DerivePublicKeyError,
    InvalidAmountError,
    InvalidRecipientKeyError,
)
from nanostore_publisher.keys import (
    PAYMENT_PROTOCOL_ID,
    derive_child_public_key,
    p2pkh_locking_script,
    payment_invoice_number,
    payment_key_id,
)
from nanostore_publisher.types import PAYMENT_BASKET, PAYMENT_DESCRIPTION, PaymentInfo, PaymentOutput
from nanostore_publisher.utils.logging import get_logger
from nanostore_publisher.utils.validation import is_non_empty_string, is_positive_integer, require
from nanostore_publisher.wallet import Wallet

_logger = get_logger(__name__)

DERIVATION_NONCE_BYTES = 10


def generate_derivation_nonce() -> str:
    """
    Return 10 bytes from the OS CSPRNG, base64 encoded.

    Raises:
        CryptoFailureError: If the randomness source is unavailable
    """
    try:
        return base64.b64encode(secrets.token_bytes(DERIVATION_NONCE_BYTES)).decode("ascii")
    except (OSError, NotImplementedError) as exc:
        raise CryptoFailureError(exc) from exc


async def derive_payment_info(
    recipient_public_key: str,
    amount: int,
    *,
    config: Optional[PublisherConfig] = None,
    wallet: Optional[Wallet] = None,
) -> PaymentInfo:
    """
    Derive an output paying for a NanoStore hosting contract.

    A fresh derivation prefix and suffix are drawn for every call, so no two
    payments share an output key.

    Args:
        recipient_public_key: Identity key of the host receiving the payment
        amount: Number of satoshis being paid
        config: Publisher configuration (defaults to DEFAULT_CONFIG)
        wallet: Wallet used for derivation when no private key is configured

    Returns:
        PaymentInfo with the derivation nonces, the derived key and the output

    Raises:
        InvalidRecipientKeyError: If recipient_public_key is empty
        InvalidAmountError: If amount is not a positive whole number of satoshis
        CryptoFailureError: If secure randomness is unavailable
        DerivePublicKeyError: If the one-time key cannot be derived
        CreateScriptError: If the locking script cannot be built
    """
    require(is_non_empty_string, recipient_public_key, InvalidRecipientKeyError)
    require(
        is_positive_integer,
        amount,
        lambda value: InvalidAmountError(value, reason="Must be a positive integer."),
    )
    config = resolve_config(config)

    derivation_prefix = generate_derivation_nonce()
    derivation_suffix = generate_derivation_nonce()

    try:
        if config.client_private_key:
            derived_public_key = derive_child_public_key(
                config.client_private_key,
                recipient_public_key,
                payment_invoice_number(derivation_prefix, derivation_suffix),
            )
        else:
            wallet = wallet or default_wallet(config)
            derived_public_key = await wallet.derive_public_key(
                protocol_id=PAYMENT_PROTOCOL_ID,
                key_id=payment_key_id(derivation_prefix, derivation_suffix),
                counterparty=recipient_public_key,
            )
    except Exception as exc:
        _logger.error("Public key derivation failed", extra={"error": str(exc)})
        raise DerivePublicKeyError(exc) from exc

    try:
        script = p2pkh_locking_script(derived_public_key)
    except Exception as exc:
        raise CreateScriptError(exc) from exc

    _logger.debug(
        "Derived payment output",
        extra={"derived_public_key": derived_public_key, "satoshis": amount},
    )

    return PaymentInfo(
        derivation_prefix=derivation_prefix,
        derivation_suffix=derivation_suffix,
        derived_public_key=derived_public_key,
        output=PaymentOutput(
            script=script,
            satoshis=int(amount),
            basket=PAYMENT_BASKET,
            description=PAYMENT_DESCRIPTION,
        ),
    )
