"""
Paying for hosting and redeeming the payment for upload credentials.

- :func:`pay` derives the payment output, has the wallet build a transaction
  paying it, and submits that transaction.
- :func:`submit_payment` submits a transaction built out-of-band (it must
  include an output obtained from ``derive_payment_info``).

Both end with ``POST /pay``, which answers with the upload URL.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from nanostore_publisher.clients import default_wallet, storage_client
from nanostore_publisher.config import PublisherConfig, resolve_config
from nanostore_publisher.errors import (
    CreatePaymentError,
    DerivePaymentInfoError,
    InvalidAmountError,
    InvalidDerivationPrefixError,
    InvalidDerivationSuffixError,
    InvalidOrderIdError,
    InvalidPaymentError,
    InvalidRecipientKeyError,
    InvalidVoutError,
    NanoStoreError,
    PaymentRequestError,
    RemoteServiceError,
    SubmitPaymentError,
    TransportError,
    WalletError,
)
from nanostore_publisher.payment_info import derive_payment_info
from nanostore_publisher.transport import SignedRequestClient
from nanostore_publisher.types import (
    PAYMENT_BASKET,
    PAYMENT_DESCRIPTION,
    STATUS_ERROR,
    PaymentResult,
    SignedPayment,
    output_descriptor,
)
from nanostore_publisher.utils.logging import get_logger
from nanostore_publisher.utils.validation import (
    is_integer,
    is_non_empty_string,
    is_positive_integer,
    require,
)
from nanostore_publisher.wallet import Wallet

_logger = get_logger(__name__)

PAY_PATH = "/pay"
PAYMENT_LABELS = [PAYMENT_BASKET]
PAYMENT_TOPICS = ["UHRP"]


def _invalid_amount(value: Any) -> InvalidAmountError:
    return InvalidAmountError(value, reason="Must be a positive integer.")


def _is_vout(value: Any) -> bool:
    return is_integer(value) and value >= 0


def _is_payment(value: Any) -> bool:
    return isinstance(value, (SignedPayment, Mapping))


async def _send_payment(
    client: SignedRequestClient,
    *,
    order_id: str,
    amount: int,
    payment: SignedPayment,
    vout: int,
    derivation_prefix: str,
    derivation_suffix: str,
) -> PaymentResult:
    transaction: Dict[str, Any] = payment.to_wire()
    transaction["outputs"] = output_descriptor(int(vout), int(amount), derivation_suffix)
    body = {
        "derivationPrefix": derivation_prefix,
        "orderID": order_id,
        "transaction": transaction,
    }

    _logger.info("Submitting payment", extra={"order_id": order_id, "satoshis": amount})

    try:
        response = await client.create_signed_request(PAY_PATH, body)
    except (TransportError, WalletError) as exc:
        _logger.error("Payment submission failed", extra={"order_id": order_id, "error": exc.message})
        raise PaymentRequestError(exc, url=client.url_for(PAY_PATH)) from exc

    if not isinstance(response, dict):
        raise SubmitPaymentError("Invalid payment response format")

    if response.get("status") == STATUS_ERROR:
        raise SubmitPaymentError(
            response.get("description"),
            service_code=response.get("code"),
        )

    try:
        result = PaymentResult.model_validate(response)
    except PydanticValidationError as exc:
        raise SubmitPaymentError("Invalid payment response format") from exc

    _logger.info("Payment accepted", extra={"order_id": order_id, "status": result.status})
    return result


async def submit_payment(
    order_id: str,
    amount: int,
    payment: Union[SignedPayment, Mapping],
    vout: int,
    derivation_prefix: str,
    derivation_suffix: str,
    *,
    config: Optional[PublisherConfig] = None,
    client: Optional[SignedRequestClient] = None,
) -> PaymentResult:
    """
    Submit a manually-created payment for NanoStore hosting.

    Obtain the output to include with ``derive_payment_info``, build and sign
    the transaction yourself, then submit its envelope here. ``vout`` is the
    index of the output paying the invoice.

    Args:
        order_id: The hosting invoice reference
        amount: Number of satoshis paid
        payment: Transaction envelope (``inputs``, ``mapiResponses``, ``rawTx``)
        vout: Index of the paying output
        derivation_prefix: Value returned by ``derive_payment_info``
        derivation_suffix: Value returned by ``derive_payment_info``
        config: Publisher configuration (defaults to DEFAULT_CONFIG)
        client: Pre-built signed client for the storage service

    Returns:
        PaymentResult with the upload URL, public URL and status

    Raises:
        InvalidAmountError, InvalidOrderIdError, InvalidVoutError,
        InvalidPaymentError, InvalidDerivationPrefixError,
        InvalidDerivationSuffixError: On invalid input, before any request
        PaymentRequestError: If the request could not be completed
        SubmitPaymentError: If the service rejected the payment
    """
    require(is_positive_integer, amount, _invalid_amount)
    require(is_non_empty_string, order_id, InvalidOrderIdError)
    require(_is_vout, vout, InvalidVoutError)
    require(_is_payment, payment, InvalidPaymentError)
    require(is_non_empty_string, derivation_prefix, InvalidDerivationPrefixError)
    require(is_non_empty_string, derivation_suffix, InvalidDerivationSuffixError)

    if not isinstance(payment, SignedPayment):
        try:
            payment = SignedPayment.model_validate(dict(payment))
        except PydanticValidationError as exc:
            raise InvalidPaymentError(payment) from exc

    config = resolve_config(config)
    client = client or storage_client(config)

    return await _send_payment(
        client,
        order_id=order_id,
        amount=amount,
        payment=payment,
        vout=vout,
        derivation_prefix=derivation_prefix,
        derivation_suffix=derivation_suffix,
    )


async def pay(
    order_id: str,
    recipient_public_key: str,
    amount: int,
    *,
    description: str = PAYMENT_DESCRIPTION,
    config: Optional[PublisherConfig] = None,
    wallet: Optional[Wallet] = None,
    client: Optional[SignedRequestClient] = None,
) -> PaymentResult:
    """
    Pay a hosting invoice and obtain upload credentials.

    With ``config.client_private_key`` set the transaction is built from that
    key through the wallet backend; otherwise the remote wallet creates it
    via ``createAction``.

    Args:
        order_id: The hosting invoice reference
        recipient_public_key: Identity key of the host receiving the payment
        amount: Number of satoshis to pay
        description: Human description attached to the wallet action
        config: Publisher configuration (defaults to DEFAULT_CONFIG)
        wallet: Wallet override (defaults from config)
        client: Pre-built signed client for the storage service

    Returns:
        PaymentResult with the upload URL, public URL and status

    Raises:
        InvalidAmountError, InvalidOrderIdError, InvalidRecipientKeyError:
            On invalid input, before any request
        DerivePaymentInfoError: If the payment output cannot be derived
        CreatePaymentError: If the wallet cannot build the transaction
        PaymentRequestError: If the ``/pay`` request could not be completed
        SubmitPaymentError: If the service rejected the payment
    """
    require(is_positive_integer, amount, _invalid_amount)
    require(is_non_empty_string, order_id, InvalidOrderIdError)
    require(is_non_empty_string, recipient_public_key, InvalidRecipientKeyError)

    config = resolve_config(config)
    wallet = wallet or default_wallet(config)

    try:
        payment_info = await derive_payment_info(
            recipient_public_key,
            amount,
            config=config,
            wallet=wallet,
        )
    except NanoStoreError as exc:
        raise DerivePaymentInfoError(exc) from exc

    outputs = [payment_info.output.model_dump()]
    try:
        if config.client_private_key:
            envelope = await wallet.get_transaction_with_outputs(outputs, note=PAYMENT_DESCRIPTION)
        else:
            envelope = await wallet.create_action(
                outputs,
                description,
                labels=PAYMENT_LABELS,
                topics=PAYMENT_TOPICS,
            )
            if envelope.get("status") == STATUS_ERROR:
                raise RemoteServiceError.from_response(
                    envelope,
                    "Unknown error",
                    "ERR_PAYMENT_ACTION",
                )
        signed_payment = SignedPayment.model_validate(envelope)
    except (NanoStoreError, PydanticValidationError) as exc:
        _logger.error("Payment creation failed", extra={"order_id": order_id, "error": str(exc)})
        raise CreatePaymentError(exc) from exc

    return await _send_payment(
        client or storage_client(config, wallet),
        order_id=order_id,
        amount=amount,
        payment=signed_payment,
        vout=0,
        derivation_prefix=payment_info.derivation_prefix,
        derivation_suffix=payment_info.derivation_suffix,
    )
