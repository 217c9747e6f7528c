"""
Key derivation and locking scripts for hosting payments.

Payment outputs are locked to a one-time key derived with the BRC-42 scheme:

    invoice_number = "2-3241645161d8-{prefix} {suffix}"
    shared_secret  = sender_private_key * recipient_public_key   (SEC, compressed)
    h              = HMAC-SHA256(key=shared_secret, msg=invoice_number)
    child_pub      = recipient_public_key + h * G

The recipient can compute the matching private key as
``recipient_private_key + h (mod n)``, so only the host can spend the output,
and a different prefix/suffix pair yields an unrelated key.

A wallet deriving through ``getPublicKey`` with protocol ``[2, "3241645161d8"]``
and key ID ``"{prefix} {suffix}"`` produces the same key.
"""

from __future__ import annotations

import hashlib
import hmac
from typing import List, Union

from Crypto.Hash import RIPEMD160
from ecdsa import SECP256k1, SigningKey, VerifyingKey
from ecdsa.util import sigencode_der_canonize

CURVE = SECP256k1
CURVE_ORDER = CURVE.order

PAYMENT_PROTOCOL_ID: List[Union[int, str]] = [2, "3241645161d8"]
"""Security level and protocol name for NanoStore hosting payments."""

# Script opcodes
OP_DUP = 0x76
OP_HASH160 = 0xA9
OP_EQUALVERIFY = 0x88
OP_CHECKSIG = 0xAC


def payment_key_id(derivation_prefix: str, derivation_suffix: str) -> str:
    """Key ID under which a wallet derives the payment key."""
    return f"{derivation_prefix} {derivation_suffix}"


def payment_invoice_number(derivation_prefix: str, derivation_suffix: str) -> str:
    """BRC-42 invoice number for a hosting payment."""
    level, protocol = PAYMENT_PROTOCOL_ID
    return f"{level}-{protocol}-{payment_key_id(derivation_prefix, derivation_suffix)}"


def _signing_key(private_key_hex: str) -> SigningKey:
    return SigningKey.from_string(bytes.fromhex(private_key_hex), curve=CURVE)


def _verifying_key(public_key_hex: str) -> VerifyingKey:
    return VerifyingKey.from_string(bytes.fromhex(public_key_hex), curve=CURVE)


def _compressed(point) -> bytes:
    return VerifyingKey.from_public_point(point, curve=CURVE).to_string("compressed")


def public_key_from_private(private_key_hex: str) -> str:
    """Compressed public key (hex) for a private key (hex)."""
    return _signing_key(private_key_hex).get_verifying_key().to_string("compressed").hex()


def _invoice_scalar(private_key_hex: str, public_key_hex: str, invoice_number: str) -> int:
    secret_exponent = _signing_key(private_key_hex).privkey.secret_multiplier
    shared_point = _verifying_key(public_key_hex).pubkey.point * secret_exponent
    shared_secret = _compressed(shared_point)
    digest = hmac.new(shared_secret, invoice_number.encode("utf-8"), hashlib.sha256).digest()
    return int.from_bytes(digest, "big") % CURVE_ORDER


def derive_child_public_key(
    sender_private_key: str,
    recipient_public_key: str,
    invoice_number: str,
) -> str:
    """
    Derive the recipient's one-time public key for an invoice number.

    Args:
        sender_private_key: Payer's private key, hex
        recipient_public_key: Host's identity key, compressed or uncompressed hex
        invoice_number: Output of :func:`payment_invoice_number`

    Returns:
        Compressed child public key, hex

    Raises:
        ValueError: If a key is malformed
    """
    scalar = _invoice_scalar(sender_private_key, recipient_public_key, invoice_number)
    child_point = _verifying_key(recipient_public_key).pubkey.point + CURVE.generator * scalar
    return _compressed(child_point).hex()


def derive_child_private_key(
    recipient_private_key: str,
    sender_public_key: str,
    invoice_number: str,
) -> str:
    """
    Recipient-side counterpart of :func:`derive_child_public_key`.

    Returns:
        Child private key, 32-byte hex
    """
    scalar = _invoice_scalar(recipient_private_key, sender_public_key, invoice_number)
    secret_exponent = _signing_key(recipient_private_key).privkey.secret_multiplier
    child = (secret_exponent + scalar) % CURVE_ORDER
    return child.to_bytes(32, "big").hex()


def hash160(data: bytes) -> bytes:
    """RIPEMD-160 of SHA-256."""
    return RIPEMD160.new(hashlib.sha256(data).digest()).digest()


def p2pkh_locking_script(public_key_hex: str) -> str:
    """
    Pay-to-public-key-hash locking script for a public key.

    ``OP_DUP OP_HASH160 <20-byte hash> OP_EQUALVERIFY OP_CHECKSIG``

    Raises:
        ValueError: If the public key is not a valid secp256k1 point
    """
    public_key = _verifying_key(public_key_hex).to_string("compressed")
    pubkey_hash = hash160(public_key)
    script = bytes([OP_DUP, OP_HASH160, len(pubkey_hash)]) + pubkey_hash
    script += bytes([OP_EQUALVERIFY, OP_CHECKSIG])
    return script.hex()


def sign_digest(private_key_hex: str, digest: bytes) -> str:
    """Deterministic (RFC 6979) low-S DER signature over a 32-byte digest, hex."""
    signature = _signing_key(private_key_hex).sign_digest_deterministic(
        digest,
        hashfunc=hashlib.sha256,
        sigencode=sigencode_der_canonize,
    )
    return signature.hex()
