"""
Factories wiring a PublisherConfig to its wallet and transport.

With ``client_private_key`` set, a :class:`KeyWallet` and a
:class:`KeySigner` are used; otherwise the :class:`RemoteWallet` at
``config.wallet_url`` handles derivation and signing.
"""

from __future__ import annotations

from typing import Optional

from nanostore_publisher.config import PublisherConfig
from nanostore_publisher.transport import KeySigner, RequestSigner, SignedRequestClient, WalletSigner
from nanostore_publisher.wallet import KeyWallet, RemoteWallet, Wallet


def default_wallet(config: PublisherConfig) -> Wallet:
    if config.client_private_key:
        return KeyWallet(config.client_private_key, config.wallet_backend_url)
    return RemoteWallet(config.wallet_url)


def default_signer(config: PublisherConfig, wallet: Optional[Wallet] = None) -> RequestSigner:
    if config.client_private_key:
        return KeySigner(config.client_private_key)
    return WalletSigner(wallet or default_wallet(config))


def storage_client(
    config: PublisherConfig,
    wallet: Optional[Wallet] = None,
) -> SignedRequestClient:
    """Signed client for ``config.storage_service_url``."""
    return SignedRequestClient(config.storage_service_url, default_signer(config, wallet))
