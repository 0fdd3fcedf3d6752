"""Elliptic-curve crypto: secp256k1 (Ethereum)."""

from .secp256k1 import (
    privkey_to_address,
    privkey_to_pubkey,
    pubkey_to_address_bytes,
    recover_pubkey,
    sign_recoverable,
)

__all__: tuple[str, ...] = (
    "privkey_to_address",
    "privkey_to_pubkey",
    "pubkey_to_address_bytes",
    "recover_pubkey",
    "sign_recoverable",
)
