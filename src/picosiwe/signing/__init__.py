"""Signing schemas: EIP-191 personal messages (what SIWE signs)."""

from .eip191 import (
    eip191_hash,
    eip191_message,
    sign_message,
    valid,
    valid_at,
    verify,
    verify_signature,
)

__all__: tuple[str, ...] = (
    "eip191_hash",
    "eip191_message",
    "sign_message",
    "valid",
    "valid_at",
    "verify",
    "verify_signature",
)
