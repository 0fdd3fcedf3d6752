"""
Nonce generation for SIWE messages.
"""

from __future__ import annotations

import secrets

ALPHANUMERIC = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
NONCE_SIZE = 8


def generate_nonce() -> str:
    """Random 8-character alphanumeric nonce, each character uniform over 62 symbols."""
    return "".join(secrets.choice(ALPHANUMERIC) for _ in range(NONCE_SIZE))


__all__: tuple[str, ...] = ("ALPHANUMERIC", "NONCE_SIZE", "generate_nonce")
