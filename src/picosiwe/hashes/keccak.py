"""
Keccak-256 (the pre-standard SHA-3 variant Ethereum uses), backed by eth-hash.
"""

from __future__ import annotations

from eth_hash.auto import keccak


def keccak256(data: bytes) -> bytes:
    """
    Keccak-256 hash (256-bit output, multirate padding).

    Args:
        data: Input bytes (any length).

    Returns:
        32-byte digest.
    """
    return keccak(bytes(data))


__all__: tuple[str, ...] = ("keccak256",)
