"""
secp256k1 (Ethereum curve): key derivation, recoverable ECDSA sign, public key recovery.

Curve arithmetic is delegated to libsecp256k1 through coincurve.
"""

from __future__ import annotations

from coincurve import PrivateKey, PublicKey

from ..hashes import keccak256


def privkey_to_pubkey(privkey: bytes) -> bytes:
    """
    Derive uncompressed public key (65 bytes: 0x04 || x || y) from 32-byte private key.

    Args:
        privkey: 32-byte secp256k1 private key.

    Returns:
        65-byte uncompressed public key.
    """
    if len(privkey) != 32:
        raise ValueError("privkey must be 32 bytes")
    return PrivateKey(privkey).public_key.format(compressed=False)


def pubkey_to_address_bytes(pubkey: bytes) -> bytes:
    """Ethereum address bytes: low 20 bytes of keccak256(x || y)."""
    if len(pubkey) != 65 or pubkey[0] != 0x04:
        raise ValueError("pubkey must be 65-byte uncompressed")
    return keccak256(pubkey[1:])[12:]


def privkey_to_address(privkey: bytes) -> str:
    """
    Ethereum address (0x + 40 lowercase hex) from 32-byte private key.

    Args:
        privkey: 32-byte secp256k1 private key.

    Returns:
        "0x" plus 40 hex chars (keccak256(pubkey)[12:32]).
    """
    return "0x" + pubkey_to_address_bytes(privkey_to_pubkey(privkey)).hex()


def recover_pubkey(msg_hash: bytes, r: int, s: int, recid: int) -> bytes:
    """
    Recover uncompressed public key (65 bytes) from ECDSA signature (msg_hash, r, s, recid).

    Args:
        msg_hash: 32-byte message hash that was signed.
        r, s: Signature components (scalars).
        recid: Recovery id (0-3) indicating which public key.

    Returns:
        65-byte uncompressed public key.

    Raises:
        ValueError: if the inputs are out of range or no point can be recovered.
    """
    if len(msg_hash) != 32:
        raise ValueError("msg_hash must be 32 bytes")
    if not 0 <= recid <= 3:
        raise ValueError(f"invalid recovery id {recid}")
    if not (0 <= r < 1 << 256 and 0 <= s < 1 << 256):
        raise ValueError("r and s must fit in 32 bytes")
    sig = r.to_bytes(32, "big") + s.to_bytes(32, "big") + bytes([recid])
    pub = PublicKey.from_signature_and_message(sig, msg_hash, hasher=None)
    return pub.format(compressed=False)


def sign_recoverable(privkey: bytes, msg_hash: bytes) -> tuple[int, int, int]:
    """
    ECDSA sign with recovery id; returns (r, s, v) with v in {27, 28}. RFC 6979 nonce.

    Args:
        privkey: 32-byte private key.
        msg_hash: 32-byte message hash to sign.

    Returns:
        (r, s, v) where v is 27 or 28 for Ethereum-style recovery.
    """
    if len(privkey) != 32 or len(msg_hash) != 32:
        raise ValueError("privkey and msg_hash must be 32 bytes")
    sig = PrivateKey(privkey).sign_recoverable(msg_hash, hasher=None)
    r = int.from_bytes(sig[:32], "big")
    s = int.from_bytes(sig[32:64], "big")
    return (r, s, 27 + sig[64])


__all__: tuple[str, ...] = (
    "privkey_to_address",
    "privkey_to_pubkey",
    "pubkey_to_address_bytes",
    "recover_pubkey",
    "sign_recoverable",
)
