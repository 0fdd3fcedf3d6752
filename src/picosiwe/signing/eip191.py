"""
EIP-191 personal messages: hash, sign and verify a SIWE message, plus time-bound validity.
"""

from __future__ import annotations

import binascii
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from ..curves import pubkey_to_address_bytes, recover_pubkey, sign_recoverable
from ..errors import (
    AddressMismatch,
    DomainMismatch,
    MalformedSignature,
    NonceMismatch,
    RecoveryFailed,
    TimeConstraintViolated,
)
from ..hashes import keccak256

if TYPE_CHECKING:
    from ..message import Message

logger = logging.getLogger(__name__)

EIP191_PREFIX = b"\x19Ethereum Signed Message:\n"
SIGNATURE_SIZE = 65


def eip191_message(message: Message) -> bytes:
    """
    Personal-message encoding: prefix + decimal byte length + UTF-8 text.

    Args:
        message: Message whose to_string() is the signed text.

    Returns:
        Bytes that are hashed for signing.
    """
    text = message.to_string().encode("utf-8")
    return EIP191_PREFIX + str(len(text)).encode("ascii") + text


def eip191_hash(message: Message) -> bytes:
    """
    Hash used for SIWE signing (keccak256 of the EIP-191 encoding).

    Args:
        message: Message to hash.

    Returns:
        32-byte Keccak-256 digest.
    """
    return keccak256(eip191_message(message))


def sign_message(message: Message, privkey: bytes) -> bytes:
    """
    Sign a message the way wallets do for personal_sign.

    Args:
        message: Message to sign.
        privkey: 32-byte secp256k1 private key.

    Returns:
        65-byte signature r || s || v with v in {27, 28}.
    """
    r, s, v = sign_recoverable(privkey, eip191_hash(message))
    return r.to_bytes(32, "big") + s.to_bytes(32, "big") + bytes([v])


def _signature_bytes(signature: bytes | str) -> bytes:
    if isinstance(signature, str):
        digits = signature[2:] if signature.startswith("0x") else signature
        try:
            signature = binascii.unhexlify(digits.encode("ascii"))
        except (UnicodeEncodeError, binascii.Error) as e:
            raise MalformedSignature("signature is not valid hex") from e
    elif isinstance(signature, (bytes, bytearray, memoryview)):
        signature = bytes(signature)
    else:
        raise MalformedSignature(f"signature must be bytes or hex, got {type(signature).__name__}")
    if len(signature) != SIGNATURE_SIZE:
        raise MalformedSignature(
            f"signature must be {SIGNATURE_SIZE} bytes, got {len(signature)}"
        )
    return signature


def _recovery_id(v: int) -> int:
    """Map the trailing signature byte to a recovery id (0-3)."""
    if v <= 3:
        return v
    # 27..30 uncompressed, 31..34 compressed key flag
    if 27 <= v <= 34:
        return (v - 27) & 3
    raise RecoveryFailed(f"invalid recovery byte {v}")


def verify_signature(message: Message, signature: bytes | str) -> None:
    """
    Check that `signature` over eip191_hash(message) was made by message.address.

    Args:
        message: Message whose text was signed.
        signature: 65 bytes r || s || v, or the same as hex (0x optional).

    Raises:
        MalformedSignature: wrong length or undecodable hex.
        RecoveryFailed: no public key can be recovered.
        AddressMismatch: the recovered key belongs to another address.
    """
    sig = _signature_bytes(signature)
    recid = _recovery_id(sig[64])
    r = int.from_bytes(sig[:32], "big")
    s = int.from_bytes(sig[32:64], "big")
    try:
        pubkey = recover_pubkey(eip191_hash(message), r, s, recid)
    except ValueError as e:
        raise RecoveryFailed(f"public key recovery failed: {e}") from e
    recovered = pubkey_to_address_bytes(pubkey)
    if recovered != message.address.bytes():
        logger.debug(
            "signature recovered 0x%s, message claims %s",
            recovered.hex(),
            message.address.checksum_string(),
        )
        raise AddressMismatch(
            f"signature is from 0x{recovered.hex()}, not {message.address.checksum_string()}"
        )


def valid_at(message: Message, now: datetime) -> bool:
    """
    True unless `now` is after expiration_time or before not_before.

    Instants are compared absolutely, so the zone of `now` does not matter.
    """
    if now.utcoffset() is None:
        raise ValueError("now must be timezone-aware")
    if message.expiration_time is not None and now > message.expiration_time:
        return False
    if message.not_before is not None and now < message.not_before:
        return False
    return True


def valid(message: Message) -> bool:
    return valid_at(message, datetime.now(timezone.utc))


def verify(
    message: Message,
    signature: bytes | str,
    *,
    domain: str | None = None,
    nonce: str | None = None,
    timestamp: datetime | None = None,
) -> None:
    """
    Full relying-party check: signature, then optional domain/nonce binding, then time.

    Args:
        message: Parsed or constructed message.
        signature: 65-byte signature (or hex).
        domain: If given, must equal message.domain.
        nonce: If given, must equal message.nonce.
        timestamp: Instant to check validity at; defaults to now.

    Raises:
        VerificationError subclass describing the first failed check.
    """
    verify_signature(message, signature)
    if domain is not None and domain != message.domain:
        raise DomainMismatch(f"message domain {message.domain!r} != {domain!r}")
    if nonce is not None and nonce != message.nonce:
        raise NonceMismatch(f"message nonce {message.nonce!r} != {nonce!r}")
    now = timestamp if timestamp is not None else datetime.now(timezone.utc)
    if not valid_at(message, now):
        logger.debug(
            "message outside validity window at %s (not before %s, expires %s)",
            now.isoformat(),
            message.not_before,
            message.expiration_time,
        )
        raise TimeConstraintViolated(f"message not valid at {now.isoformat()}")


__all__: tuple[str, ...] = (
    "EIP191_PREFIX",
    "SIGNATURE_SIZE",
    "eip191_hash",
    "eip191_message",
    "sign_message",
    "valid",
    "valid_at",
    "verify",
    "verify_signature",
)
