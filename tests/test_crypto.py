"""Minimal pytest tests for the keccak / secp256k1 wrappers."""

import pytest

from picosiwe import (
    keccak256,
    privkey_to_address,
    privkey_to_pubkey,
    pubkey_to_address_bytes,
    recover_pubkey,
    sign_recoverable,
)

KECCAK256_EMPTY = bytes.fromhex(
    "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
)


def test_keccak256_empty() -> None:
    assert keccak256(b"") == KECCAK256_EMPTY


def test_keccak256_output_length() -> None:
    assert len(keccak256(b"hello")) == 32
    assert len(keccak256(b"x" * 200)) == 32


def test_keccak256_deterministic() -> None:
    assert keccak256(b"same input") == keccak256(bytearray(b"same input"))


def test_privkey_to_pubkey() -> None:
    priv = bytes(31) + bytes([1])
    pub = privkey_to_pubkey(priv)
    assert len(pub) == 65
    assert pub[0] == 0x04


def test_privkey_to_pubkey_rejects_bad_length() -> None:
    with pytest.raises(ValueError):
        privkey_to_pubkey(bytes(31))


def test_privkey_to_address() -> None:
    priv = bytes(31) + bytes([1])
    addr = privkey_to_address(priv)
    assert addr.startswith("0x")
    assert len(addr) == 42
    assert bytes.fromhex(addr[2:]) == pubkey_to_address_bytes(privkey_to_pubkey(priv))


def test_pubkey_to_address_rejects_compressed() -> None:
    with pytest.raises(ValueError):
        pubkey_to_address_bytes(bytes([0x02]) + bytes(32))


def test_sign_recoverable() -> None:
    priv = bytes(31) + bytes([1])
    msg_hash = keccak256(b"message to sign")
    r, s, v = sign_recoverable(priv, msg_hash)
    assert isinstance(r, int) and isinstance(s, int) and isinstance(v, int)
    assert v in (27, 28)


def test_recover_pubkey_round_trip() -> None:
    priv = bytes(31) + bytes([7])
    msg_hash = keccak256(b"another message")
    r, s, v = sign_recoverable(priv, msg_hash)
    assert recover_pubkey(msg_hash, r, s, v - 27) == privkey_to_pubkey(priv)


@pytest.mark.parametrize(
    "msg_hash, r, s, recid",
    [
        (bytes(31), 1, 1, 0),
        (bytes(32), 1, 1, 4),
        (bytes(32), 0, 0, 0),
        (bytes(32), 1 << 256, 1, 0),
    ],
)
def test_recover_pubkey_rejects(msg_hash: bytes, r: int, s: int, recid: int) -> None:
    with pytest.raises(ValueError):
        recover_pubkey(msg_hash, r, s, recid)
