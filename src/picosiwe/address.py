"""
Ethereum address value type with EIP-55 checksum encoding.
"""

from __future__ import annotations

import binascii

from .errors import InvalidAddress
from .hashes import keccak256

ADDRESS_SIZE = 20


class Address:
    """
    20-byte Ethereum address.

    Keeps the text it was parsed from so a message can be re-serialized with the
    signer's original casing, even when that casing is not a valid checksum.
    Equality and hashing use the bytes only.
    """

    __slots__ = ("_data", "_raw")

    def __init__(self, data: bytes, raw: str = "") -> None:
        data = bytes(data)
        if len(data) != ADDRESS_SIZE:
            raise InvalidAddress(f"address must be {ADDRESS_SIZE} bytes, got {len(data)}")
        self._data = data
        self._raw = raw

    @classmethod
    def parse(cls, text: str) -> Address:
        """
        Parse 40 hex chars, or "0x" + 40 hex chars (any letter case).

        Args:
            text: Address text.

        Returns:
            Address whose raw_string() is `text`.

        Raises:
            InvalidAddress: on a wrong length, missing 0x prefix or non-hex character.
        """
        if not isinstance(text, str):
            raise InvalidAddress(f"address must be a string, got {type(text).__name__}")
        if len(text) == 42:
            if not text.startswith("0x"):
                raise InvalidAddress(f"invalid address prefix: {text!r}")
            digits = text[2:]
        elif len(text) == 40:
            digits = text
        else:
            raise InvalidAddress(f"invalid address length {len(text)}: {text!r}")
        try:
            data = binascii.unhexlify(digits.encode("ascii"))
        except (UnicodeEncodeError, binascii.Error) as e:
            raise InvalidAddress(f"invalid hex in address: {text!r}") from e
        return cls(data, text)

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def raw(self) -> str:
        return self._raw

    def bytes(self) -> bytes:
        """The 20 address bytes."""
        return self._data

    def raw_string(self) -> str:
        """Exact text this address was parsed from, or "" if built from bytes."""
        return self._raw

    def non_checksum_string(self) -> str:
        return "0x" + self._data.hex()

    def checksum_string(self) -> str:
        """
        EIP-55 mixed-case encoding.

        A hex letter is uppercased iff the matching nibble of
        keccak256(lowercase hex) is >= 8.
        """
        lower = self._data.hex()
        digest = keccak256(lower.encode("ascii"))
        out = []
        for i, ch in enumerate(lower):
            nibble = digest[i // 2] >> 4 if i % 2 == 0 else digest[i // 2] & 0x0F
            out.append(ch.upper() if ch in "abcdef" and nibble >= 8 else ch)
        return "0x" + "".join(out)

    def __bytes__(self) -> bytes:
        return self._data

    def __str__(self) -> str:
        return self.checksum_string()

    def __repr__(self) -> str:
        return f"Address({self.checksum_string()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)


__all__: tuple[str, ...] = ("ADDRESS_SIZE", "Address")
