"""
EIP-4361 message model and its canonical text serialization.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import IO, Iterable

from .address import Address
from .errors import (
    InvalidChainID,
    InvalidMessage,
    InvalidStatement,
    InvalidTimestamp,
    UnsupportedVersion,
)
from .signing import eip191
from .timestamps import format_timestamp

V1 = "1"
SUPPORTED_VERSIONS = frozenset({V1})

DOMAIN_SUFFIX = " wants you to sign in with your Ethereum account:"
URI_PREFIX = "URI: "
VERSION_PREFIX = "Version: "
CHAIN_ID_PREFIX = "Chain ID: "
NONCE_PREFIX = "Nonce: "
ISSUED_AT_PREFIX = "Issued At: "
EXPIRATION_TIME_PREFIX = "Expiration Time: "
NOT_BEFORE_PREFIX = "Not Before: "
REQUEST_ID_PREFIX = "Request ID: "
RESOURCES_HEADER = "Resources:"
RESOURCE_PREFIX = "- "

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def _check_single_line(name: str, value: str) -> None:
    if not isinstance(value, str):
        raise InvalidMessage(f"{name} must be a string, got {type(value).__name__}")
    if "\n" in value or "\r" in value:
        raise InvalidMessage(f"{name} must not contain a line break")


def _check_timestamp(name: str, value: datetime | None) -> None:
    if value is None:
        return
    if not isinstance(value, datetime):
        raise InvalidTimestamp(f"{name} must be a datetime, got {type(value).__name__}")
    if value.utcoffset() is None:
        raise InvalidTimestamp(f"{name} must be timezone-aware")


@dataclass
class Message:
    """
    Sign-In with Ethereum message.

    Fields map one-to-one to the lines of the text form; optional fields are None
    (or an empty list for resources) when the line is absent. A str address is
    parsed with Address.parse, keeping its casing for serialization.
    """

    domain: str
    address: Address
    uri: str
    version: str
    chain_id: int
    nonce: str
    issued_at: datetime
    statement: str | None = None
    expiration_time: datetime | None = None
    not_before: datetime | None = None
    request_id: str | None = None
    resources: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if isinstance(self.address, str):
            self.address = Address.parse(self.address)
        elif not isinstance(self.address, Address):
            raise InvalidMessage(f"address must be an Address, got {type(self.address).__name__}")
        _check_single_line("domain", self.domain)
        if " " in self.domain:
            raise InvalidMessage("domain must not contain a space")
        _check_single_line("uri", self.uri)
        _check_single_line("nonce", self.nonce)
        if self.version not in SUPPORTED_VERSIONS:
            raise UnsupportedVersion(f"version {self.version!r} not supported")
        if isinstance(self.chain_id, bool) or not isinstance(self.chain_id, int):
            raise InvalidChainID(f"chain id must be an int, got {type(self.chain_id).__name__}")
        if not INT64_MIN <= self.chain_id <= INT64_MAX:
            raise InvalidChainID(f"chain id {self.chain_id} out of 64-bit range")
        if self.statement is not None:
            if not isinstance(self.statement, str):
                raise InvalidStatement("statement must be a string")
            if not self.statement:
                raise InvalidStatement("statement must not be empty; use None for no statement")
            if "\n" in self.statement or "\r" in self.statement:
                raise InvalidStatement("statement must not contain a line break")
        if self.issued_at is None:
            raise InvalidTimestamp("issued_at is required")
        _check_timestamp("issued_at", self.issued_at)
        _check_timestamp("expiration_time", self.expiration_time)
        _check_timestamp("not_before", self.not_before)
        if self.request_id is not None:
            _check_single_line("request_id", self.request_id)
        self.resources = list(self.resources)
        for resource in self.resources:
            _check_single_line("resource", resource)

    # --- Text form ---

    @classmethod
    def from_string(cls, text: str) -> Message:
        """Parse the EIP-4361 text form. See picosiwe.parser.parse_message."""
        from .parser import parse_message

        return parse_message(text)

    @classmethod
    def read(cls, stream: IO[str] | Iterable[str]) -> Message:
        """Parse the EIP-4361 text form from a text stream or iterable of lines."""
        from .parser import parse_message

        return parse_message(stream)

    def to_string(self) -> str:
        """
        Canonical EIP-4361 text. This exact text is what gets signed.

        The address is written as originally parsed when that text is known,
        otherwise as its EIP-55 checksum string.
        """
        lines = [
            self.domain + DOMAIN_SUFFIX,
            self.address.raw_string() or self.address.checksum_string(),
            "",
        ]
        if self.statement is not None:
            lines.append(self.statement)
        lines += [
            "",
            URI_PREFIX + self.uri,
            VERSION_PREFIX + self.version,
            CHAIN_ID_PREFIX + str(self.chain_id),
            NONCE_PREFIX + self.nonce,
            ISSUED_AT_PREFIX + format_timestamp(self.issued_at),
        ]
        if self.expiration_time is not None:
            lines.append(EXPIRATION_TIME_PREFIX + format_timestamp(self.expiration_time))
        if self.not_before is not None:
            lines.append(NOT_BEFORE_PREFIX + format_timestamp(self.not_before))
        if self.request_id is not None:
            lines.append(REQUEST_ID_PREFIX + self.request_id)
        if self.resources:
            lines.append(RESOURCES_HEADER)
            lines.extend(RESOURCE_PREFIX + r for r in self.resources)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.to_string()

    # --- Signing and verification (see picosiwe.signing.eip191) ---

    def eip191_hash(self) -> bytes:
        return eip191.eip191_hash(self)

    def sign(self, privkey: bytes) -> bytes:
        return eip191.sign_message(self, privkey)

    def verify_signature(self, signature: bytes | str) -> None:
        eip191.verify_signature(self, signature)

    def valid_at(self, now: datetime) -> bool:
        return eip191.valid_at(self, now)

    def valid(self) -> bool:
        return eip191.valid(self)

    def verify(
        self,
        signature: bytes | str,
        *,
        domain: str | None = None,
        nonce: str | None = None,
        timestamp: datetime | None = None,
    ) -> None:
        eip191.verify(self, signature, domain=domain, nonce=nonce, timestamp=timestamp)


__all__: tuple[str, ...] = (
    "CHAIN_ID_PREFIX",
    "DOMAIN_SUFFIX",
    "EXPIRATION_TIME_PREFIX",
    "ISSUED_AT_PREFIX",
    "Message",
    "NONCE_PREFIX",
    "NOT_BEFORE_PREFIX",
    "REQUEST_ID_PREFIX",
    "RESOURCES_HEADER",
    "RESOURCE_PREFIX",
    "SUPPORTED_VERSIONS",
    "URI_PREFIX",
    "V1",
    "VERSION_PREFIX",
)
