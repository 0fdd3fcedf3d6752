"""
Sign-In with Ethereum (EIP-4361): message model, text parser, EIP-191 signature verification.
Keccak-256 via eth-hash, secp256k1 recovery via coincurve.
"""

import logging

from .__about__ import __version__
from .address import Address
from .curves import (
    privkey_to_address,
    privkey_to_pubkey,
    pubkey_to_address_bytes,
    recover_pubkey,
    sign_recoverable,
)
from .errors import (
    AddressMismatch,
    DomainMismatch,
    ExpectedEmptyLine,
    InvalidAddress,
    InvalidChainID,
    InvalidDomain,
    InvalidEncoding,
    InvalidFormat,
    InvalidIssuedAt,
    InvalidMessage,
    InvalidNonce,
    InvalidStatement,
    InvalidTimestamp,
    InvalidURI,
    InvalidVersion,
    MalformedSignature,
    NonceMismatch,
    ParseError,
    RecoveryFailed,
    SiweError,
    TimeConstraintViolated,
    UnexpectedContent,
    UnexpectedEnd,
    UnsupportedVersion,
    VerificationError,
)
from .hashes import keccak256
from .message import V1, Message
from .nonce import generate_nonce
from .parser import parse_message
from .serde import (
    message_from_dict,
    message_from_json,
    message_to_dict,
    message_to_json,
)
from .signing import (
    eip191_hash,
    eip191_message,
    sign_message,
    valid,
    valid_at,
    verify,
    verify_signature,
)
from .timestamps import format_timestamp, parse_timestamp

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__: tuple[str, ...] = (
    # About
    "__version__",
    # Message model and text form
    "Address",
    "Message",
    "V1",
    "parse_message",
    "format_timestamp",
    "parse_timestamp",
    "generate_nonce",
    # Serde
    "message_from_dict",
    "message_from_json",
    "message_to_dict",
    "message_to_json",
    # Signing: EIP-191 (what SIWE signs)
    "eip191_hash",
    "eip191_message",
    "sign_message",
    "valid",
    "valid_at",
    "verify",
    "verify_signature",
    # Primitives
    "keccak256",
    "privkey_to_address",
    "privkey_to_pubkey",
    "pubkey_to_address_bytes",
    "recover_pubkey",
    "sign_recoverable",
    # Errors
    "AddressMismatch",
    "DomainMismatch",
    "ExpectedEmptyLine",
    "InvalidAddress",
    "InvalidChainID",
    "InvalidDomain",
    "InvalidEncoding",
    "InvalidFormat",
    "InvalidIssuedAt",
    "InvalidMessage",
    "InvalidNonce",
    "InvalidStatement",
    "InvalidTimestamp",
    "InvalidURI",
    "InvalidVersion",
    "MalformedSignature",
    "NonceMismatch",
    "ParseError",
    "RecoveryFailed",
    "SiweError",
    "TimeConstraintViolated",
    "UnexpectedContent",
    "UnexpectedEnd",
    "UnsupportedVersion",
    "VerificationError",
)
