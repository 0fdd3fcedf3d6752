"""
Exception types. Every failure is a distinct subclass of SiweError (a ValueError).
"""

from __future__ import annotations


class SiweError(ValueError):
    """Base class for all picosiwe errors.

    Args:
        message: Human-readable description.
        line_number: 1-based line of the message text the error refers to,
            when raised by the parser.
    """

    def __init__(self, message: str, line_number: int | None = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class InvalidAddress(SiweError):
    """Address text is not 40 hex chars, optionally prefixed by 0x."""


InvalidFormat = InvalidAddress


# --- Model / structured-data validation ---


class InvalidMessage(SiweError):
    """A Message field (or its structured encoding) has an invalid value."""


class InvalidStatement(InvalidMessage):
    pass


class InvalidTimestamp(InvalidMessage):
    pass


class InvalidChainID(InvalidMessage):
    pass


class UnsupportedVersion(InvalidMessage):
    pass


# --- Text layout ---


class ParseError(SiweError):
    """The message text does not follow the EIP-4361 layout."""


class InvalidDomain(ParseError):
    pass


class ExpectedEmptyLine(ParseError):
    pass


class InvalidURI(ParseError):
    pass


class InvalidVersion(ParseError):
    pass


class InvalidNonce(ParseError):
    pass


class InvalidIssuedAt(ParseError):
    pass


class InvalidEncoding(ParseError):
    """Byte input is not valid UTF-8."""


class UnexpectedEnd(ParseError):
    """Input ended while a mandatory line was still expected."""


class UnexpectedContent(ParseError):
    """Lines remain after the last recognised section."""


# --- Verification ---


class VerificationError(SiweError):
    """Signature or binding checks failed for an otherwise valid Message."""


class MalformedSignature(VerificationError):
    pass


class RecoveryFailed(VerificationError):
    pass


class AddressMismatch(VerificationError):
    pass


class DomainMismatch(VerificationError):
    pass


class NonceMismatch(VerificationError):
    pass


class TimeConstraintViolated(VerificationError):
    pass


__all__: tuple[str, ...] = (
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
