"""
EIP-4361 text parser.

A fixed sequence of line rules run over a line stream with a single line of
push-back: optional rules peek at the next line and hand it back when it is not
theirs. Fields are collected first and the Message is only built once every
rule has succeeded.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Callable, Iterable, Iterator

from .address import Address
from .errors import (
    ExpectedEmptyLine,
    InvalidAddress,
    InvalidChainID,
    InvalidDomain,
    InvalidEncoding,
    InvalidIssuedAt,
    InvalidNonce,
    InvalidTimestamp,
    InvalidURI,
    InvalidVersion,
    SiweError,
    UnexpectedContent,
    UnexpectedEnd,
    UnsupportedVersion,
)
from .message import (
    CHAIN_ID_PREFIX,
    DOMAIN_SUFFIX,
    EXPIRATION_TIME_PREFIX,
    INT64_MAX,
    INT64_MIN,
    ISSUED_AT_PREFIX,
    NONCE_PREFIX,
    NOT_BEFORE_PREFIX,
    REQUEST_ID_PREFIX,
    RESOURCE_PREFIX,
    RESOURCES_HEADER,
    SUPPORTED_VERSIONS,
    URI_PREFIX,
    VERSION_PREFIX,
    Message,
)
from .timestamps import parse_timestamp

_CHAIN_ID_RE = re.compile(r"[+-]?\d+", re.ASCII)


def _iter_lines(source: str | bytes | Iterable[str]) -> Iterator[str]:
    """
    Yield lines without terminators.

    Splits on "\\n" and drops one trailing "\\r" per line; a final newline does
    not produce an extra empty line.
    """
    if isinstance(source, (bytes, bytearray)):
        try:
            source = source.decode("utf-8")
        except UnicodeDecodeError as e:
            line_number = source.count(b"\n", 0, e.start) + 1
            raise InvalidEncoding(f"invalid UTF-8 at byte {e.start}", line_number) from e
    if isinstance(source, str):
        parts = source.split("\n")
        if parts[-1] == "":
            parts.pop()
        chunks: Iterable[str] = parts
    else:
        chunks = source
    for chunk in chunks:
        if chunk.endswith("\n"):
            chunk = chunk[:-1]
        if chunk.endswith("\r"):
            chunk = chunk[:-1]
        yield chunk


class _Parser:
    def __init__(self, lines: Iterator[str]) -> None:
        self._lines = lines
        self._prev: str | None = None
        self._line_number = 0
        self._fields: dict[str, Any] = {"resources": []}

    # --- Line stream ---

    def _next_line(self) -> str | None:
        if self._prev is not None:
            line, self._prev = self._prev, None
            return line
        line = next(self._lines, None)
        if line is not None:
            self._line_number += 1
        return line

    def _require_line(self, what: str) -> str:
        line = self._next_line()
        if line is None:
            raise UnexpectedEnd(f"expected {what}", self._line_number + 1)
        return line

    def _require_prefixed(self, prefix: str, what: str, error: type[SiweError]) -> str:
        line = self._require_line(what)
        if not line.startswith(prefix):
            raise error(f"expected {what} starting with {prefix!r}", self._line_number)
        return line[len(prefix):]

    def _optional(self, rule: Callable[[str], bool]) -> None:
        """Run `rule` on the next line; push the line back if the rule does not apply."""
        line = self._next_line()
        if line is None:
            return
        if not rule(line):
            self._prev = line

    def _timestamp(self, text: str) -> datetime:
        try:
            return parse_timestamp(text)
        except InvalidTimestamp as e:
            raise InvalidTimestamp(str(e), self._line_number) from e

    # --- Rules ---

    def _domain(self) -> None:
        line = self._require_line("domain line")
        if not line.endswith(DOMAIN_SUFFIX):
            raise InvalidDomain(
                f"domain line must end with {DOMAIN_SUFFIX!r}", self._line_number
            )
        self._fields["domain"] = line.split(" ", 1)[0]

    def _address(self) -> None:
        line = self._require_line("address")
        try:
            self._fields["address"] = Address.parse(line)
        except InvalidAddress as e:
            raise InvalidAddress(str(e), self._line_number) from e

    def _empty_line(self) -> None:
        line = self._require_line("empty line")
        if line:
            raise ExpectedEmptyLine(f"expected empty line, got {line!r}", self._line_number)

    def _statement(self, line: str) -> bool:
        if not line:
            return False
        self._fields["statement"] = line
        return True

    def _uri(self) -> None:
        self._fields["uri"] = self._require_prefixed(URI_PREFIX, "URI", InvalidURI)

    def _version(self) -> None:
        version = self._require_prefixed(VERSION_PREFIX, "version", InvalidVersion)
        if version not in SUPPORTED_VERSIONS:
            raise UnsupportedVersion(f"version {version!r} not supported", self._line_number)
        self._fields["version"] = version

    def _chain_id(self) -> None:
        text = self._require_prefixed(CHAIN_ID_PREFIX, "chain ID", InvalidChainID)
        if not _CHAIN_ID_RE.fullmatch(text):
            raise InvalidChainID(f"chain ID {text!r} is not an integer", self._line_number)
        chain_id = int(text)
        if not INT64_MIN <= chain_id <= INT64_MAX:
            raise InvalidChainID(f"chain ID {text} out of 64-bit range", self._line_number)
        self._fields["chain_id"] = chain_id

    def _nonce(self) -> None:
        self._fields["nonce"] = self._require_prefixed(NONCE_PREFIX, "nonce", InvalidNonce)

    def _issued_at(self) -> None:
        text = self._require_prefixed(ISSUED_AT_PREFIX, "issued-at time", InvalidIssuedAt)
        self._fields["issued_at"] = self._timestamp(text)

    def _expiration_time(self, line: str) -> bool:
        if not line.startswith(EXPIRATION_TIME_PREFIX):
            return False
        self._fields["expiration_time"] = self._timestamp(line[len(EXPIRATION_TIME_PREFIX):])
        return True

    def _not_before(self, line: str) -> bool:
        if not line.startswith(NOT_BEFORE_PREFIX):
            return False
        self._fields["not_before"] = self._timestamp(line[len(NOT_BEFORE_PREFIX):])
        return True

    def _request_id(self, line: str) -> bool:
        if not line.startswith(REQUEST_ID_PREFIX):
            return False
        self._fields["request_id"] = line[len(REQUEST_ID_PREFIX):]
        return True

    def _resources(self, line: str) -> bool:
        if line != RESOURCES_HEADER:
            return False
        while True:
            item = self._next_line()
            if item is None:
                break
            if not item.startswith(RESOURCE_PREFIX):
                self._prev = item
                break
            self._fields["resources"].append(item[len(RESOURCE_PREFIX):])
        return True

    def parse(self) -> Message:
        self._domain()
        self._address()
        self._empty_line()
        self._optional(self._statement)
        self._empty_line()
        self._uri()
        self._version()
        self._chain_id()
        self._nonce()
        self._issued_at()
        self._optional(self._expiration_time)
        self._optional(self._not_before)
        self._optional(self._request_id)
        self._optional(self._resources)

        leftover = self._next_line()
        if leftover is not None:
            raise UnexpectedContent(f"unexpected line {leftover!r}", self._line_number)
        return Message(**self._fields)


def parse_message(source: str | bytes | Iterable[str]) -> Message:
    """
    Parse EIP-4361 text into a Message.

    Args:
        source: The message text, or an iterable of lines such as an open text
            file. Line terminators ("\\n" or "\\r\\n") are stripped.

    Returns:
        The parsed Message; str(result) reproduces the signed text.

    Raises:
        ParseError: the text does not follow the layout (subclass names the rule).
        InvalidAddress, InvalidTimestamp, InvalidChainID, UnsupportedVersion:
            a line has the right shape but an invalid value.
    """
    return _Parser(_iter_lines(source)).parse()


__all__: tuple[str, ...] = ("parse_message",)
