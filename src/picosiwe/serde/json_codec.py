"""JSON / dict form of a Message with camelCase keys. Absent optional fields are omitted."""

from __future__ import annotations

import json
from typing import Any

from ..address import Address
from ..errors import InvalidMessage
from ..message import Message
from ..timestamps import format_timestamp, parse_timestamp

_REQUIRED_STR = ("domain", "uri", "version", "nonce")
_OPTIONAL_STR = (("statement", "statement"), ("requestId", "request_id"))
_OPTIONAL_TIME = (("expirationTime", "expiration_time"), ("notBefore", "not_before"))


def message_to_dict(message: Message) -> dict[str, Any]:
    """
    Structured form of `message` (JSON-compatible values only).

    The address is emitted as originally parsed when known, else as its
    checksum string.
    """
    address = message.address
    out: dict[str, Any] = {
        "domain": message.domain,
        "address": address.raw_string() or address.checksum_string(),
    }
    if message.statement is not None:
        out["statement"] = message.statement
    out["uri"] = message.uri
    out["version"] = message.version
    out["chainId"] = message.chain_id
    out["nonce"] = message.nonce
    out["issuedAt"] = format_timestamp(message.issued_at)
    if message.expiration_time is not None:
        out["expirationTime"] = format_timestamp(message.expiration_time)
    if message.not_before is not None:
        out["notBefore"] = format_timestamp(message.not_before)
    if message.request_id is not None:
        out["requestId"] = message.request_id
    if message.resources:
        out["resources"] = list(message.resources)
    return out


def _get(data: dict[str, Any], key: str, kind: type) -> Any:
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, kind):
        raise InvalidMessage(f"{key} must be {kind.__name__}, got {type(value).__name__}")
    return value


def message_from_dict(data: dict[str, Any]) -> Message:
    """
    Build a Message from its structured form. Unknown keys are ignored.

    Raises:
        InvalidMessage: a required key is missing or a value has the wrong type.
        InvalidAddress, InvalidTimestamp: a value cannot be parsed.
    """
    if not isinstance(data, dict):
        raise InvalidMessage(f"message must be an object, got {type(data).__name__}")
    missing = [
        k for k in ("address", "chainId", "issuedAt") + _REQUIRED_STR if k not in data
    ]
    if missing:
        raise InvalidMessage(f"missing required field(s): {', '.join(sorted(missing))}")

    fields: dict[str, Any] = {k: _get(data, k, str) for k in _REQUIRED_STR}
    fields["address"] = Address.parse(_get(data, "address", str))
    fields["chain_id"] = _get(data, "chainId", int)
    fields["issued_at"] = parse_timestamp(_get(data, "issuedAt", str))
    for key, name in _OPTIONAL_STR:
        if data.get(key) is not None:
            fields[name] = _get(data, key, str)
    for key, name in _OPTIONAL_TIME:
        if data.get(key) is not None:
            fields[name] = parse_timestamp(_get(data, key, str))
    resources = data.get("resources")
    if resources is not None:
        if not isinstance(resources, list) or not all(isinstance(r, str) for r in resources):
            raise InvalidMessage("resources must be a list of strings")
        fields["resources"] = resources
    return Message(**fields)


def message_to_json(message: Message, **kwargs: Any) -> str:
    """JSON text of message_to_dict(message); kwargs go to json.dumps."""
    return json.dumps(message_to_dict(message), **kwargs)


def message_from_json(text: str | bytes) -> Message:
    """Parse JSON text produced by message_to_json (or any compatible encoder)."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidMessage(f"invalid JSON: {e}") from e
    return message_from_dict(data)


__all__: tuple[str, ...] = (
    "message_from_dict",
    "message_from_json",
    "message_to_dict",
    "message_to_json",
)
