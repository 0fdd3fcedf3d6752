"""Tests for the dict / JSON form of a Message."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from picosiwe import (
    Address,
    InvalidAddress,
    InvalidMessage,
    InvalidStatement,
    InvalidTimestamp,
    Message,
    UnsupportedVersion,
    message_from_dict,
    message_from_json,
    message_to_dict,
    message_to_json,
    parse_message,
)

TEXT = """service.org wants you to sign in with your Ethereum account:
0xdEADBEeF00000000000000000000000000000000

Log in to service.org

URI: https://service.org/login
Version: 1
Chain ID: 137
Nonce: 32891757
Issued At: 2021-09-30T16:25:24.000Z
Expiration Time: 2021-10-01T16:25:24.000-07:00
Request ID: abc
Resources:
- ipfs://bafybeiemxf5abjwjbikoz4mc3a3dla6ual3jsgpdr4cjr3oz3evfyavhwq/
- https://example.com/my-web2-claim.json"""

MINIMAL = {
    "domain": "service.org",
    "address": "dEADBEeF00000000000000000000000000000000",
    "uri": "https://service.org/login",
    "version": "1",
    "chainId": 1,
    "nonce": "32891757",
    "issuedAt": "2021-09-30T16:25:24.000Z",
}


def test_to_dict() -> None:
    data = message_to_dict(parse_message(TEXT))
    assert data == {
        "domain": "service.org",
        "address": "0xdEADBEeF00000000000000000000000000000000",
        "statement": "Log in to service.org",
        "uri": "https://service.org/login",
        "version": "1",
        "chainId": 137,
        "nonce": "32891757",
        "issuedAt": "2021-09-30T16:25:24.000Z",
        "expirationTime": "2021-10-01T16:25:24.000-07:00",
        "requestId": "abc",
        "resources": [
            "ipfs://bafybeiemxf5abjwjbikoz4mc3a3dla6ual3jsgpdr4cjr3oz3evfyavhwq/",
            "https://example.com/my-web2-claim.json",
        ],
    }


def test_json_round_trip_preserves_text() -> None:
    msg = parse_message(TEXT)
    again = message_from_json(message_to_json(msg))
    assert again == msg
    assert again.to_string() == TEXT


def test_minimal_dict() -> None:
    msg = message_from_dict(MINIMAL)
    assert msg.statement is None
    assert msg.expiration_time is None
    assert msg.resources == []
    assert msg.issued_at == datetime(2021, 9, 30, 16, 25, 24, tzinfo=timezone.utc)
    # unprefixed raw text is reproduced as given
    assert msg.to_string().split("\n")[1] == MINIMAL["address"]
    assert set(message_to_dict(msg)) == set(MINIMAL)


def test_constructed_address_serializes_as_checksum() -> None:
    msg = Message(
        domain="a.com",
        address=Address(bytes.fromhex("deadbeef00000000deadbeef00000000deadbeef")),
        uri="https://a.com",
        version="1",
        chain_id=1,
        nonce="12345678",
        issued_at=datetime(2022, 1, 1, tzinfo=timezone(timedelta(hours=1))),
    )
    data = json.loads(message_to_json(msg, sort_keys=True))
    assert data["address"] == "0xdEadBeEf00000000DeADBeef00000000dEAdBeeF"
    assert data["issuedAt"] == "2022-01-01T00:00:00.000+01:00"


def test_null_optionals_ignored() -> None:
    msg = message_from_dict(dict(MINIMAL, statement=None, notBefore=None, unknown=1))
    assert msg.statement is None
    assert msg.not_before is None


@pytest.mark.parametrize(
    "overrides, error",
    [
        ({"chainId": "1"}, InvalidMessage),
        ({"chainId": True}, InvalidMessage),
        ({"nonce": 5}, InvalidMessage),
        ({"resources": "ipfs://x"}, InvalidMessage),
        ({"resources": [1]}, InvalidMessage),
        ({"address": "0x12"}, InvalidAddress),
        ({"issuedAt": "2021-09-30T16:25:24Z"}, InvalidTimestamp),
        ({"expirationTime": "soon"}, InvalidTimestamp),
        ({"statement": ""}, InvalidStatement),
        ({"issuedAt": "2021-09-30T16:25:24.000+05:99"}, InvalidTimestamp),
        ({"version": "2"}, UnsupportedVersion),
    ],
)
def test_from_dict_rejects(overrides: dict, error: type) -> None:
    with pytest.raises(error):
        message_from_dict(dict(MINIMAL, **overrides))


def test_missing_required_field() -> None:
    data = dict(MINIMAL)
    del data["nonce"]
    with pytest.raises(InvalidMessage, match="nonce"):
        message_from_dict(data)


@pytest.mark.parametrize("text", ["{", "[]", "null", b"\xff"])
def test_from_json_rejects(text) -> None:
    with pytest.raises(InvalidMessage):
        message_from_json(text)
