"""Tests for the Message model, its serializer and the timestamp layout."""

from datetime import datetime, timedelta, timezone

import pytest

from picosiwe import (
    Address,
    InvalidAddress,
    InvalidChainID,
    InvalidMessage,
    InvalidStatement,
    InvalidTimestamp,
    Message,
    UnsupportedVersion,
    format_timestamp,
    parse_message,
    parse_timestamp,
)

ISSUED_AT = datetime(2022, 2, 15, 12, 34, 56, 789000, tzinfo=timezone.utc)
ADDRESS_BYTES = bytes.fromhex("deadbeef00000000deadbeef00000000deadbeef")


def _message(**overrides) -> Message:
    fields = dict(
        domain="example.com",
        address=Address(ADDRESS_BYTES),
        uri="https://example.com/login",
        version="1",
        chain_id=1,
        nonce="abcd1234",
        issued_at=ISSUED_AT,
    )
    fields.update(overrides)
    return Message(**fields)


def test_serialize_without_statement() -> None:
    assert _message().to_string() == (
        "example.com wants you to sign in with your Ethereum account:\n"
        "0xdEadBeEf00000000DeADBeef00000000dEAdBeeF\n"
        "\n"
        "\n"
        "URI: https://example.com/login\n"
        "Version: 1\n"
        "Chain ID: 1\n"
        "Nonce: abcd1234\n"
        "Issued At: 2022-02-15T12:34:56.789Z"
    )


def test_serialize_all_fields() -> None:
    msg = _message(
        statement="I accept the Terms of Service",
        expiration_time=ISSUED_AT + timedelta(minutes=15),
        not_before=ISSUED_AT,
        request_id="req-1",
        resources=["ipfs://a", "https://example.com/b"],
    )
    assert str(msg) == (
        "example.com wants you to sign in with your Ethereum account:\n"
        "0xdEadBeEf00000000DeADBeef00000000dEAdBeeF\n"
        "\n"
        "I accept the Terms of Service\n"
        "\n"
        "URI: https://example.com/login\n"
        "Version: 1\n"
        "Chain ID: 1\n"
        "Nonce: abcd1234\n"
        "Issued At: 2022-02-15T12:34:56.789Z\n"
        "Expiration Time: 2022-02-15T12:49:56.789Z\n"
        "Not Before: 2022-02-15T12:34:56.789Z\n"
        "Request ID: req-1\n"
        "Resources:\n"
        "- ipfs://a\n"
        "- https://example.com/b"
    )


def test_empty_resources_omitted() -> None:
    assert "Resources:" not in _message(resources=[]).to_string()


def test_string_address_keeps_casing() -> None:
    text = "0xdeadbeef00000000deadbeef00000000deadbeef"
    msg = _message(address=text)
    assert msg.address == Address(ADDRESS_BYTES)
    assert msg.to_string().split("\n")[1] == text


def test_constructed_message_round_trips() -> None:
    msg = _message(statement="hi", request_id="", resources=["x"])
    parsed = parse_message(msg.to_string())
    assert parsed == msg
    assert parsed.to_string() == msg.to_string()


def test_millisecond_truncation() -> None:
    msg = _message(issued_at=ISSUED_AT.replace(microsecond=789999))
    assert msg.to_string().endswith("Issued At: 2022-02-15T12:34:56.789Z")


@pytest.mark.parametrize(
    "overrides, error",
    [
        ({"version": "2"}, UnsupportedVersion),
        ({"chain_id": 1 << 63}, InvalidChainID),
        ({"chain_id": True}, InvalidChainID),
        ({"chain_id": "1"}, InvalidChainID),
        ({"statement": "two\nlines"}, InvalidStatement),
        ({"statement": ""}, InvalidStatement),
        ({"issued_at": datetime(2022, 2, 15)}, InvalidTimestamp),
        ({"issued_at": None}, InvalidTimestamp),
        ({"expiration_time": "2022-02-15T12:34:56.789Z"}, InvalidTimestamp),
        ({"address": "0x1234"}, InvalidAddress),
        ({"address": 1234}, InvalidMessage),
        ({"domain": "example.com evil.com"}, InvalidMessage),
        ({"uri": "https://a\nb"}, InvalidMessage),
        ({"resources": ["ok", "bad\r"]}, InvalidMessage),
    ],
)
def test_invalid_fields(overrides: dict, error: type) -> None:
    with pytest.raises(error):
        _message(**overrides)


def test_timestamp_formats() -> None:
    pst = timezone(timedelta(hours=-8))
    assert format_timestamp(datetime(2021, 12, 20, 4, 44, 25, 906000, tzinfo=pst)) == (
        "2021-12-20T04:44:25.906-08:00"
    )
    ist = timezone(timedelta(hours=5, minutes=30))
    assert format_timestamp(datetime(2022, 1, 1, tzinfo=ist)) == "2022-01-01T00:00:00.000+05:30"
    assert format_timestamp(datetime(2022, 1, 1, tzinfo=timezone.utc)) == (
        "2022-01-01T00:00:00.000Z"
    )


def test_parse_timestamp_offsets() -> None:
    t = parse_timestamp("2021-12-20T04:44:25.906-08:00")
    assert t == datetime(2021, 12, 20, 12, 44, 25, 906000, tzinfo=timezone.utc)
    assert format_timestamp(t) == "2021-12-20T04:44:25.906-08:00"
    # a zero offset renders as Z
    assert format_timestamp(parse_timestamp("2022-01-01T00:00:00.000+00:00")) == (
        "2022-01-01T00:00:00.000Z"
    )


@pytest.mark.parametrize(
    "text",
    [
        "2022-02-15T12:34:56.78Z",
        "2022-02-15T12:34:56.7890Z",
        "2022-02-15T25:00:00.000Z",
        "2022-02-30T00:00:00.000Z",
        "2022-02-15T12:34:56.789",
        "2022-02-15T12:34:56.789+24:00",
        "2022-02-15T12:34:56.789+05:60",
        "2022-02-15T12:34:56.789-05:99",
        "2022-02-15T12:34:56.789+99:00",
        " 2022-02-15T12:34:56.789Z",
    ],
)
def test_parse_timestamp_rejects(text: str) -> None:
    with pytest.raises(InvalidTimestamp):
        parse_timestamp(text)


def test_empty_statement_rejected_not_serialized() -> None:
    with pytest.raises(InvalidStatement):
        _message(statement="")
    # the no-statement form is the one that serializes to parseable text
    msg = _message(statement=None)
    assert parse_message(msg.to_string()) == msg
