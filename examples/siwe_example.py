#!/usr/bin/env python3
"""Example: build, sign, parse and verify a Sign-In with Ethereum message."""

from datetime import datetime, timedelta, timezone

from picosiwe import (
    Message,
    SiweError,
    generate_nonce,
    parse_message,
    privkey_to_address,
)

privkey = bytes(31) + bytes([1])
now = datetime.now(timezone.utc)

# Relying party: hand the client a nonce. Client: build and sign the message.
nonce = generate_nonce()
message = Message(
    domain="example.com",
    address=privkey_to_address(privkey),
    uri="https://example.com/login",
    version="1",
    chain_id=1,
    nonce=nonce,
    issued_at=now,
    statement="I accept the example.com Terms of Service",
    expiration_time=now + timedelta(minutes=15),
)
text = message.to_string()
signature = message.sign(privkey)
print(text)
print()
print("Signature:", "0x" + signature.hex())

# Relying party: parse the exact text received and verify it.
received = parse_message(text)
received.verify(signature, domain="example.com", nonce=nonce)
print("Verified sign-in for", received.address.checksum_string())

try:
    received.verify(signature, nonce="replayed")
except SiweError as e:
    print("Rejected:", type(e).__name__, e)
