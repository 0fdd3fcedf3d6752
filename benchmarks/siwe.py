"""
Benchmark SIWE operations: parse, serialize, EIP-191 hash, sign, verify.
Reports time per call and peak memory (tracemalloc) per run.

Run from repo root:

  PYTHONPATH=src python benchmarks/siwe.py

Or after pip install -e .:

  python benchmarks/siwe.py
"""

from __future__ import annotations

import os
import sys
import time
import tracemalloc
from datetime import datetime, timedelta, timezone

_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_src = os.path.join(_root, "src")
if _src not in sys.path:
    sys.path.insert(0, _src)

from picosiwe import (
    Message,
    generate_nonce,
    parse_message,
    privkey_to_address,
    sign_message,
    verify_signature,
)

N_TIME = 500
N_MEM = 200
PRIV = bytes(31) + bytes([1])
ISSUED_AT = datetime(2022, 2, 15, 12, 0, tzinfo=timezone.utc)
MSG = Message(
    domain="example.com",
    address=privkey_to_address(PRIV),
    uri="https://example.com/login",
    version="1",
    chain_id=1,
    nonce=generate_nonce(),
    issued_at=ISSUED_AT,
    statement="Sign in to the benchmark",
    expiration_time=ISSUED_AT + timedelta(minutes=15),
    resources=[f"https://example.com/r/{i}" for i in range(4)],
)
TEXT = MSG.to_string()


def _time_per_call(fn, *args, n: int = N_TIME, **kwargs) -> float:
    for _ in range(20):
        fn(*args, **kwargs)
    start = time.perf_counter()
    for _ in range(n):
        fn(*args, **kwargs)
    return (time.perf_counter() - start) / n


def _peak_kb(fn, *args, n: int = N_MEM, **kwargs) -> float:
    tracemalloc.start()
    if hasattr(tracemalloc, "reset_peak"):
        tracemalloc.reset_peak()
    for _ in range(n):
        fn(*args, **kwargs)
    _, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()
    return peak / 1024.0


def main() -> None:
    sig = sign_message(MSG, PRIV)

    # Sanity
    assert parse_message(TEXT).to_string() == TEXT
    verify_signature(parse_message(TEXT), sig)
    print("Benchmark: picosiwe")
    print("  Sanity check: round trip and signature verify.")
    print(f"  n = {N_TIME} (time), {N_MEM} (memory)")
    print()

    cases = [
        ("parse_message", parse_message, (TEXT,)),
        ("Message.to_string", MSG.to_string, ()),
        ("Message.eip191_hash", MSG.eip191_hash, ()),
        ("sign_message", sign_message, (MSG, PRIV)),
        ("verify_signature", verify_signature, (MSG, sig)),
    ]
    for name, fn, args in cases:
        t = _time_per_call(fn, *args) * 1000
        m = _peak_kb(fn, *args)
        print(f"  {name:<22} {t:.4f} ms   peak {m:.2f} KiB")


if __name__ == "__main__":
    main()
