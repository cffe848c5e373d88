"""Variable-length quantities (VLQ) used for tick deltas and meta lengths.

Each byte carries 7 bits of the value, most significant group first.  The
high bit is a continuation flag: set on every byte except the last.

  0        -> 00
  127      -> 7F
  128      -> 81 00
  10000    -> CE 10
  1000000  -> BD 84 40
"""

from __future__ import annotations

from .cursor import ByteCursor
from .errors import MalformedVLQ

MAX_VLQ_BYTES = 10


def encode_tick_delta(ticks: int) -> bytes:
    """Encode a non-negative integer as a VLQ."""

    if isinstance(ticks, bool) or not isinstance(ticks, int):
        raise ValueError(f"tick delta must be an integer, got {ticks!r}")
    if ticks < 0:
        raise ValueError(f"tick delta must be non-negative, got {ticks}")

    groups = [ticks & 0x7F]
    ticks >>= 7
    while ticks:
        groups.append((ticks & 0x7F) | 0x80)
        ticks >>= 7
    return bytes(reversed(groups))


def decode_tick_delta(cursor: ByteCursor) -> int:
    """Read one VLQ from ``cursor`` and return its value.

    Raises ``MalformedVLQ`` when no terminating byte shows up within
    ``MAX_VLQ_BYTES`` bytes, and ``OutOfBounds`` when the buffer ends first.
    """

    value = 0
    for _ in range(MAX_VLQ_BYTES):
        byte = cursor.read_u8()
        value = (value << 7) | (byte & 0x7F)
        if not byte & 0x80:
            return value
    raise MalformedVLQ(
        f"VLQ longer than {MAX_VLQ_BYTES} bytes ending at offset {cursor.offset}"
    )


def decode_vlq_bytes(data: bytes) -> int:
    return decode_tick_delta(ByteCursor(data))
