"""ULID Utilities

26-character, lexicographically sortable identifiers: a 48-bit millisecond
timestamp followed by 80 random bits, both in Crockford's Base32. Used for
model primary keys and as the default UID of calendar events.
"""

from __future__ import annotations

import os
import time

ENCODING = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
TIMESTAMP_LENGTH = 10
RANDOMNESS_LENGTH = 16
ULID_LENGTH = TIMESTAMP_LENGTH + RANDOMNESS_LENGTH


def _encode(value: int, length: int) -> str:
    chars = []
    for _ in range(length):
        value, index = divmod(value, 32)
        chars.append(ENCODING[index])
    return ''.join(reversed(chars))


def generate_ulid() -> str:
    """Generate a new ULID."""
    timestamp_ms = int(time.time() * 1000)
    randomness = int.from_bytes(os.urandom(10), byteorder='big')
    return _encode(timestamp_ms, TIMESTAMP_LENGTH) + _encode(randomness, RANDOMNESS_LENGTH)


def is_valid_ulid(value: object) -> bool:
    return isinstance(value, str) and len(value) == ULID_LENGTH and all(char in ENCODING for char in value)
