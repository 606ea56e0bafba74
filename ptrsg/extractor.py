"""Entropy extraction: fold workload timings into a seed.

Durations are serialized as unsigned 64-bit big-endian integers in
sorted language order, hashed with BLAKE2b-512 and cut down to the
requested number of bits.
"""

from __future__ import annotations

import hashlib
from collections.abc import Mapping

import numpy as np

DIGEST_SIZE = 64  # bytes
MAX_BITS = DIGEST_SIZE * 8


def serialize_timings(timings: Mapping[str, int]) -> bytes:
    """Concatenate every duration as 8 big-endian bytes, sorted by name."""
    if not timings:
        raise ValueError("no timings to serialize")
    values = [int(timings[name]) for name in sorted(timings)]
    for name, value in zip(sorted(timings), values):
        if not 0 <= value < 1 << 64:
            raise ValueError(f"{name}: duration {value} does not fit in 64 unsigned bits")
    return np.array(values, dtype=">u8").tobytes()


def hash_buffer(buffer: bytes) -> bytes:
    """BLAKE2b digest of *buffer* (64 bytes)."""
    return hashlib.blake2b(buffer, digest_size=DIGEST_SIZE).digest()


def truncate_digest(digest: bytes, bits: int) -> int:
    """Keep the leading *bits* bits of *digest* as a non-negative integer.

    Takes ``ceil(bits / 8)`` bytes and, for a partial byte, shifts the
    first one right so exactly *bits* significant bits remain.
    """
    if not 1 <= bits <= len(digest) * 8:
        raise ValueError(f"bits must be in 1-{len(digest) * 8}, got {bits}")
    byte_len = (bits + 7) // 8
    raw = bytearray(digest[:byte_len])
    if bits % 8:
        raw[0] >>= 8 - bits % 8
    return int.from_bytes(raw, "big")


def extract_seed(timings: Mapping[str, int], bits: int = MAX_BITS) -> int:
    """Serialize, hash and truncate *timings* into a *bits*-bit seed."""
    return truncate_digest(hash_buffer(serialize_timings(timings)), bits)
