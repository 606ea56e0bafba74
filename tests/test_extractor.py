"""Tests for entropy extraction."""

import hashlib

import pytest

from ptrsg.extractor import (
    MAX_BITS,
    extract_seed,
    hash_buffer,
    serialize_timings,
    truncate_digest,
)

EXAMPLE = {"lua": 1_000_000, "python": 2_000_000, "node": 1_500_000}


class TestSerialize:
    def test_sorted_big_endian(self):
        buf = serialize_timings(EXAMPLE)
        expected = (
            (1_000_000).to_bytes(8, "big")
            + (1_500_000).to_bytes(8, "big")
            + (2_000_000).to_bytes(8, "big")
        )
        assert buf == expected
        assert len(buf) == 24

    def test_insertion_order_irrelevant(self):
        reordered = {"node": 1_500_000, "python": 2_000_000, "lua": 1_000_000}
        assert serialize_timings(reordered) == serialize_timings(EXAMPLE)

    def test_max_uint64(self):
        assert serialize_timings({"x": 2**64 - 1}) == b"\xff" * 8

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            serialize_timings({})

    @pytest.mark.parametrize("value", [-1, 2**64])
    def test_out_of_range_rejected(self, value):
        with pytest.raises(ValueError):
            serialize_timings({"lua": value})


class TestHash:
    def test_blake2b_512(self):
        buf = serialize_timings(EXAMPLE)
        digest = hash_buffer(buf)
        assert len(digest) == 64
        assert digest == hashlib.blake2b(buf).digest()

    def test_deterministic(self):
        buf = serialize_timings(EXAMPLE)
        assert hash_buffer(buf) == hash_buffer(buf)

    def test_different_inputs(self):
        assert hash_buffer(b"a") != hash_buffer(b"b")


class TestTruncate:
    digest = hash_buffer(serialize_timings(EXAMPLE))

    def test_full_width_is_whole_digest(self):
        assert truncate_digest(self.digest, 512) == int.from_bytes(self.digest, "big")

    def test_one_byte(self):
        assert truncate_digest(self.digest, 8) == self.digest[0]

    def test_half_byte(self):
        assert truncate_digest(self.digest, 4) == self.digest[0] >> 4

    def test_single_bit(self):
        assert truncate_digest(self.digest, 1) == self.digest[0] >> 7
        assert truncate_digest(self.digest, 1) in (0, 1)

    def test_partial_leading_byte(self):
        # 12 bits: top 4 bits of byte 0 followed by byte 1
        expected = ((self.digest[0] >> 4) << 8) | self.digest[1]
        assert truncate_digest(self.digest, 12) == expected

    def test_every_width_fits(self):
        for bits in range(1, MAX_BITS + 1):
            assert 0 <= truncate_digest(self.digest, bits) < 2**bits

    def test_saturated_digest_uses_all_bits(self):
        ones = b"\xff" * 64
        assert truncate_digest(ones, 13) == 2**13 - 1

    def test_digest_not_mutated(self):
        before = bytes(self.digest)
        truncate_digest(self.digest, 3)
        assert self.digest == before

    @pytest.mark.parametrize("bits", [0, 513, -8])
    def test_invalid_width(self, bits):
        with pytest.raises(ValueError):
            truncate_digest(self.digest, bits)


class TestExtractSeed:
    def test_matches_stages(self):
        digest = hash_buffer(serialize_timings(EXAMPLE))
        assert extract_seed(EXAMPLE, 8) == digest[0]
        assert extract_seed(EXAMPLE, 4) == digest[0] >> 4

    def test_reproducible(self):
        assert extract_seed(EXAMPLE, 256) == extract_seed(dict(EXAMPLE), 256)

    def test_default_is_full_width(self):
        assert extract_seed(EXAMPLE) == extract_seed(EXAMPLE, 512)

    def test_timing_change_changes_seed(self):
        other = dict(EXAMPLE, lua=1_000_001)
        assert extract_seed(other) != extract_seed(EXAMPLE)
