"""Tests for compact REF/ALT packing."""

import pytest

from ferro_variantkey.alleles import (
    decode_binary_sequence,
    encode_binary_sequence,
    is_compact_eligible,
    is_simple_sequence,
    pack_refalt,
    unpack_refalt,
)


class TestSimpleSequence:
    """Tests for is_simple_sequence."""

    def test_simple(self) -> None:
        assert is_simple_sequence(b"AT")
        assert is_simple_sequence(b"CG")
        assert is_simple_sequence(b"G")
        assert is_simple_sequence("ACGT")

    def test_empty_is_simple(self) -> None:
        assert is_simple_sequence(b"")

    def test_not_simple(self) -> None:
        assert not is_simple_sequence(b"CX")
        assert not is_simple_sequence("CX")
        assert not is_simple_sequence(b"N")
        assert not is_simple_sequence(b"<DEL>")

    def test_lowercase_not_simple(self) -> None:
        assert not is_simple_sequence(b"acgt")


class TestCompactEligibility:
    """Tests for is_compact_eligible."""

    def test_eligible(self) -> None:
        assert is_compact_eligible(b"T", b"C")
        assert is_compact_eligible(b"ACGTAC", b"GTACG")

    def test_too_long(self) -> None:
        assert not is_compact_eligible(b"ACGTAC", b"GTACGT")
        assert not is_compact_eligible(b"ACGTACGTACGT", b"")

    def test_non_acgt(self) -> None:
        assert not is_compact_eligible(b"CX", b"C")
        assert not is_compact_eligible(b"C", b"CX")


class TestBinarySequence:
    """Tests for 2-bit base packing."""

    def test_single_bases(self) -> None:
        assert decode_binary_sequence(0, 1) == b"A"
        assert decode_binary_sequence(1, 1) == b"C"
        assert decode_binary_sequence(2, 1) == b"G"
        assert decode_binary_sequence(3, 1) == b"T"

    def test_multiple_bases(self) -> None:
        assert decode_binary_sequence(0, 2) == b"AA"
        assert decode_binary_sequence(1 << 2 | 2, 2) == b"CG"

    def test_decode_ignores_high_bits(self) -> None:
        assert decode_binary_sequence(0b11_01, 1) == b"C"

    def test_encode(self) -> None:
        assert encode_binary_sequence(b"TTTC") == (0b11111101, 8)
        assert encode_binary_sequence(b"") == (0, 0)


class TestRefAltPacking:
    """Tests for the 31-bit compact ref/alt field."""

    def test_pack_snv(self) -> None:
        assert pack_refalt(b"T", b"C") == 0x08E80000

    def test_pack_deletion(self) -> None:
        assert pack_refalt(b"TTTC", b"T") == 0x20FEE000

    def test_pack_empty(self) -> None:
        assert pack_refalt(b"", b"") == 0

    def test_length_fields(self) -> None:
        field = pack_refalt(b"ACG", b"TTTTT")
        assert field >> 27 == 3
        assert (field >> 23) & 0xF == 5

    def test_low_bit_always_clear(self) -> None:
        assert pack_refalt(b"TTTTTT", b"TTTTT") & 1 == 0

    def test_fits_in_31_bits(self) -> None:
        assert pack_refalt(b"TTTTTTTTTTT", b"") < 1 << 31

    @pytest.mark.parametrize(
        "ref,alt",
        [(b"A", b"G"), (b"TTTC", b"T"), (b"", b"ACGTACGTACG"), (b"GATTACA", b"CAT"), (b"", b"")],
    )
    def test_unpack(self, ref: bytes, alt: bytes) -> None:
        assert unpack_refalt(pack_refalt(ref, alt)) == (ref, alt)

    def test_unpack_foreign_lengths_does_not_raise(self) -> None:
        ref, alt = unpack_refalt(0x7FFFFFFE)
        assert len(ref) == 15
        assert len(alt) == 15
