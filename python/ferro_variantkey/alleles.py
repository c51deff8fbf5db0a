"""Compact 2-bit packing of short REF/ALT allele pairs.

The 31-bit ref/alt field in compact mode is laid out, from the most
significant bit down::

    [ref_len:4][alt_len:4][ref bases:2*ref_len][alt bases:2*alt_len][padding]

At most 11 bases are stored, so at least one padding bit always remains and
bit 0 is 0. A set bit 0 marks a hashed field instead (see ``hash.py``).
"""

from ._bytes import BytesLike, as_bytes

REFALT_BITS = 31
LENGTH_BITS = 4
BASE_BITS = 2
MAX_COMPACT_BASES = 11

_LENGTH_MASK = (1 << LENGTH_BITS) - 1
# Bit offset of the first base below the two length fields
_BASES_OFFSET = REFALT_BITS - 2 * LENGTH_BITS

_BASE_CODES = {ord("A"): 0, ord("C"): 1, ord("G"): 2, ord("T"): 3}
_CODE_BASES = b"ACGT"


def is_simple_sequence(seq: BytesLike) -> bool:
    """Return True if every byte of ``seq`` is one of ``A``, ``C``, ``G``, ``T``.

    Lowercase bases are not simple. The empty sequence is simple.
    """
    return all(b in _BASE_CODES for b in as_bytes(seq, "sequence"))


def is_compact_eligible(reference: BytesLike, alternative: BytesLike) -> bool:
    """Return True if the pair can be stored literally in the ref/alt field."""
    ref = as_bytes(reference, "reference")
    alt = as_bytes(alternative, "alternative")
    return (
        len(ref) + len(alt) <= MAX_COMPACT_BASES
        and is_simple_sequence(ref)
        and is_simple_sequence(alt)
    )


def encode_binary_sequence(seq: bytes) -> tuple[int, int]:
    """Pack a simple sequence 2 bits per base, first base most significant.

    Returns:
        Tuple of (packed value, number of bits used)
    """
    value = 0
    for base in seq:
        value = (value << BASE_BITS) | _BASE_CODES[base]
    return value, len(seq) * BASE_BITS


def decode_binary_sequence(value: int, length: int) -> bytes:
    """Unpack ``length`` bases from the low ``2 * length`` bits of ``value``."""
    return bytes(
        _CODE_BASES[(value >> ((length - i - 1) * BASE_BITS)) & 0x3]
        for i in range(length)
    )


def pack_refalt(reference: bytes, alternative: bytes) -> int:
    """Build the compact 31-bit ref/alt field.

    The caller must have checked :func:`is_compact_eligible`; a length of 16
    or more would alias in the 4-bit length fields.
    """
    ref_data, ref_bits = encode_binary_sequence(reference)
    alt_data, alt_bits = encode_binary_sequence(alternative)
    padding_bits = REFALT_BITS - 2 * LENGTH_BITS - ref_bits - alt_bits

    field = (len(reference) & _LENGTH_MASK) << LENGTH_BITS | (len(alternative) & _LENGTH_MASK)
    field = (field << ref_bits) | ref_data
    field = (field << alt_bits) | alt_data
    return field << padding_bits


def _shift_right(value: int, bits: int) -> int:
    # Length fields of a foreign key can claim more bases than the field
    # holds; bits below bit 0 then read as A.
    return value >> bits if bits >= 0 else value << -bits


def unpack_refalt(field: int) -> tuple[bytes, bytes]:
    """Recover (reference, alternative) from a compact ref/alt field."""
    ref_len = (field >> (REFALT_BITS - LENGTH_BITS)) & _LENGTH_MASK
    alt_len = (field >> _BASES_OFFSET) & _LENGTH_MASK
    ref_value = _shift_right(field, _BASES_OFFSET - ref_len * BASE_BITS)
    alt_value = _shift_right(field, _BASES_OFFSET - (ref_len + alt_len) * BASE_BITS)
    return (
        decode_binary_sequence(ref_value, ref_len),
        decode_binary_sequence(alt_value, alt_len),
    )
