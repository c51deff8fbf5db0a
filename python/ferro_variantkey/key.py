"""Encoding and decoding of 64-bit variant keys.

Bit layout, most significant first::

    [chrom:5][position:28][ref/alt:31]

Keys of the same chromosome therefore sort by position. Bit 0 of the ref/alt
field selects compact mode (0, alleles stored literally) or hash mode (1,
alleles replaced by a 31-bit hash and not recoverable).
"""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional

from ._bytes import BytesLike, as_bytes
from .alleles import REFALT_BITS, is_compact_eligible, pack_refalt, unpack_refalt
from .chromosome import chromosome_to_ordinal, ordinal_to_chromosome
from .errors import InvalidPositionError
from .hash import encode_refalt_hash

logger = logging.getLogger(__name__)

CHROM_BITS = 5
POSITION_BITS = 28

# Inclusive: 2**28 itself is accepted and wraps to position 0 in the key
MAX_POSITION = 1 << POSITION_BITS

_REFALT_MASK = (1 << REFALT_BITS) - 1
_POSITION_MASK = (1 << POSITION_BITS) - 1
_CHROM_MASK = (1 << CHROM_BITS) - 1
_KEY_MASK = (1 << 64) - 1


class RefAltMode(IntEnum):
    """Encoding mode of the ref/alt field, the value of its bit 0."""

    Compact = 0
    Hash = 1


@dataclass(frozen=True)
class Variant:
    """A decoded variant key.

    ``reference`` and ``alternative`` are ``None`` when the key was built in
    hash mode.
    """

    chrom: bytes
    position: int
    reference: Optional[bytes]
    alternative: Optional[bytes]

    def __post_init__(self) -> None:
        if (self.reference is None) != (self.alternative is None):
            raise ValueError("reference and alternative must both be set or both be None")

    def is_hashed(self) -> bool:
        """Return True if the alleles were lost to hash mode."""
        return self.reference is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary with string values."""
        return {
            "chrom": self.chrom.decode("ascii"),
            "position": self.position,
            "reference": None if self.reference is None else self.reference.decode("ascii"),
            "alternative": None if self.alternative is None else self.alternative.decode("ascii"),
        }

    def __str__(self) -> str:
        ref = "?" if self.reference is None else self.reference.decode("ascii")
        alt = "?" if self.alternative is None else self.alternative.decode("ascii")
        return f"{self.chrom.decode('ascii')}:{self.position}:{ref}:{alt}"


def encode_refalt(reference: BytesLike, alternative: BytesLike) -> int:
    """Return the 31-bit ref/alt field for an allele pair.

    Short pure-ACGT pairs are packed literally, everything else is hashed.
    """
    ref = as_bytes(reference, "reference")
    alt = as_bytes(alternative, "alternative")
    if is_compact_eligible(ref, alt):
        return pack_refalt(ref, alt)
    logger.debug("Hashing ref/alt pair %r/%r (not compact-eligible)", ref, alt)
    return encode_refalt_hash(ref, alt)


def encode_variant_key(
    chrom: BytesLike,
    position: int,
    reference: BytesLike,
    alternative: BytesLike,
) -> int:
    """Encode a variant as a 64-bit variant key.

    Args:
        chrom: Chromosome label (e.g. ``b"1"``, ``"chrX"``, ``b"MT"``)
        position: Variant position, at most ``2**28``
        reference: Reference allele
        alternative: Alternate allele

    Returns:
        The variant key as an unsigned 64-bit integer

    Raises:
        InvalidChromosomeError: If the chromosome label is not recognized
        InvalidPositionError: If the position is negative or above ``2**28``

    Example:
        >>> hex(encode_variant_key(b"1", 976157, b"T", b"C"))
        '0x807728e88e80000'
    """
    ordinal = chromosome_to_ordinal(chrom)
    if position < 0 or position > MAX_POSITION:
        raise InvalidPositionError(position)

    key = (ordinal << POSITION_BITS | position) << REFALT_BITS
    key |= encode_refalt(reference, alternative)
    return key & _KEY_MASK


def refalt_mode(variant_key: int) -> RefAltMode:
    """Return whether a key stores its alleles literally or as a hash."""
    return RefAltMode(variant_key & 1)


def decode_variant_key(variant_key: int) -> Variant:
    """Decode a 64-bit variant key.

    The chromosome is always returned in its bare form (``b"1"``, never
    ``b"chr1"``; ``b"MT"``, never ``b"M"``).

    Raises:
        InvalidChromosomeError: If the chromosome field holds an ordinal
            above 25, which only happens for keys not produced by
            :func:`encode_variant_key`
        ValueError: If ``variant_key`` is not an unsigned 64-bit integer

    Example:
        >>> decode_variant_key(0x0806B567A0FEE000)
        Variant(chrom=b'1', position=879311, reference=b'TTTC', alternative=b'T')
    """
    if not 0 <= variant_key <= _KEY_MASK:
        raise ValueError(f"variant key must be an unsigned 64-bit integer: {variant_key}")
    refalt = variant_key & _REFALT_MASK
    position = (variant_key >> REFALT_BITS) & _POSITION_MASK
    ordinal = (variant_key >> (REFALT_BITS + POSITION_BITS)) & _CHROM_MASK

    chrom = ordinal_to_chromosome(ordinal)
    if refalt_mode(refalt) is RefAltMode.Hash:
        return Variant(chrom, position, None, None)
    reference, alternative = unpack_refalt(refalt)
    return Variant(chrom, position, reference, alternative)


encode = encode_variant_key
decode = decode_variant_key
