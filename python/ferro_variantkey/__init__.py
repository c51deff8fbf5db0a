"""ferro-variantkey: 64-bit variant keys for genomic variants.

This module encodes a variant (chromosome, position, reference allele,
alternate allele) into a single sortable 64-bit integer and decodes it back.
Short pure-ACGT allele pairs round-trip exactly; longer or non-ACGT pairs are
stored as a 31-bit hash and decode with unknown alleles.

Example:
    >>> import ferro_variantkey
    >>> key = ferro_variantkey.encode("1", 976157, "T", "C")
    >>> hex(key)
    '0x807728e88e80000'
    >>> print(ferro_variantkey.decode(key))
    1:976157:T:C
"""

from .alleles import is_simple_sequence
from .chromosome import chromosome_to_ordinal, ordinal_to_chromosome
from .errors import InvalidChromosomeError, InvalidPositionError, VariantKeyError
from .hash import encode_refalt_hash
from .key import (
    RefAltMode,
    Variant,
    decode,
    decode_variant_key,
    encode,
    encode_refalt,
    encode_variant_key,
    refalt_mode,
)

__version__ = "0.1.0"

# Explicitly list the public API to help with IDE completion and type checking
__all__ = [
    # Version
    "__version__",
    # Core functions
    "encode",
    "decode",
    "encode_variant_key",
    "decode_variant_key",
    # Chromosome functions
    "chromosome_to_ordinal",
    "ordinal_to_chromosome",
    # Ref/alt functions
    "encode_refalt",
    "encode_refalt_hash",
    "is_simple_sequence",
    "refalt_mode",
    # Classes
    "Variant",
    "RefAltMode",
    # Errors
    "VariantKeyError",
    "InvalidChromosomeError",
    "InvalidPositionError",
]
