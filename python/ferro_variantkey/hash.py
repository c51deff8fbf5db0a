"""32-bit REF/ALT hash used when an allele pair cannot be packed literally.

This reproduces the VariantKey reference hash bit for bit: characters are
packed six to a 32-bit block, blocks are mixed with the MurmurHash3 body
step, and the result is finalized with the MurmurHash3 ``fmix32`` avalanche.
All arithmetic is on unsigned 32-bit words.
"""

from ._bytes import BytesLike, as_bytes

MASK32 = 0xFFFFFFFF

C1 = 0xCC9E2D51
C2 = 0x1B873593
MIX_ADD = 0xE6546B64
FMIX_C1 = 0x85EBCA6B
FMIX_C2 = 0xC2B2AE35

# Mixed between the REF and ALT hashes
REFALT_SEPARATOR = 0x3
# Bit 0 of a hashed ref/alt field
HASH_MODE_FLAG = 0x1

# Characters below 'A' share one code
NON_ALPHA_CODE = 27
BLOCK_CHARS = 6
CHAR_BITS = 5


def _rotl32(x: int, r: int) -> int:
    return ((x << r) | (x >> (32 - r))) & MASK32


def muxhash(k: int, h: int) -> int:
    """Mix the 32-bit block ``k`` into the running hash ``h``."""
    k = (k * C1) & MASK32
    k = _rotl32(k, 15)
    k = (k * C2) & MASK32
    h ^= k
    h = _rotl32(h, 13)
    return (h * 5 + MIX_ADD) & MASK32


def fmix32(h: int) -> int:
    """MurmurHash3 finalizer: force every input bit to avalanche."""
    h ^= h >> 16
    h = (h * FMIX_C1) & MASK32
    h ^= h >> 13
    h = (h * FMIX_C2) & MASK32
    h ^= h >> 16
    return h


def encode_packchar(c: int) -> int:
    """Map a byte to its 5-bit character code (case-insensitive letters)."""
    if c < 0x41:  # 'A'
        return NON_ALPHA_CODE
    if c >= 0x61:  # 'a'
        return c - 0x61 + 1
    return c - 0x41 + 1


def pack_chars_tail(chars: bytes) -> int:
    """Pack up to six characters into one block, first character highest.

    Block layout ``[01111122 22233333 44444555 55666660]``: character ``i``
    occupies bits ``26 - 5*i`` upward and bit 0 is never set. Absent trailing
    characters leave their bits clear.
    """
    h = 0
    for i, c in enumerate(chars[:BLOCK_CHARS]):
        h ^= encode_packchar(c) << (1 + CHAR_BITS * (BLOCK_CHARS - 1 - i))
    return h & MASK32


def pack_chars(chars: bytes) -> int:
    """Pack exactly six characters into one block."""
    if len(chars) != BLOCK_CHARS:
        raise ValueError(f"expected {BLOCK_CHARS} characters, got {len(chars)}")
    return pack_chars_tail(chars)


def hash32(seq: bytes) -> int:
    """Return the 32-bit block hash of a single sequence (0 when empty)."""
    h = 0
    full = len(seq) - len(seq) % BLOCK_CHARS
    for start in range(0, full, BLOCK_CHARS):
        h = muxhash(pack_chars(seq[start:start + BLOCK_CHARS]), h)
    if full < len(seq):
        h = muxhash(pack_chars_tail(seq[full:]), h)
    return h


def encode_refalt_hash(reference: BytesLike, alternative: BytesLike) -> int:
    """Hash a REF/ALT pair into a 31-bit ref/alt field.

    Args:
        reference: Reference allele, any bytes
        alternative: Alternate allele, any bytes

    Returns:
        A 31-bit value with bit 0 set, marking hash mode

    Example:
        >>> encode_refalt_hash(b"", b"") & 1
        1
    """
    ref = as_bytes(reference, "reference")
    alt = as_bytes(alternative, "alternative")
    h = muxhash(hash32(alt), muxhash(REFALT_SEPARATOR, hash32(ref)))
    return (fmix32(h) >> 1) | HASH_MODE_FLAG
