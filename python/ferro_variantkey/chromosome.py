"""Chromosome label <-> 5-bit ordinal mapping.

Ordinals 1-22 are the autosomes, 23 and 24 the sex chromosomes and 25 the
mitochondrial chromosome. Ordinal 0 is reserved for "not available".
"""

from ._bytes import BytesLike, as_bytes
from .errors import InvalidChromosomeError

CHR_PREFIX = b"chr"

# Highest numeric chromosome accepted is 22
MAX_NUMERIC_ORDINAL = 22

_LITERAL_ORDINALS = {
    b"X": 23,
    b"Y": 24,
    b"MT": 25,
    b"M": 25,
}

_ORDINAL_LABELS = (
    (b"NA",)
    + tuple(str(n).encode("ascii") for n in range(1, MAX_NUMERIC_ORDINAL + 1))
    + (b"X", b"Y", b"MT")
)


def _parse_leading_digits(label: bytes) -> int | None:
    end = 0
    while end < len(label) and 0x30 <= label[end] <= 0x39:
        end += 1
    if end == 0:
        return None
    return int(label[:end])


def chromosome_to_ordinal(label: BytesLike) -> int:
    """Convert a chromosome label to its ordinal.

    Args:
        label: Chromosome label, optionally prefixed with ``chr``
            (e.g. ``b"chr1"``, ``"X"``, ``b"MT"``)

    Returns:
        The ordinal in the range 1-25

    Raises:
        InvalidChromosomeError: If the label is not a known chromosome

    Example:
        >>> chromosome_to_ordinal(b"chrX")
        23
    """
    chrom = as_bytes(label, "chromosome")
    if chrom.startswith(CHR_PREFIX):
        chrom = chrom[len(CHR_PREFIX):]

    ordinal = _LITERAL_ORDINALS.get(chrom)
    if ordinal is not None:
        return ordinal

    # Only a leading run of digits is parsed, so "1_random" resolves to 1
    value = _parse_leading_digits(chrom)
    if value is None or value > MAX_NUMERIC_ORDINAL:
        raise InvalidChromosomeError(label)
    return value


def ordinal_to_chromosome(ordinal: int) -> bytes:
    """Convert an ordinal back to its bare chromosome label.

    ``M`` is never produced, ordinal 25 always renders as ``MT``.

    Raises:
        InvalidChromosomeError: If ``ordinal`` is not in 0-25
    """
    if not isinstance(ordinal, int) or not 0 <= ordinal < len(_ORDINAL_LABELS):
        raise InvalidChromosomeError(ordinal)
    return _ORDINAL_LABELS[ordinal]
