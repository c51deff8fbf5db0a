"""Exceptions raised by the variant key codec."""


class VariantKeyError(ValueError):
    """Base class for all variant key encoding/decoding errors."""


class InvalidChromosomeError(VariantKeyError):
    """A chromosome label or ordinal outside the supported vocabulary."""

    def __init__(self, chrom: object) -> None:
        super().__init__(f"Invalid Chromosome: {chrom!r}")
        self.chrom = chrom


class InvalidPositionError(VariantKeyError):
    """A position that does not fit in the 28-bit position field."""

    def __init__(self, position: int) -> None:
        super().__init__(f"Invalid Position: {position}")
        self.position = position
