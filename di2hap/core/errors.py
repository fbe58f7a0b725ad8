"""Exceptions raised while converting diploid genotypes to haploid."""

from typing import Sequence

__all__ = [
    "Di2HapError",
    "IoOpenError",
    "VariantIOError",
    "MalformedMappingError",
    "HeterozygousReductionError",
    "ZeroSampleError",
]


class Di2HapError(Exception):
    """Base class for fatal di2hap errors."""

    pass


class IoOpenError(Di2HapError):
    """Exception raised when an input or output variant file cannot be opened."""

    pass


class VariantIOError(Di2HapError):
    """Exception raised when reading or writing a record fails mid-stream."""

    pass


class MalformedMappingError(Di2HapError):
    """Exception raised when a sex map line has fewer than two fields."""

    def __init__(self, line_number: int, line: str):
        self.line_number = line_number
        self.line = line
        super().__init__(
            f"malformed sex map at line {line_number}: expected "
            f"'<sample_id>\\t<code>', got {line!r}"
        )


class HeterozygousReductionError(Di2HapError):
    """Exception raised when a haploid-marked sample carries differing copies."""

    def __init__(
        self, chrom: str, pos: int, ref: str, alts: Sequence[str], sample_id: str
    ):
        self.chrom = chrom
        self.pos = pos
        self.ref = ref
        self.alts = tuple(alts)
        self.sample_id = sample_id
        super().__init__(
            f"cannot convert heterozygous to haploid at "
            f"{chrom}:{pos}:{ref}:{','.join(self.alts)}:{sample_id}"
        )


class ZeroSampleError(Di2HapError):
    """Exception raised when the input has no samples to convert."""

    pass
