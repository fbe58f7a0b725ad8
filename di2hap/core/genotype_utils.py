"""Genotype buffer layout and conversion to and from pysam records."""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .errors import ZeroSampleError

__all__ = [
    "GT_DTYPE",
    "GT_MISSING",
    "GT_END_OF_VECTOR",
    "VariantSite",
    "compute_stride",
    "record_to_gt_buffer",
    "write_gt_buffer",
]

# BCF int8 sentinels: 0x80 is a missing allele, 0x81 pads a short vector.
GT_DTYPE = np.int8
GT_MISSING = int(np.iinfo(GT_DTYPE).min)
GT_END_OF_VECTOR = GT_MISSING + 1
GT_MAX_ALLELE = int(np.iinfo(GT_DTYPE).max)


@dataclass(frozen=True)
class VariantSite:
    """Identity fields of a variant record, used in diagnostics only."""

    chrom: str
    pos: int
    ref: str
    alts: Tuple[str, ...] = ()

    @classmethod
    def from_record(cls, rec) -> "VariantSite":
        return cls(
            chrom=rec.chrom,
            pos=rec.pos,
            ref=rec.ref or ".",
            alts=tuple(rec.alts or ()),
        )

    @property
    def label(self) -> str:
        """Site label as ``chrom:pos:ref:alt1,alt2``.

        Example:
            >>> VariantSite("X", 100, "A", ("C", "G")).label
            'X:100:A:C,G'
        """
        return f"{self.chrom}:{self.pos}:{self.ref}:{','.join(self.alts)}"


def compute_stride(buffer_length: int, sample_count: int) -> int:
    """Return the number of genotype values per sample in a flat buffer.

    Args:
        buffer_length: Length of the flat genotype buffer
        sample_count: Number of samples in the record

    Returns:
        Values per sample (``buffer_length // sample_count``)

    Raises:
        ZeroSampleError: If ``sample_count`` is zero
        ValueError: If the buffer does not split evenly across samples

    Example:
        >>> compute_stride(6, 3)
        2
    """
    if sample_count <= 0:
        raise ZeroSampleError(
            "cannot compute genotype stride for a record with no samples"
        )
    stride, remainder = divmod(buffer_length, sample_count)
    if remainder:
        raise ValueError(
            f"genotype buffer of length {buffer_length} is not a multiple of "
            f"the sample count ({sample_count})"
        )
    return stride


def _encode_allele(allele: Optional[int]) -> int:
    if allele is None:
        return GT_MISSING
    if allele < 0 or allele > GT_MAX_ALLELE:
        raise ValueError(
            f"allele index {allele} does not fit the int8 genotype encoding"
        )
    return allele


def record_to_gt_buffer(rec) -> Optional[Tuple[NDArray[np.int8], List[bool]]]:
    """Extract the GT field of a record as a flat int8 buffer.

    Samples with fewer copies than the widest sample are padded with
    ``GT_END_OF_VECTOR``; missing alleles become ``GT_MISSING``.

    Args:
        rec: pysam VariantRecord

    Returns:
        Tuple of (flat buffer, per-sample phased flags), or None if the record
        has no GT field
    """
    if "GT" not in rec.format:
        return None

    calls = []
    phased = []
    for sample in rec.samples.values():
        gt = sample.get("GT") or (None,)
        calls.append(gt)
        phased.append(bool(sample.phased))

    stride = max((len(gt) for gt in calls), default=0)
    rows = np.full((len(calls), stride), GT_END_OF_VECTOR, dtype=GT_DTYPE)
    for i, gt in enumerate(calls):
        rows[i, : len(gt)] = [_encode_allele(a) for a in gt]

    return rows.ravel(), phased


def write_gt_buffer(
    rec, buffer: NDArray[np.int8], phased: Sequence[bool]
) -> None:
    """Store a flat genotype buffer back into the GT field of a record.

    ``GT_END_OF_VECTOR`` slots are dropped, so a padded sample is written with
    fewer copies. Phasing is restored for samples that keep two or more copies.

    Args:
        rec: pysam VariantRecord to modify in place
        buffer: Flat genotype buffer, one row of ``stride`` values per sample
        phased: Phased flag per sample as returned by ``record_to_gt_buffer``
    """
    samples = list(rec.samples.values())
    stride = compute_stride(len(buffer), len(samples))
    rows = np.asarray(buffer).reshape(len(samples), stride)

    for sample, row, was_phased in zip(samples, rows, phased):
        alleles = tuple(
            None if v == GT_MISSING else int(v)
            for v in row
            if v != GT_END_OF_VECTOR
        )
        sample["GT"] = alleles or (None,)
        if was_phased and len(alleles) > 1:
            sample.phased = True
