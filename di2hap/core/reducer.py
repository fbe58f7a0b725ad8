"""Ploidy reduction of flat genotype buffers."""

from enum import Enum

import numpy as np
from numpy.typing import NDArray

from .genotype_utils import GT_END_OF_VECTOR, compute_stride
from .ploidy_map import SamplePloidyMap

__all__ = ["ReductionStrategy", "GenotypeReducer"]


class ReductionStrategy(Enum):
    """How haploid samples are represented in the output.

    FULL collapses every sample to a single copy (output stride 1).
    PARTIAL keeps the record stride and pads haploid samples with
    end-of-vector values so diploid samples stay intact.
    """

    FULL = "full"
    PARTIAL = "partial"

    @classmethod
    def for_ploidy_map(cls, ploidy_map: SamplePloidyMap) -> "ReductionStrategy":
        return cls.FULL if ploidy_map.is_all_haploid else cls.PARTIAL


class GenotypeReducer:
    """Applies the run-wide reduction strategy to one record at a time."""

    def __init__(self, ploidy_map: SamplePloidyMap):
        self.ploidy_map = ploidy_map
        self.strategy = ReductionStrategy.for_ploidy_map(ploidy_map)

    def reduce(self, buffer: NDArray[np.int8]) -> NDArray[np.int8]:
        """Return the ploidy-adjusted genotype buffer for one record.

        Args:
            buffer: Flat genotype buffer, ``sample_count x stride`` row-major

        Returns:
            A new buffer of length ``sample_count`` under FULL reduction, or
            the same-length buffer, modified in place, under PARTIAL reduction

        Raises:
            ZeroSampleError: If the ploidy map has no samples
            ValueError: If the buffer length is not a multiple of the sample count

        Example:
            >>> pm = SamplePloidyMap.from_flags(["s1", "s2"], [True, True])
            >>> GenotypeReducer(pm).reduce(np.array([1, 1, 0, 0], dtype=np.int8)).tolist()
            [1, 0]
        """
        n = self.ploidy_map.sample_count
        stride = compute_stride(len(buffer), n)
        rows = buffer.reshape(n, stride)

        if self.strategy is ReductionStrategy.FULL:
            return rows[:, 0].copy()

        if stride > 1:
            rows[self.ploidy_map.flags, 1:] = GT_END_OF_VECTOR
        return rows.reshape(-1)
