"""Homozygosity check run before forcing samples to haploid."""

from typing import Optional

import numpy as np
from numpy.typing import NDArray

from .errors import HeterozygousReductionError
from .genotype_utils import VariantSite, compute_stride
from .ploidy_map import SamplePloidyMap

__all__ = ["HomozygosityVerifier"]


class HomozygosityVerifier:
    """Confirms that haploid-marked samples have identical copies.

    Diploid-marked samples are never inspected. Every value within the stride
    counts, end-of-vector padding included.
    """

    def __init__(self, ploidy_map: SamplePloidyMap):
        self.ploidy_map = ploidy_map

    def find_heterozygous(self, buffer: NDArray[np.int8]) -> Optional[int]:
        """Return the index of the first haploid-marked heterozygous sample.

        Args:
            buffer: Flat genotype buffer for one record

        Returns:
            Sample index, or None if every haploid-marked sample is homozygous
        """
        n = self.ploidy_map.sample_count
        stride = compute_stride(len(buffer), n)
        if stride < 2:
            return None

        rows = buffer.reshape(n, stride)
        first = rows[:, :1]
        het = (rows != first).any(axis=1) & self.ploidy_map.flags

        hits = np.flatnonzero(het)
        return int(hits[0]) if hits.size else None

    def verify(self, buffer: NDArray[np.int8], site: VariantSite) -> None:
        """Raise if the record cannot be reduced without losing information.

        Raises:
            HeterozygousReductionError: Naming the site and the first offending sample
        """
        idx = self.find_heterozygous(buffer)
        if idx is not None:
            raise HeterozygousReductionError(
                site.chrom,
                site.pos,
                site.ref,
                site.alts,
                self.ploidy_map.sample_ids[idx],
            )
