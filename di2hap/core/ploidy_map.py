"""Per-sample haploid/diploid classification built from a sex map."""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .errors import ZeroSampleError

__all__ = [
    "DEFAULT_HAPLOID_CODE",
    "SexMapEntry",
    "SamplePloidyMap",
    "build_ploidy_map",
]

DEFAULT_HAPLOID_CODE = "0"


@dataclass(frozen=True)
class SexMapEntry:
    """One parsed sex map line."""

    line_number: int
    sample_id: str
    code: str


@dataclass(frozen=True, eq=False)
class SamplePloidyMap:
    """Immutable haploid flags indexed by sample ordinal.

    Attributes:
        sample_ids: Sample IDs in input header order
        flags: Read-only boolean array, True where the sample is reduced to haploid
        haploid_count: Number of True flags, counted once in ``from_flags``

    Example:
        >>> pm = SamplePloidyMap.from_flags(["s1", "s2"], [True, False])
        >>> pm.haploid_count, pm.sample_count, pm.is_all_haploid
        (1, 2, False)
    """

    sample_ids: Tuple[str, ...]
    flags: NDArray[np.bool_]
    haploid_count: int

    @classmethod
    def from_flags(
        cls, sample_ids: Sequence[str], flags: Sequence[bool]
    ) -> "SamplePloidyMap":
        arr = np.array(flags, dtype=bool)
        if arr.shape != (len(sample_ids),):
            raise ValueError(
                f"expected {len(sample_ids)} ploidy flags, got {arr.shape[0]}"
            )
        arr.setflags(write=False)
        return cls(
            sample_ids=tuple(sample_ids),
            flags=arr,
            haploid_count=int(np.count_nonzero(arr)),
        )

    @property
    def sample_count(self) -> int:
        return len(self.sample_ids)

    @property
    def is_all_haploid(self) -> bool:
        return self.haploid_count == self.sample_count


def build_ploidy_map(
    sample_ids: Sequence[str],
    entries: Optional[Iterable[SexMapEntry]] = None,
    haploid_code: str = DEFAULT_HAPLOID_CODE,
    logger: Optional[logging.Logger] = None,
) -> SamplePloidyMap:
    """Classify every input sample as haploid or diploid.

    All samples start haploid. Each sex map entry whose sample is present in
    the input sets that sample to haploid when its code equals
    ``haploid_code`` and to diploid otherwise; a later entry for the same
    sample overrides an earlier one. Entries naming unknown samples are
    logged as warnings and skipped.

    Args:
        sample_ids: Sample IDs in input header order
        entries: Parsed sex map entries, or None to treat every sample as haploid
        haploid_code: Sex map code that marks a haploid sample
        logger: Optional logger for warnings and the haploid count notice

    Returns:
        SamplePloidyMap with one flag per sample

    Raises:
        ZeroSampleError: If ``sample_ids`` is empty
        MalformedMappingError: Propagated from ``entries`` while iterating

    Example:
        >>> entries = [SexMapEntry(1, "s1", "1"), SexMapEntry(2, "s2", "0")]
        >>> build_ploidy_map(["s1", "s2"], entries, haploid_code="1").flags.tolist()
        [True, False]
    """
    logger = logger or logging.getLogger("di2hap")

    if not sample_ids:
        raise ZeroSampleError("input contains no samples")

    flags = np.ones(len(sample_ids), dtype=bool)

    if entries is not None:
        id_to_idx: Dict[str, int] = {sid: i for i, sid in enumerate(sample_ids)}
        for entry in entries:
            idx = id_to_idx.get(entry.sample_id)
            if idx is None:
                logger.warning(f"Sex map ID not in VCF ({entry.sample_id})")
                continue
            flags[idx] = entry.code == haploid_code

    ploidy_map = SamplePloidyMap.from_flags(sample_ids, flags)

    if logger.isEnabledFor(logging.INFO):
        logger.info(
            f"Converting {ploidy_map.haploid_count} of "
            f"{ploidy_map.sample_count} samples to haploid"
        )
    return ploidy_map
