"""Core genotype ploidy reduction logic."""

from .errors import (
    Di2HapError,
    IoOpenError,
    VariantIOError,
    MalformedMappingError,
    HeterozygousReductionError,
    ZeroSampleError,
)
from .genotype_utils import (
    GT_DTYPE,
    GT_MISSING,
    GT_END_OF_VECTOR,
    VariantSite,
    compute_stride,
    record_to_gt_buffer,
    write_gt_buffer,
)
from .ploidy_map import (
    DEFAULT_HAPLOID_CODE,
    SexMapEntry,
    SamplePloidyMap,
    build_ploidy_map,
)
from .reducer import ReductionStrategy, GenotypeReducer
from .verifier import HomozygosityVerifier

__all__ = [
    "Di2HapError",
    "IoOpenError",
    "VariantIOError",
    "MalformedMappingError",
    "HeterozygousReductionError",
    "ZeroSampleError",
    "GT_DTYPE",
    "GT_MISSING",
    "GT_END_OF_VECTOR",
    "VariantSite",
    "compute_stride",
    "record_to_gt_buffer",
    "write_gt_buffer",
    "DEFAULT_HAPLOID_CODE",
    "SexMapEntry",
    "SamplePloidyMap",
    "build_ploidy_map",
    "ReductionStrategy",
    "GenotypeReducer",
    "HomozygosityVerifier",
]
