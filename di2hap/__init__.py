"""di2hap - selective diploid to haploid genotype conversion.

Reduces per-sample GT calls in a VCF/BCF stream from diploid to haploid,
driven by an optional sex map; samples not listed are treated as haploid.
"""

__version__ = "1.0.0"

from .app import Di2HapApp, Di2HapConfig, PipelineState, RunSummary
from .core import (
    Di2HapError,
    GenotypeReducer,
    HomozygosityVerifier,
    ReductionStrategy,
    SamplePloidyMap,
    build_ploidy_map,
)

__all__ = [
    "Di2HapApp",
    "Di2HapConfig",
    "PipelineState",
    "RunSummary",
    "Di2HapError",
    "GenotypeReducer",
    "HomozygosityVerifier",
    "ReductionStrategy",
    "SamplePloidyMap",
    "build_ploidy_map",
]
