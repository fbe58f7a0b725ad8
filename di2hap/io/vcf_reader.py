"""Variant file input."""

import logging
from pathlib import Path
from typing import List, Optional, Union

import pysam

from ..core.errors import IoOpenError

__all__ = ["STDIN_PATH", "open_variant_source", "sample_ids"]

STDIN_PATH = "-"


def open_variant_source(
    path: Union[str, Path, None], logger: Optional[logging.Logger] = None
) -> pysam.VariantFile:
    """Open a VCF, VCF.gz or BCF file for sequential reading.

    Args:
        path: Input path, or None / "-" for standard input
        logger: Optional logger for debug messages

    Returns:
        pysam VariantFile positioned at the first record

    Raises:
        IoOpenError: If htslib cannot open the file or parse its header
    """
    source = str(path) if path is not None else STDIN_PATH
    try:
        vf = pysam.VariantFile(source)
    except (OSError, ValueError) as e:
        raise IoOpenError(f"could not open input file {source}: {e}") from e

    if logger and logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            f"Opened input {source} ({len(vf.header.samples)} samples, "
            f"{len(vf.header.contigs)} contigs)"
        )
    return vf


def sample_ids(vf: pysam.VariantFile) -> List[str]:
    """Return sample IDs of an open variant file in header order."""
    return list(vf.header.samples)
