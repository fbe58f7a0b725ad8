"""Input/Output modules for file operations."""

from .sex_map_reader import parse_sex_map_line, read_sex_map
from .vcf_reader import open_variant_source, sample_ids
from .vcf_writer import OUTPUT_FORMAT_ALIASES, VCFWriter, WriteConfig

__all__ = [
    "parse_sex_map_line",
    "read_sex_map",
    "open_variant_source",
    "sample_ids",
    "OUTPUT_FORMAT_ALIASES",
    "VCFWriter",
    "WriteConfig",
]
