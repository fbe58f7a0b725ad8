"""Input validation utilities."""

import argparse
import sys
from pathlib import Path

from ..io.vcf_writer import OUTPUT_FORMAT_ALIASES

__all__ = ["validate_cli_arguments"]


def validate_cli_arguments(args: argparse.Namespace) -> None:
    """Validate CLI argument values before any file is opened.

    Args:
        args: Parsed command line arguments
    """
    if not args.haploid_code:
        sys.exit("-c (haploid code) must not be empty")
    if "\t" in args.haploid_code:
        sys.exit("-c (haploid code) must not contain a tab character")

    if args.input is not None and args.input != "-" and not Path(args.input).exists():
        sys.exit(f"Input file not found: {args.input}")

    if args.sex_map is not None and not Path(args.sex_map).is_file():
        sys.exit(f"Sex map file not found: {args.sex_map}")

    # Normalize name aliases to bcftools letters
    args.output_format = OUTPUT_FORMAT_ALIASES.get(
        args.output_format, args.output_format
    )
