"""Command-line interface for di2hap."""

import argparse
import platform
import shlex
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .app import Di2HapApp, Di2HapConfig
from .core import Di2HapError
from .core.ploidy_map import DEFAULT_HAPLOID_CODE
from .io import OUTPUT_FORMAT_ALIASES
from .utils import LOGGER_NAME, setup_logger, validate_cli_arguments

__all__ = ["create_parser", "main"]


def _get_git_commit() -> str:
    """Return short git commit hash if available, else 'unknown'."""
    try:
        res = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            cwd=Path(__file__).resolve().parent,
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
        )
        return res.stdout.strip() or "unknown"
    except (OSError, subprocess.CalledProcessError):
        return "unknown"


def _build_version_string() -> str:
    """Compose version string with build and runtime info."""
    commit = _get_git_commit()
    py = platform.python_version()
    return f"di2hap {__version__} (commit hash {commit})\nPython {py}"


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser.

    Returns:
        Configured ArgumentParser with all di2hap options

    Example:
        >>> parser = create_parser()
        >>> args = parser.parse_args(["-m", "sex.tsv", "-c", "1", "chrX.bcf"])
        >>> args.input, args.sex_map, args.haploid_code
        ('chrX.bcf', 'sex.tsv', '1')
    """
    parser = argparse.ArgumentParser(
        prog="di2hap",
        description=(
            "Convert diploid genotype calls to haploid for the samples selected "
            "by a sex map (all samples when no sex map is given)."
        ),
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        epilog=(
            "Notes: when every sample is haploid the output GT has one allele per "
            "sample; otherwise diploid samples are kept and haploid samples are "
            "written with a single allele."
        ),
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=_build_version_string(),
        help="Show program version, commit hash, and Python version, then exit",
    )

    parser.add_argument(
        "input",
        nargs="?",
        default=None,
        help="Input VCF/VCF.gz/BCF file (default: standard input)",
        metavar="INPUT",
    )

    grp_conv = parser.add_argument_group("Conversion", "Sample ploidy selection")
    grp_conv.add_argument(
        "-m",
        "--sex-map",
        dest="sex_map",
        help=(
            "Tab-delimited sample ID and code per line "
            "(default: all samples are presumed haploid)"
        ),
        default=None,
        metavar="SEX_MAP",
    )
    grp_conv.add_argument(
        "-c",
        "--haploid-code",
        dest="haploid_code",
        help="Code used for haploid samples in the sex map",
        default=DEFAULT_HAPLOID_CODE,
        metavar="CODE",
    )
    grp_conv.add_argument(
        "-V",
        "--verify",
        help="Verify genotypes are homozygous before converting",
        action="store_true",
        default=False,
    )

    grp_io = parser.add_argument_group("Output", "Output path and format")
    grp_io.add_argument(
        "-o",
        "--output",
        help="Output path ('-' for standard output)",
        default="-",
        metavar="OUTPUT",
    )
    grp_io.add_argument(
        "-O",
        "--output-format",
        dest="output_format",
        help=(
            "Output format (bcftools-style): v (VCF), z (VCF.gz), "
            "u (uncompressed BCF), b (compressed BCF); "
            "vcf, vcf.gz, ubcf and bcf are accepted as aliases"
        ),
        choices=["v", "z", "u", "b"] + list(OUTPUT_FORMAT_ALIASES),
        default="v",
    )

    grp_log = parser.add_argument_group("Logging", "Logging verbosity and format")
    grp_log.add_argument(
        "-q",
        "--quiet",
        help="Suppress progress output",
        action="store_true",
        default=False,
    )
    grp_log.add_argument(
        "-L",
        "--log-level",
        help=(
            "Logging level (DEBUG, INFO, WARNING, ERROR); default depends on --quiet"
        ),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
    )
    grp_log.add_argument(
        "-F",
        "--log-format",
        help="Logging format: text or json",
        choices=["text", "json"],
        default="text",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point.

    Parses and validates arguments, runs the conversion, and exits with
    status 1 on any fatal conversion error.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    validate_cli_arguments(args)

    raw_argv = sys.argv[1:] if argv is None else argv
    config = Di2HapConfig(
        input_vcf=args.input,
        output=args.output,
        output_format=args.output_format,
        sex_map=Path(args.sex_map) if args.sex_map else None,
        haploid_code=args.haploid_code,
        verify=args.verify,
        verbose=not args.quiet,
        log_level=args.log_level,
        log_format=args.log_format,
        command_line=shlex.join(["di2hap"] + list(raw_argv)),
    )

    logger = setup_logger(
        LOGGER_NAME, config.log_level, config.log_format, config.verbose
    )
    logger.info(f"Starting di2hap {__version__}")
    logger.info(f"Input: {config.input_vcf or 'stdin'}, output: {config.output}")
    if config.sex_map:
        logger.info(
            f"Sex map: {config.sex_map} (haploid code {config.haploid_code!r})"
        )

    app = Di2HapApp(config, logger)
    try:
        app.run()
    except KeyboardInterrupt:
        logger.error("Operation interrupted by user")
        sys.exit(1)
    except Di2HapError as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
