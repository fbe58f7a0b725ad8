"""VCF/BCF output operations."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import pysam

from ..core.errors import IoOpenError

__all__ = ["OUTPUT_FORMAT_ALIASES", "STDOUT_PATH", "WriteConfig", "VCFWriter"]

STDOUT_PATH = "-"

# bcftools letters to pysam modes
_MODE_MAP: Dict[str, str] = {"v": "w", "z": "wz", "u": "wb0", "b": "wb"}

OUTPUT_FORMAT_ALIASES: Dict[str, str] = {
    "vcf": "v",
    "vcf.gz": "z",
    "ubcf": "u",
    "bcf": "b",
}


@dataclass
class WriteConfig:
    """Configuration for variant output.

    Attributes:
        output_format: Output format letter (v, z, u, b) or alias (vcf, vcf.gz, ubcf, bcf)
        version: Program version recorded in the output header
        command_line: Command line recorded in the output header, if any

    Example:
        >>> config = WriteConfig(output_format="bcf")
        >>> config.mode
        'wb'
    """

    output_format: str = "v"
    version: Optional[str] = None
    command_line: Optional[str] = None

    @property
    def format_letter(self) -> str:
        return OUTPUT_FORMAT_ALIASES.get(self.output_format, self.output_format)

    @property
    def mode(self) -> str:
        letter = self.format_letter
        if letter not in _MODE_MAP:
            raise ValueError(f"Unsupported output_format: {self.output_format}")
        return _MODE_MAP[letter]


class VCFWriter:
    """Opens the output sink for converted records."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger

    def prepare_header(
        self, template: pysam.VariantHeader, config: WriteConfig
    ) -> pysam.VariantHeader:
        """Copy the input header and record how the output was produced."""
        header = template.copy()
        if config.version:
            header.add_meta("di2hap_version", value=config.version)
        if config.command_line:
            header.add_meta("di2hap_command", value=config.command_line)
        return header

    def open(
        self,
        path: Union[str, Path, None],
        template: pysam.VariantHeader,
        config: WriteConfig,
    ) -> pysam.VariantFile:
        """Open the output file and write its header.

        Args:
            path: Output path, or None / "-" for standard output
            template: Header of the input file
            config: Write configuration specifying format and header metadata

        Returns:
            pysam VariantFile opened for writing

        Raises:
            IoOpenError: If the output cannot be created
            ValueError: If the output format is not supported
        """
        target = str(path) if path is not None else STDOUT_PATH
        out_mode: Any = config.mode
        header = self.prepare_header(template, config)

        try:
            vf = pysam.VariantFile(target, mode=out_mode, header=header)
        except (OSError, ValueError) as e:
            raise IoOpenError(f"could not open output file {target}: {e}") from e

        if self.logger and self.logger.isEnabledFor(logging.INFO):
            self.logger.info(
                f"Writing {config.format_letter!r} output to {target}"
            )
        return vf
