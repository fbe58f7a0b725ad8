"""Main application coordinator for di2hap."""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

import pysam

from . import __version__
from .core import (
    GenotypeReducer,
    HomozygosityVerifier,
    ReductionStrategy,
    SamplePloidyMap,
    VariantIOError,
    VariantSite,
    ZeroSampleError,
    build_ploidy_map,
    record_to_gt_buffer,
    write_gt_buffer,
)
from .core.ploidy_map import DEFAULT_HAPLOID_CODE
from .io import VCFWriter, WriteConfig, open_variant_source, read_sex_map, sample_ids
from .utils import LOGGER_NAME, MemoryMonitor, setup_logger

__all__ = ["Di2HapConfig", "PipelineState", "RunSummary", "Di2HapApp"]

PROGRESS_INTERVAL = 10000


@dataclass
class Di2HapConfig:
    """Configuration for a conversion run.

    Attributes:
        input_vcf: Input VCF/BCF path, or None / "-" for standard input
        output: Output path, or "-" for standard output
        output_format: Output format letter (v, z, u, b)
        sex_map: Optional path to a two-column sex map
        haploid_code: Sex map code that marks haploid samples
        verify: Whether to abort on heterozygous haploid-marked samples
        verbose: Whether to enable verbose logging
        log_level: Logging level override
        log_format: Logging format (text or json)
        command_line: Command line recorded in the output header

    Example:
        >>> config = Di2HapConfig(input_vcf=Path("chrX.bcf"), sex_map=Path("sex.tsv"))
        >>> config.haploid_code, config.output_format
        ('0', 'v')
    """

    input_vcf: Union[Path, str, None] = None
    output: Union[Path, str] = "-"
    output_format: str = "v"
    sex_map: Optional[Path] = None
    haploid_code: str = DEFAULT_HAPLOID_CODE
    verify: bool = False
    verbose: bool = True
    log_level: Optional[str] = None
    log_format: str = "text"
    command_line: Optional[str] = None


class PipelineState(Enum):
    INITIALIZING = "initializing"
    MAPPING_LOADED = "mapping-loaded"
    STREAMING = "streaming"
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass
class RunSummary:
    """Outcome of a completed run."""

    records: int
    sample_count: int
    haploid_count: int
    strategy: ReductionStrategy


class Di2HapApp:
    """Streams records from input to output, reducing genotype ploidy."""

    def __init__(self, config: Di2HapConfig, logger: Optional[logging.Logger] = None):
        self.config = config
        self.logger = logger or setup_logger(
            LOGGER_NAME, config.log_level, config.log_format, config.verbose
        )
        self.memory_monitor = MemoryMonitor(self.logger)
        self.vcf_writer = VCFWriter(self.logger)
        self.state = PipelineState.INITIALIZING
        self.records_written = 0

    def run(self) -> RunSummary:
        """Execute the conversion.

        The input and output are opened first, then the sex map is loaded
        and records are streamed one at a time. Any fatal error moves the run
        to ``PipelineState.ABORTED`` and is re-raised; records already
        written stay in the output.

        Returns:
            RunSummary describing the completed run

        Raises:
            Di2HapError: On open failure, malformed sex map, zero samples,
                verification failure or mid-stream I/O failure
        """
        self.state = PipelineState.INITIALIZING
        self.records_written = 0
        self.memory_monitor.check_memory_and_warn("initialization")

        write_config = WriteConfig(
            output_format=self.config.output_format,
            version=__version__,
            command_line=self.config.command_line,
        )

        try:
            with open_variant_source(self.config.input_vcf, self.logger) as invcf:
                samples = sample_ids(invcf)
                if not samples:
                    raise ZeroSampleError("input contains no samples")

                # A bare OSError here comes from flushing or closing the output
                try:
                    with self.vcf_writer.open(
                        self.config.output, invcf.header, write_config
                    ) as outvcf:
                        ploidy_map = self._load_ploidy_map(samples)
                        self.state = PipelineState.MAPPING_LOADED
                        summary = self._stream(invcf, outvcf, ploidy_map)
                except OSError as e:
                    raise VariantIOError(
                        f"failed to finalize output {self.config.output}: {e}"
                    ) from e
        except BaseException:
            self.state = PipelineState.ABORTED
            raise

        self.state = PipelineState.COMPLETED
        self.memory_monitor.check_memory_and_warn("processing complete")
        if self.logger.isEnabledFor(logging.INFO):
            self.logger.info(
                f"Done: {summary.records} records written "
                f"({summary.strategy.value} reduction, "
                f"{summary.haploid_count}/{summary.sample_count} haploid samples)"
            )
        return summary

    def _load_ploidy_map(self, samples) -> SamplePloidyMap:
        entries = None
        if self.config.sex_map is not None:
            entries = read_sex_map(self.config.sex_map)
            if self.logger.isEnabledFor(logging.DEBUG):
                self.logger.debug(
                    f"Read {len(entries)} sex map entries from {self.config.sex_map}"
                )
        return build_ploidy_map(
            samples, entries, self.config.haploid_code, self.logger
        )

    def _stream(
        self,
        invcf: pysam.VariantFile,
        outvcf: pysam.VariantFile,
        ploidy_map: SamplePloidyMap,
    ) -> RunSummary:
        reducer = GenotypeReducer(ploidy_map)
        verifier = HomozygosityVerifier(ploidy_map) if self.config.verify else None

        if self.logger.isEnabledFor(logging.INFO):
            self.logger.info(
                f"Using {reducer.strategy.value} reduction"
                + (" with homozygosity verification" if verifier else "")
            )

        self.state = PipelineState.STREAMING
        records = iter(invcf)
        while True:
            try:
                rec = next(records)
            except StopIteration:
                break
            except (OSError, ValueError) as e:
                raise VariantIOError(
                    f"failed to read record after {self.records_written} records: {e}"
                ) from e

            self._convert_record(rec, reducer, verifier)

            try:
                outvcf.write(rec)
            except (OSError, ValueError) as e:
                raise VariantIOError(
                    f"failed to write record {VariantSite.from_record(rec).label}: {e}"
                ) from e
            self.records_written += 1

            if self.records_written % PROGRESS_INTERVAL == 0 and self.logger.isEnabledFor(
                logging.INFO
            ):
                self.logger.info(f"Processed {self.records_written} records...")

        return RunSummary(
            records=self.records_written,
            sample_count=ploidy_map.sample_count,
            haploid_count=ploidy_map.haploid_count,
            strategy=reducer.strategy,
        )

    def _convert_record(
        self,
        rec: pysam.VariantRecord,
        reducer: GenotypeReducer,
        verifier: Optional[HomozygosityVerifier],
    ) -> None:
        """Verify and reduce the GT field of one record in place."""
        try:
            extracted = record_to_gt_buffer(rec)
        except ValueError as e:
            raise VariantIOError(
                f"cannot encode GT at {VariantSite.from_record(rec).label}: {e}"
            ) from e
        if extracted is None:
            if self.logger.isEnabledFor(logging.DEBUG):
                self.logger.debug(
                    f"No GT field at {VariantSite.from_record(rec).label}; "
                    "record passed through unchanged"
                )
            return

        buffer, phased = extracted
        if verifier is not None:
            verifier.verify(buffer, VariantSite.from_record(rec))

        write_gt_buffer(rec, reducer.reduce(buffer), phased)
