"""Sex map text parsing."""

from pathlib import Path
from typing import List, Union

from ..core.errors import IoOpenError, MalformedMappingError
from ..core.ploidy_map import SexMapEntry

__all__ = ["parse_sex_map_line", "read_sex_map"]


def parse_sex_map_line(line: str, line_number: int) -> SexMapEntry:
    """Split one tab-delimited sex map line into sample ID and code.

    Fields after the second are ignored.

    Args:
        line: Raw line, with or without its line terminator
        line_number: 1-based line number, reported in errors

    Returns:
        Parsed SexMapEntry

    Raises:
        MalformedMappingError: If the line has fewer than two fields

    Example:
        >>> parse_sex_map_line("NA12878\\t2\\n", 1)
        SexMapEntry(line_number=1, sample_id='NA12878', code='2')
    """
    stripped = line.rstrip("\r\n")
    fields = stripped.split("\t")
    if len(fields) < 2:
        raise MalformedMappingError(line_number, stripped)
    return SexMapEntry(line_number=line_number, sample_id=fields[0], code=fields[1])


def read_sex_map(path: Union[str, Path]) -> List[SexMapEntry]:
    """Read every entry of a sex map file.

    Raises:
        IoOpenError: If the file cannot be opened
        MalformedMappingError: On the first line with fewer than two fields
    """
    try:
        fh = open(path)
    except OSError as e:
        raise IoOpenError(f"could not open sex map {path}: {e}") from e

    with fh:
        return [
            parse_sex_map_line(line, line_number)
            for line_number, line in enumerate(fh, start=1)
        ]
