"""Tests for sample ploidy map construction."""

import dataclasses
from unittest.mock import Mock

import numpy as np
import pytest

from di2hap.core import (
    MalformedMappingError,
    SamplePloidyMap,
    SexMapEntry,
    ZeroSampleError,
    build_ploidy_map,
)


def _entries(*rows):
    return [SexMapEntry(i, sid, code) for i, (sid, code) in enumerate(rows, start=1)]


def test_no_sex_map_marks_every_sample_haploid():
    pm = build_ploidy_map(["s1", "s2", "s3"], None, logger=Mock())
    assert pm.flags.tolist() == [True, True, True]
    assert pm.haploid_count == 3
    assert pm.is_all_haploid


def test_sex_map_with_custom_haploid_code():
    pm = build_ploidy_map(
        ["s1", "s2"], _entries(("s1", "1"), ("s2", "0")), haploid_code="1", logger=Mock()
    )
    assert pm.flags.tolist() == [True, False]
    assert pm.haploid_count == 1
    assert not pm.is_all_haploid


def test_default_haploid_code_is_zero():
    pm = build_ploidy_map(
        ["s1", "s2"], _entries(("s1", "0"), ("s2", "2")), logger=Mock()
    )
    assert pm.flags.tolist() == [True, False]


def test_unlisted_samples_stay_haploid():
    pm = build_ploidy_map(
        ["s1", "s2", "s3"], _entries(("s2", "2")), logger=Mock()
    )
    assert pm.flags.tolist() == [True, False, True]


def test_unknown_sample_warns_and_is_skipped():
    logger = Mock()
    pm = build_ploidy_map(
        ["s1", "s2"], _entries(("s3", "1"), ("s1", "0")), logger=logger
    )
    assert pm.flags.tolist() == [True, True]
    logger.warning.assert_called_once_with("Sex map ID not in VCF (s3)")


def test_later_line_overrides_earlier_line():
    pm = build_ploidy_map(
        ["s1", "s2"], _entries(("s1", "2"), ("s1", "0"), ("s2", "0"), ("s2", "2")),
        logger=Mock(),
    )
    assert pm.flags.tolist() == [True, False]


def test_haploid_count_is_reported():
    logger = Mock()
    logger.isEnabledFor.return_value = True
    build_ploidy_map(["s1", "s2"], _entries(("s2", "2")), logger=logger)
    logger.info.assert_called_once_with("Converting 1 of 2 samples to haploid")


def test_zero_samples_rejected():
    with pytest.raises(ZeroSampleError):
        build_ploidy_map([], None, logger=Mock())


def test_malformed_entry_propagates_from_iterable():
    def entries():
        yield SexMapEntry(1, "s1", "0")
        raise MalformedMappingError(2, "s2")

    with pytest.raises(MalformedMappingError) as excinfo:
        build_ploidy_map(["s1", "s2"], entries(), logger=Mock())
    assert excinfo.value.line_number == 2


def test_flags_are_read_only():
    pm = SamplePloidyMap.from_flags(["s1", "s2"], [True, False])
    with pytest.raises(ValueError):
        pm.flags[0] = False


def test_from_flags_requires_one_flag_per_sample():
    with pytest.raises(ValueError):
        SamplePloidyMap.from_flags(["s1", "s2"], [True])


def test_flags_dtype_is_bool():
    pm = build_ploidy_map(["s1"], None, logger=Mock())
    assert pm.flags.dtype == np.bool_
    assert pm.sample_ids == ("s1",)


def test_haploid_count_is_stored_once_at_construction():
    pm = SamplePloidyMap.from_flags(["s1", "s2", "s3"], [True, False, True])
    assert "haploid_count" in {f.name for f in dataclasses.fields(pm)}
    assert pm.haploid_count == 2
