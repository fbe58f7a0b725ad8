import json
from pathlib import Path

import pytest

from di2hap.cli import create_parser

from .helpers import run_di2hap, write_vcf


def _make_minimal_vcf(tmp_path: Path) -> Path:
    return write_vcf(
        tmp_path / "cli_min.vcf", ["S1", "S2"], [{"genotypes": ["0/0", "1/1"]}]
    )


def test_parser_defaults():
    args = create_parser().parse_args([])
    assert args.input is None
    assert args.output == "-"
    assert args.output_format == "v"
    assert args.haploid_code == "0"
    assert args.sex_map is None
    assert args.verify is False


def test_parser_short_options():
    args = create_parser().parse_args(
        ["-c", "1", "-m", "sex.tsv", "-o", "out.bcf", "-O", "b", "-V", "in.vcf"]
    )
    assert (args.haploid_code, args.sex_map, args.output, args.output_format) == (
        "1",
        "sex.tsv",
        "out.bcf",
        "b",
    )
    assert args.verify is True
    assert args.input == "in.vcf"


def test_version_flag():
    res = run_di2hap("--version")
    assert res.stdout.startswith("di2hap ")


def test_help_flag():
    res = run_di2hap("-h")
    assert "--sex-map" in res.stdout
    assert "--haploid-code" in res.stdout


def test_two_positional_inputs_rejected(tmp_path: Path):
    ivcf = _make_minimal_vcf(tmp_path)
    res = run_di2hap(str(ivcf), str(ivcf), check=False)
    assert res.returncode == 2


def test_invalid_output_format_rejected(tmp_path: Path):
    ivcf = _make_minimal_vcf(tmp_path)
    res = run_di2hap(str(ivcf), "-O", "sav", check=False)
    assert res.returncode == 2


def test_missing_input_file_rejected(tmp_path: Path):
    res = run_di2hap(str(tmp_path / "absent.vcf"), check=False)
    assert res.returncode == 1
    assert "Input file not found" in res.stderr


def test_missing_sex_map_rejected(tmp_path: Path):
    ivcf = _make_minimal_vcf(tmp_path)
    res = run_di2hap(str(ivcf), "-m", str(tmp_path / "absent.tsv"), check=False)
    assert res.returncode == 1
    assert "Sex map file not found" in res.stderr


@pytest.mark.parametrize("code", ["", "a\tb"])
def test_bad_haploid_code_rejected(tmp_path: Path, code: str):
    ivcf = _make_minimal_vcf(tmp_path)
    res = run_di2hap(str(ivcf), "-c", code, check=False)
    assert res.returncode == 1


def test_json_log_format(tmp_path: Path):
    ivcf = _make_minimal_vcf(tmp_path)
    res = run_di2hap(
        str(ivcf),
        "-o",
        str(tmp_path / "out.vcf"),
        "--log-level",
        "INFO",
        "--log-format",
        "json",
    )
    messages = [
        json.loads(line) for line in res.stderr.splitlines() if line.startswith("{")
    ]
    assert messages
    assert all(m["logger"] == "di2hap" for m in messages)
    assert any("Converting 2 of 2 samples to haploid" == m["message"] for m in messages)


def test_quiet_suppresses_info(tmp_path: Path):
    ivcf = _make_minimal_vcf(tmp_path)
    res = run_di2hap(str(ivcf), "-q", "-o", str(tmp_path / "out.vcf"))
    assert "[INFO]" not in res.stderr
