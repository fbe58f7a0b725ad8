import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Sequence, Tuple


def _project_root() -> Path:
    # helpers.py resides in tests/, go one level up
    return Path(__file__).resolve().parents[1]


def write_vcf(path: Path, samples: List[str], variants: List[Dict]) -> Path:
    """
    Write a minimal VCF with provided variants.

    Each variant dict may contain keys:
      - chrom (str)
      - pos (int)
      - ref (str)
      - alt (str)
      - genotypes (List[str]) aligned to samples order, required
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    chroms = sorted({v.get("chrom", "X") for v in variants} | {"X"})
    with open(path, "w") as f:
        f.write("##fileformat=VCFv4.2\n")
        f.write("##source=di2hap-tests\n")
        for chrom in chroms:
            f.write(f"##contig=<ID={chrom}>\n")
        f.write('##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">\n')
        f.write(
            "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\t"
            + "\t".join(samples)
            + "\n"
        )
        for v in variants:
            line = [
                v.get("chrom", "X"),
                str(v.get("pos", 1)),
                ".",
                v.get("ref", "A"),
                v.get("alt", "T"),
                ".",
                "PASS",
                ".",
                "GT",
            ]
            line += v["genotypes"]
            f.write("\t".join(line) + "\n")
    return path


def write_sex_map(path: Path, rows: Sequence[Tuple[str, str]]) -> Path:
    path = Path(path)
    path.write_text("".join(f"{sid}\t{code}\n" for sid, code in rows))
    return path


def read_header_lines(vcf_path: Path) -> List[str]:
    with open(vcf_path) as f:
        return [line.rstrip("\n") for line in f if line.startswith("##")]


def read_gt_calls(vcf_path: Path) -> List[List[str]]:
    """Return GT strings per data line of a plain-text VCF with FORMAT=GT."""
    calls: List[List[str]] = []
    with open(vcf_path) as f:
        for line in f:
            if line.startswith("#"):
                continue
            parts = line.rstrip("\n").split("\t")
            calls.append(parts[9:])
    return calls


def run_di2hap(*args: str, check: bool = True, **kwargs) -> subprocess.CompletedProcess:
    cmd = [sys.executable, "-m", "di2hap", *[str(a) for a in args]]
    return subprocess.run(
        cmd,
        cwd=_project_root(),
        check=check,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        **kwargs,
    )
