from pathlib import Path
from typing import List, Tuple

import pytest

from msautils.alignment import Alignment


def fasta_text(records: List[Tuple[str, str]]) -> str:
    return "".join(f">{name} some description\n{seq}\n" for name, seq in records)


@pytest.fixture
def write_fasta(tmp_path: Path):
    def _write(records: List[Tuple[str, str]], name: str = "aln.fasta") -> Path:
        path = tmp_path / name
        path.write_text(fasta_text(records))
        return path

    return _write


@pytest.fixture
def aaat_alignment() -> Alignment:
    return Alignment(["s1", "s2", "s3"], ["AAA", "AAA", "AAT"])


@pytest.fixture
def gap_column_alignment() -> Alignment:
    return Alignment(["s1", "s2", "s3"], ["A-", "C-", "A-"])
