# msautils/io.py
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from msautils.errors import FormatError, InputError, OutputError

MAX_SEQUENCES = 500


def parse_fasta(
    lines: Iterable[str], max_records: int = MAX_SEQUENCES
) -> List[Tuple[str, str]]:
    """
    Parse FASTA-like lines into (name, body) records.
    Body lines are kept verbatim (spaces are gap symbols), only line endings are dropped.
    Lines before the first header are ignored. At most `max_records` are returned.
    """
    records: List[Tuple[str, str]] = []
    seq_id = None
    seq_parts: List[str] = []
    dropped = 0
    for line in lines:
        line = line.rstrip("\r\n")
        if line.startswith(">"):
            if seq_id is not None:
                records.append((seq_id, "".join(seq_parts)))
            if len(records) >= max_records:
                seq_id = None
                dropped += 1
                continue
            seq_id = line[1:].split(" ", 1)[0]
            seq_parts = []
        elif seq_id is not None:
            seq_parts.append(line)
    if seq_id is not None:
        records.append((seq_id, "".join(seq_parts)))

    if dropped:
        print(
            f"[Alignment] Kept the first {max_records} sequences, {dropped} dropped"
        )
    return records


def read_fasta(
    path: str | Path, max_records: int = MAX_SEQUENCES
) -> List[Tuple[str, str]]:
    """Return list of (id, seq) from a FASTA-like alignment file."""
    path = Path(path)
    if not path.is_file():
        raise FormatError(f"Cannot open file {path}")
    try:
        with path.open("r") as f:
            return parse_fasta(f, max_records=max_records)
    except (OSError, UnicodeDecodeError) as exc:
        raise FormatError(f"Cannot open file {path}: {exc}") from exc


def write_scores(scores: Sequence[float], path: str | Path) -> Path:
    """Write one score per line, in column order."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w") as f:
            for score in scores:
                f.write(f"{float(score):.6g}\n")
    except OSError as exc:
        raise OutputError(path, exc.strerror or str(exc)) from exc
    return path


def read_scores(path: str | Path) -> List[float]:
    path = Path(path)
    if not path.is_file():
        raise InputError(f"Cannot open file {path}")
    scores: List[float] = []
    with path.open("r") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                scores.append(float(line))
            except ValueError as exc:
                raise FormatError(f"{path}:{lineno}: not a score: {line!r}") from exc
    return scores
