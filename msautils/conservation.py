# msautils/conservation.py
import json
from pathlib import Path
from typing import Dict, List, Sequence

from msautils.alignment import Alignment
from msautils.errors import DegenerateInputError, OutputError


def column_summary(alignment: Alignment, scores: Sequence[float]) -> List[Dict]:
    """
    Per-column record of the alignment statistics next to the final score.
    Entropy is None where its normalization is undefined.
    """
    if len(scores) != alignment.ncol:
        raise ValueError(f"Got {len(scores)} scores for {alignment.ncol} columns")

    results: List[Dict] = []
    for col in range(alignment.ncol):
        gaps = alignment.gap_count(col)
        try:
            entropy = alignment.entropy_at(col)
        except DegenerateInputError:
            entropy = None
        results.append(
            {
                "position": col + 1,  # 1-based in alignment space
                "column": alignment.column(col),
                "gap_count": int(gaps),
                "occupancy": float(1.0 - gaps / alignment.nseq),
                "num_types": alignment.num_types(col),
                "types": alignment.type_list(col),
                "entropy": entropy,
                "score": float(scores[col]),
            }
        )
    return results


def write_summary(records: List[Dict], out_json: str | Path) -> Path:
    out_json = Path(out_json)
    try:
        out_json.parent.mkdir(parents=True, exist_ok=True)
        with out_json.open("w") as f:
            json.dump(records, f, indent=2)
    except OSError as exc:
        raise OutputError(out_json, exc.strerror or str(exc)) from exc
    return out_json
