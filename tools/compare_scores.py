# tools/compare_scores.py
import argparse
from pathlib import Path
from typing import Dict, Sequence

import matplotlib.pyplot as plt
import numpy as np

from msautils.io import read_scores


def compare(
    scores_a: Sequence[float], scores_b: Sequence[float], top_k: int = 10
) -> Dict[str, float]:
    """Agreement between two score vectors of the same alignment."""
    a = np.asarray(scores_a, dtype=float)
    b = np.asarray(scores_b, dtype=float)
    if a.shape != b.shape:
        raise ValueError(f"Score files differ in length: {len(a)} vs {len(b)}")

    k = min(top_k, len(a))
    top_a = set(np.argsort(-a, kind="stable")[:k].tolist())
    top_b = set(np.argsort(-b, kind="stable")[:k].tolist())
    if len(a) > 1 and np.std(a) > 0 and np.std(b) > 0:
        pearson = float(np.corrcoef(a, b)[0, 1])
    else:
        pearson = float("nan")
    return {
        "n_columns": int(len(a)),
        "pearson": pearson,
        "mean_abs_diff": float(np.mean(np.abs(a - b))) if len(a) else 0.0,
        "top_k": k,
        "top_k_overlap": len(top_a & top_b),
    }


def plot_comparison(
    first: Sequence[float],
    second: Sequence[float],
    first_label: str,
    second_label: str,
    out_png: str,
) -> Path:
    pos = list(range(1, len(first) + 1))
    fig, ax = plt.subplots(figsize=(max(10, len(pos) // 3), 4))
    ax.plot(pos, first, label=first_label, color="blue", linewidth=1.5)
    ax.plot(pos, second, label=second_label, color="red", linewidth=1.5, alpha=0.7)
    ax.set_xlabel("Position")
    ax.set_ylabel("Score")
    ax.set_title(f"Conservation comparison: {first_label} vs {second_label}")
    ax.legend(fontsize="small")
    plt.tight_layout()
    out = Path(out_png)
    out.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(out, dpi=150)
    plt.close(fig)
    print(f"[Compare] Figure saved to {out}")
    return out


def main(argv=None):
    parser = argparse.ArgumentParser("Compare two conservation score files")
    parser.add_argument("--first", required=True, help="Score file (one value per line)")
    parser.add_argument("--second", required=True, help="Score file to compare against")
    parser.add_argument("--first-label", default="first")
    parser.add_argument("--second-label", default="second")
    parser.add_argument("--top", type=int, default=10, help="Top-k conserved columns")
    parser.add_argument("--out", default="data/cache/scores_compare.png")
    args = parser.parse_args(argv)

    first = read_scores(args.first)
    second = read_scores(args.second)
    stats = compare(first, second, top_k=args.top)

    plot_comparison(first, second, args.first_label, args.second_label, args.out)

    print("\n=== Numerical Summary ===")
    print(f"Columns:              {stats['n_columns']}")
    print(f"Pearson correlation:  {stats['pearson']:.3f}")
    print(f"Mean |difference|:    {stats['mean_abs_diff']:.4f}")
    print(f"Top-{stats['top_k']} overlap:        {stats['top_k_overlap']}")


if __name__ == "__main__":
    main()
