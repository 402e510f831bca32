# msautils/visualize.py
import json
from pathlib import Path
from typing import Dict, List

import matplotlib.pyplot as plt
import numpy as np


def plot_scores(
    json_path: str,
    out_png: str = "data/cache/conservation_scores.png",
    top_n: int = 10,
    title: str = "Column conservation",
):
    """
    Plot per-column scores, plus Shannon entropy and gap frequency.
    Args:
        json_path: path to a column summary JSON (see msautils.conservation)
        out_png: output image path
        top_n: number of best-scoring columns to highlight
        title: title of the score panel
    """
    with open(json_path) as f:
        data: List[Dict] = json.load(f)

    positions = [d["position"] for d in data]
    n_pos = len(positions)
    scores = np.array([d["score"] for d in data], dtype=float)
    # undefined entropy plotted as a hole
    entropy = np.array(
        [np.nan if d["entropy"] is None else d["entropy"] for d in data], dtype=float
    )
    gap_freq = np.array([1.0 - d["occupancy"] for d in data], dtype=float)

    fig, (ax_score, ax_entropy) = plt.subplots(
        2,
        1,
        figsize=(max(10, n_pos // 3), 6),
        sharex=True,
        gridspec_kw={"height_ratios": [3, 1]},
    )

    ax_score.bar(positions, scores, color="steelblue", width=1.0, label="Score")
    if top_n and n_pos:
        best = np.argsort(-scores, kind="stable")[: min(top_n, n_pos)]
        ax_score.scatter(
            [positions[i] for i in best],
            scores[best],
            color="red",
            marker="o",
            s=30,
            zorder=3,
            label=f"Top {len(best)}",
        )
    ax_score.set_ylabel("Score")
    ax_score.set_title(title)
    ax_score.legend(fontsize="small")

    ax_entropy.plot(positions, entropy, color="black", linewidth=1.2, label="Entropy")
    ax_entropy.plot(
        positions, gap_freq, color="orange", linewidth=1.0, alpha=0.8, label="Gap freq"
    )
    ax_entropy.set_ylabel("Entropy / gaps")
    ax_entropy.set_xlabel("Position")
    ax_entropy.legend(fontsize="x-small", ncol=2)

    plt.tight_layout()
    Path(out_png).parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(out_png, dpi=150)
    plt.close(fig)
    print(f"[Visualizer] Conservation plot saved to {out_png}")
