# scorers/run.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Type

from msautils.alignment import load_alignment
from msautils.conservation import column_summary, write_summary
from msautils.errors import ConservationError, OutputError
from scorers.base import ConservationScorer, ScoringOptions
from scorers.jensen import JensenShannonScorer
from scorers.trident import TridentScorer
from scorers.wentropy import WeightedEntropyScorer

SCORERS: Dict[str, Type[ConservationScorer]] = {
    "wentropy": WeightedEntropyScorer,
    "jensen": JensenShannonScorer,
    "trident": TridentScorer,
}


def get_scorer(name: str, options: ScoringOptions | None = None) -> ConservationScorer:
    try:
        cls = SCORERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown statistic: {name} (choose from {', '.join(SCORERS)})"
        ) from None
    return cls(options)


def score_alignment(
    msa_path: str,
    stat: str,
    options: ScoringOptions,
    summary_json: str | None = None,
    plot_png: str | None = None,
):
    """load -> weight -> score -> emit, with optional summary JSON and plot."""
    scorer = get_scorer(stat, options)
    alignment = load_alignment(msa_path)
    scores = scorer.run_alignment(alignment)

    if summary_json or plot_png:
        out = Path(options.output_path)
        summary_path = summary_json or str(out.with_name(out.stem + ".summary.json"))
        if Path(summary_path).resolve() == out.resolve():
            raise OutputError(summary_path, "summary would overwrite the score file")
        write_summary(column_summary(alignment, scores), summary_path)
        print(f"[{scorer.name}] Column summary saved to {summary_path}")
        if plot_png:
            from msautils.visualize import plot_scores  # matplotlib only when plotting

            plot_scores(summary_path, out_png=plot_png, title=f"{scorer.name} score")
    return scores


# ---------- CLI ----------
def _cli(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        "msa-conservation", description="Per-column conservation scores of an MSA"
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("score", help="Score every column of an aligned FASTA")
    s.add_argument("-i", "--msa", required=True, help="Input aligned FASTA")
    s.add_argument(
        "-s", "--stat", choices=sorted(SCORERS), default="trident", help="Statistic"
    )
    s.add_argument(
        "-o",
        "--out",
        default=ScoringOptions.output_path,
        help="Output score file (one score per line)",
    )
    s.add_argument(
        "-m",
        "--matrix-dir",
        default=None,
        help="Directory holding blosum62.mat (default: matrix bundled with Biopython)",
    )
    s.add_argument(
        "--matrix-name",
        default=ScoringOptions.matrix_name,
        help="Bundled substitution matrix when --matrix-dir is not given",
    )
    s.add_argument("-a", type=float, default=ScoringOptions.factor_a, help="Trident exponent of (1 - t)")
    s.add_argument("-b", type=float, default=ScoringOptions.factor_b, help="Trident exponent of (1 - r)")
    s.add_argument("-c", type=float, default=ScoringOptions.factor_c, help="Trident exponent of (1 - g)")
    s.add_argument(
        "--js-lambda",
        type=float,
        default=ScoringOptions.js_lambda,
        help="Jensen-Shannon mixing weight of the column distribution",
    )
    s.add_argument("--summary", default=None, help="Also write a per-column JSON summary")
    s.add_argument("--plot", default=None, help="Also plot the scores to this PNG")
    s.add_argument("-v", "--verbose", action="store_true")

    p = sub.add_parser("plot", help="Plot a per-column JSON summary")
    p.add_argument("--json", required=True, help="Input column summary JSON")
    p.add_argument("--out", default="data/cache/conservation_scores.png", help="Output PNG")
    p.add_argument("--top", type=int, default=10, help="Top N columns to highlight")

    args = parser.parse_args(argv)
    if args.cmd == "score" and not 0.0 < args.js_lambda < 1.0:
        parser.error("--js-lambda must lie strictly between 0 and 1")
    try:
        if args.cmd == "score":
            options = ScoringOptions(
                verbose=args.verbose,
                output_path=args.out,
                matrix_dir=args.matrix_dir,
                matrix_name=args.matrix_name,
                factor_a=args.a,
                factor_b=args.b,
                factor_c=args.c,
                js_lambda=args.js_lambda,
            )
            score_alignment(
                args.msa,
                args.stat,
                options,
                summary_json=args.summary,
                plot_png=args.plot,
            )
        elif args.cmd == "plot":
            from msautils.visualize import plot_scores

            plot_scores(args.json, out_png=args.out, top_n=args.top)
        else:
            raise ValueError(f"Unknown command: {args.cmd}")
    except ConservationError as exc:
        print(f"[Error] {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(_cli())
