import matplotlib

matplotlib.use("Agg")

from msautils.alignment import Alignment  # noqa: E402
from msautils.conservation import column_summary, write_summary  # noqa: E402
from msautils.visualize import plot_scores  # noqa: E402


def test_plot_scores_writes_png(tmp_path):
    aln = Alignment(["a", "b"], ["A", "-"])  # entropy undefined -> plotted as a hole
    summary = write_summary(column_summary(aln, [0.0]), tmp_path / "summary.json")
    out = tmp_path / "plots" / "scores.png"
    plot_scores(str(summary), out_png=str(out), top_n=3)
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
