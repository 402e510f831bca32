import math

import matplotlib
import pytest

matplotlib.use("Agg")

from msautils.io import write_scores  # noqa: E402
from tools.compare_scores import compare, main, plot_comparison  # noqa: E402


def test_identical_scores():
    stats = compare([0.1, 0.9, 0.5], [0.1, 0.9, 0.5], top_k=2)
    assert stats["pearson"] == pytest.approx(1.0)
    assert stats["mean_abs_diff"] == 0.0
    assert stats["top_k_overlap"] == 2


def test_reversed_scores():
    stats = compare([0.0, 0.5, 1.0], [1.0, 0.5, 0.0], top_k=1)
    assert stats["pearson"] == pytest.approx(-1.0)
    assert stats["top_k_overlap"] == 0


def test_constant_scores_have_no_correlation():
    assert math.isnan(compare([1.0, 1.0], [0.2, 0.8])["pearson"])


def test_length_mismatch():
    with pytest.raises(ValueError):
        compare([1.0], [1.0, 2.0])


def test_plot_creates_missing_directory(tmp_path):
    out = tmp_path / "data" / "cache" / "cmp.png"
    assert plot_comparison([0.1, 0.9], [0.2, 0.8], "a", "b", str(out)) == out
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_main_prints_summary(tmp_path, capsys):
    first = write_scores([0.1, 0.9, 0.5], tmp_path / "a.txt")
    second = write_scores([0.2, 0.8, 0.5], tmp_path / "b.txt")
    out = tmp_path / "nested" / "cmp.png"
    main(["--first", str(first), "--second", str(second), "--top", "2", "--out", str(out)])
    assert out.exists()
    assert "Top-2 overlap:        2" in capsys.readouterr().out
