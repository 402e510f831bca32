import json

import matplotlib
import pytest

from msautils.errors import OutputError
from msautils.io import read_scores
from scorers.base import ScoringOptions
from scorers.run import SCORERS, _cli, get_scorer, score_alignment
from scorers.trident import TridentScorer

matplotlib.use("Agg")

RECORDS = [("s1", "AAA-"), ("s2", "AAA-"), ("s3", "AAT-")]


@pytest.fixture
def msa(write_fasta):
    return write_fasta(RECORDS)


@pytest.mark.parametrize("stat", sorted(SCORERS))
def test_cli_writes_one_score_per_column(stat, msa, tmp_path):
    out = tmp_path / f"{stat}.txt"
    assert _cli(["score", "-i", str(msa), "-s", stat, "-o", str(out)]) == 0
    scores = read_scores(out)
    assert len(scores) == 4
    assert scores[3] == 0.0


def test_cli_reports_missing_input(tmp_path, capsys):
    code = _cli(["score", "-i", str(tmp_path / "missing.fasta"), "-o", str(tmp_path / "x.txt")])
    assert code == 1
    assert "[Error]" in capsys.readouterr().err


def test_cli_reports_unwritable_output(msa, tmp_path, capsys):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    code = _cli(["score", "-i", str(msa), "-s", "wentropy", "-o", str(blocker / "x.txt")])
    assert code == 1
    assert str(blocker / "x.txt") in capsys.readouterr().err


def test_cli_rejects_bad_lambda(msa):
    with pytest.raises(SystemExit):
        _cli(["score", "-i", str(msa), "--js-lambda", "1.5"])


def test_cli_summary_and_plot(msa, tmp_path):
    out = tmp_path / "scores.txt"
    summary = tmp_path / "summary.json"
    png = tmp_path / "scores.png"
    args = ["score", "-i", str(msa), "-s", "wentropy", "-o", str(out)]
    assert _cli(args + ["--summary", str(summary), "--plot", str(png)]) == 0
    records = json.loads(summary.read_text())
    assert [r["position"] for r in records] == [1, 2, 3, 4]
    assert png.exists()

    replot = tmp_path / "replot.png"
    assert _cli(["plot", "--json", str(summary), "--out", str(replot)]) == 0
    assert replot.exists()


def test_score_alignment_defaults_summary_next_to_scores(msa, tmp_path):
    out = tmp_path / "scores.txt"
    score_alignment(
        str(msa), "jensen", ScoringOptions(output_path=str(out)), plot_png=str(tmp_path / "p.png")
    )
    assert (tmp_path / "scores.summary.json").exists()


def test_default_summary_never_replaces_json_score_file(msa, tmp_path):
    out = tmp_path / "scores.json"
    scores = score_alignment(
        str(msa), "wentropy", ScoringOptions(output_path=str(out)), plot_png=str(tmp_path / "p.png")
    )
    assert read_scores(out) == pytest.approx(list(scores), abs=1e-5)
    records = json.loads((tmp_path / "scores.summary.json").read_text())
    assert len(records) == 4


def test_summary_path_equal_to_score_file_is_rejected(msa, tmp_path):
    out = tmp_path / "scores.json"
    with pytest.raises(OutputError):
        score_alignment(str(msa), "wentropy", ScoringOptions(output_path=str(out)), summary_json=str(out))
    assert len(read_scores(out)) == 4


def test_get_scorer():
    opts = ScoringOptions(factor_b=1.0)
    scorer = get_scorer("trident", opts)
    assert isinstance(scorer, TridentScorer)
    assert scorer.options is opts
    with pytest.raises(ValueError):
        get_scorer("nope")
