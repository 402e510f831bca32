import numpy as np
import pytest

from matrices.substitution import SubstitutionMatrix, load_substitution_matrix
from msautils.errors import DegenerateInputError, FormatError, InputError

TOY_MATRIX = """\
# toy matrix
   A  R
A  4 -1
R -1  5
"""

FLAT_MATRIX = """\
   A  R
A  1  1
R  1  1
"""


@pytest.fixture
def blosum62() -> SubstitutionMatrix:
    return load_substitution_matrix()


class TestBundledMatrix:
    def test_alphabet_covers_amino_acids(self, blosum62: SubstitutionMatrix):
        assert set("ARNDCQEGHILKMFPSTWYV") <= set(blosum62.alphabet)

    def test_normalized_bounds(self, blosum62: SubstitutionMatrix):
        assert blosum62.min == 0.0
        assert blosum62.max == 1.0
        assert (blosum62.raw_min, blosum62.raw_max) == (-4.0, 11.0)
        assert blosum62.norm_score("W", "W") == pytest.approx(1.0)
        assert blosum62.norm_score("A", "A") == pytest.approx(8 / 15)

    def test_score_vector(self, blosum62: SubstitutionMatrix):
        vec = blosum62.score_vector("A")
        assert len(vec) == blosum62.size
        assert vec[blosum62.alphabet.index("R")] == pytest.approx(
            blosum62.norm_score("R", "A")
        )

    def test_loads_are_cached(self, blosum62: SubstitutionMatrix):
        assert load_substitution_matrix() is blosum62

    def test_unknown_name(self):
        with pytest.raises(InputError):
            load_substitution_matrix(name="NOT_A_MATRIX")


class TestMatrixFile:
    def test_reads_blosum62_mat_from_directory(self, tmp_path):
        (tmp_path / "blosum62.mat").write_text(TOY_MATRIX)
        matrix = load_substitution_matrix(tmp_path)
        assert matrix.alphabet == "AR"
        assert matrix.norm_score("A", "A") == pytest.approx(5 / 6)
        assert matrix.norm_score("R", "R") == pytest.approx(1.0)
        assert matrix.norm_score("A", "R") == pytest.approx(0.0)

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputError, match="blosum62.mat"):
            load_substitution_matrix(tmp_path)

    def test_constant_matrix(self, tmp_path):
        (tmp_path / "blosum62.mat").write_text(FLAT_MATRIX)
        with pytest.raises(DegenerateInputError):
            load_substitution_matrix(tmp_path)


class TestMatrixValidation:
    def test_single_symbol(self):
        with pytest.raises(DegenerateInputError):
            SubstitutionMatrix("A", np.array([[4.0]]))

    def test_not_square(self):
        with pytest.raises(FormatError):
            SubstitutionMatrix("AR", np.zeros((2, 3)))

    def test_alphabet_size_mismatch(self):
        with pytest.raises(FormatError):
            SubstitutionMatrix("ARN", np.eye(2))
