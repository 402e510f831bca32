# scorers/trident.py
from __future__ import annotations

import math

import numpy as np

from matrices.substitution import SubstitutionMatrix, load_substitution_matrix
from msautils.alignment import Alignment, is_gap
from scorers.base import ConservationScorer, ScoringOptions
from scorers.wentropy import WeightedEntropyScorer


def residue_dissimilarity(alignment: Alignment, matrix: SubstitutionMatrix) -> np.ndarray:
    """
    r(x) = 1/k_x * sum_a |mean(X) - X_a| / lambda_r,  lambda_r = sqrt(K * (max - min)^2)
    X_a is the vector of normalized scores of residue a against the K matrix symbols,
    the sum runs over the k_x non-gap types of column x. Columns with no residue get 1.
    `alignment` must already be restricted to the matrix alphabet.
    """
    lam_r = math.sqrt(matrix.size * (matrix.max - matrix.min) ** 2)
    r = np.ones(alignment.ncol, dtype=float)
    for x in range(alignment.ncol):
        types = [aa for aa in alignment.type_list(x) if not is_gap(aa)]
        if not types:
            continue
        vectors = np.stack([matrix.score_vector(aa) for aa in types])
        mean = vectors.mean(axis=0)
        r[x] = np.linalg.norm(vectors - mean, axis=1).mean() / lam_r
    return r


class TridentScorer(ConservationScorer):
    """
    Trident score (Valdar 2002):
      S(x) = (1 - t(x))^a * (1 - r(x))^b * (1 - g(x))^c
    t: weighted entropy, r: residue dissimilarity under a substitution matrix,
    g: gap frequency.
    """

    name = "Trident"
    formula = "Score is based on trident score defined by Valdar (2002): S = (1 - t)^a * (1 - r)^b * (1 - g)^c"

    def __init__(
        self,
        options: ScoringOptions | None = None,
        matrix: SubstitutionMatrix | None = None,
    ):
        super().__init__(options)
        self._matrix = matrix

    @property
    def matrix(self) -> SubstitutionMatrix:
        if self._matrix is None:
            self._matrix = load_substitution_matrix(
                self.options.matrix_dir, name=self.options.matrix_name
            )
        return self._matrix

    def describe(self) -> None:
        super().describe()
        print("t measures the entropy")
        print("r measures the residue similarity (based on a normalized substitution matrix)")
        print("g measures the gap frequencies")
        print(f"a = {self.options.factor_a}\nb = {self.options.factor_b}\nc = {self.options.factor_c}\n")

    def terms(self, alignment: Alignment) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        weights = self.sequence_weights(alignment)
        t = WeightedEntropyScorer(self.options).column_entropy(alignment, weights)

        matrix = self.matrix
        if not alignment.is_subset_of(matrix.alphabet):
            missing = sorted(
                aa for aa in alignment.alphabet
                if not is_gap(aa) and aa not in matrix.alphabet
            )
            print(
                f"[Trident] Symbols {''.join(missing)} are not in {matrix.source}, "
                "ignored for residue similarity"
            )
        r = residue_dissimilarity(alignment.restrict_to_alphabet(matrix.alphabet), matrix)
        g = self.gap_frequencies(alignment)
        return t, r, g

    def compute_scores(self, alignment: Alignment) -> np.ndarray:
        t, r, g = self.terms(alignment)
        opts = self.options
        # each term lies in [0, 1]; clip rounding noise before fractional powers
        return (
            np.power(np.clip(1.0 - t, 0.0, 1.0), opts.factor_a)
            * np.power(np.clip(1.0 - r, 0.0, 1.0), opts.factor_b)
            * np.power(np.clip(1.0 - g, 0.0, 1.0), opts.factor_c)
        )
