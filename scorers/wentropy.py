# scorers/wentropy.py
from __future__ import annotations

import numpy as np

from msautils.alignment import Alignment
from msautils.weights import (
    entropy_lambda,
    weighted_column_probabilities,
    weighted_entropy,
)
from scorers.base import ConservationScorer


class WeightedEntropyScorer(ConservationScorer):
    """
    Weighted Shannon entropy of each column, sequences weighted by Henikoff:
      H(x) = -lambda * sum_a p_a log(p_a),  lambda = 1 / log(min(K, N))
      S(x) = (1 - H(x)) * (1 - gap_freq(x))
    """

    name = "WEntropy"
    formula = "Score is based on wentropy + gap counts: S = (1 - wentropy) * (1 - gap_freq)"

    def column_entropy(self, alignment: Alignment, weights: np.ndarray) -> np.ndarray:
        lam = entropy_lambda(alignment)
        proba = weighted_column_probabilities(alignment, weights)
        return weighted_entropy(proba, lam)

    def compute_scores(self, alignment: Alignment) -> np.ndarray:
        weights = self.sequence_weights(alignment)
        entropy = self.column_entropy(alignment, weights)
        return (1.0 - entropy) * (1.0 - self.gap_frequencies(alignment))
