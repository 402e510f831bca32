# scorers/jensen.py
from __future__ import annotations

import numpy as np

from msautils.alignment import Alignment
from msautils.errors import DegenerateInputError
from msautils.weights import weighted_column_probabilities
from scorers.base import ConservationScorer

PSEUDO_COUNT = 1e-6


def smooth_probabilities(proba: np.ndarray, floor: float = PSEUDO_COUNT) -> np.ndarray:
    """
    Replace absent symbols by `floor` and take the same mass back from the present ones:
      pseudo = n_absent * floor / (K - n_absent)
    subtracted from every probability greater than `floor`. Rows keep their sum.
    """
    smoothed = np.array(proba, dtype=float)
    n_symbols = smoothed.shape[1]
    absent = smoothed == 0.0
    n_absent = absent.sum(axis=1)
    if np.any(n_absent == n_symbols):
        raise DegenerateInputError("A column carries no probability mass")

    smoothed[absent] = floor
    pseudo = n_absent * floor / (n_symbols - n_absent)
    smoothed -= np.where(smoothed > floor, pseudo[:, None], 0.0)
    return smoothed


def _kl_bits(p: np.ndarray, r: np.ndarray) -> np.ndarray:
    mask = p > 0.0
    ratio = np.where(mask, p, 1.0) / np.where(mask, r, 1.0)
    return np.sum(np.where(mask, p * np.log2(ratio), 0.0), axis=-1)


def js_divergence(p: np.ndarray, q: np.ndarray, lam: float = 0.5) -> np.ndarray:
    """
    Jensen-Shannon divergence of each row of p against the distribution q, in bits:
      r = lam * p + (1 - lam) * q
      D = lam * KL(p || r) + (1 - lam) * KL(q || r)
    """
    q = np.broadcast_to(q, p.shape)
    r = lam * p + (1.0 - lam) * q
    return lam * _kl_bits(p, r) + (1.0 - lam) * _kl_bits(q, r)


class JensenShannonScorer(ConservationScorer):
    """
    Divergence of the smoothed weighted column distribution from the background
    distribution of the whole alignment (global symbol frequencies), damped by gaps:
      S(x) = D(p_x, q) * (1 - gap_freq(x))
    """

    name = "Jensen"
    formula = "Score is based on Jensen-Shannon measure: S = λ R(p,r) + (1 - λ) R(q,r), times (1 - gap_freq)"

    def column_probabilities(
        self, alignment: Alignment, weights: np.ndarray
    ) -> np.ndarray:
        return smooth_probabilities(weighted_column_probabilities(alignment, weights))

    @staticmethod
    def background(alignment: Alignment) -> np.ndarray:
        return np.array([alignment.frequencies[aa] for aa in alignment.alphabet])

    def compute_scores(self, alignment: Alignment) -> np.ndarray:
        lam = self.options.js_lambda
        if not 0.0 < lam < 1.0:
            raise ValueError(f"js_lambda must lie in (0, 1), got {lam}")

        weights = self.sequence_weights(alignment)
        proba = self.column_probabilities(alignment, weights)
        q = self.background(alignment)
        if self.options.verbose:
            print("[DEBUG] Background distribution :")
            print(";".join(f"{aa}={f:.4f}" for aa, f in zip(alignment.alphabet, q)))

        divergence = js_divergence(proba, q, lam)
        return divergence * (1.0 - self.gap_frequencies(alignment))
