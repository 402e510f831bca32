# msautils/weights.py
from __future__ import annotations

import math

import numpy as np

from msautils.alignment import Alignment
from msautils.errors import DegenerateInputError


def sequence_weight(alignment: Alignment, i: int) -> float:
    """
    Weight of sequence i, Henikoff & Henikoff (1994):
      w_i = 1/L * sum_x 1 / (k_x * n_{x,i})
    k_x = number of symbol types in column x,
    n_{x,i} = number of sequences sharing the symbol of sequence i in column x.
    """
    w = 0.0
    for x in range(alignment.ncol):
        k = alignment.num_types(x)
        s = alignment.symbol_at(i, x)
        n = sum(1 for seq in alignment.sequences if seq[x] == s)
        w += 1.0 / (n * k)
    return w / alignment.ncol


def henikoff_weights(alignment: Alignment, verbose: bool = False) -> np.ndarray:
    """
    Henikoff weights of every sequence, one column at a time.
    Returns a read-only array of length nseq; the weights sum to 1.
    """
    chars = alignment.char_matrix()
    weights = np.zeros(alignment.nseq, dtype=float)

    for x in range(alignment.ncol):
        _, inverse, counts = np.unique(
            chars[:, x], return_inverse=True, return_counts=True
        )
        k = alignment.num_types(x)
        weights += 1.0 / (k * counts[inverse.reshape(-1)])
    weights /= alignment.ncol
    weights.setflags(write=False)

    if verbose:
        print("[DEBUG] Seq weights :")
        for name, w in zip(alignment.names, weights):
            print(f"[DEBUG] {name:>10}\tweight={w:.6f}")
    return weights


def weighted_column_probabilities(
    alignment: Alignment, weights: np.ndarray
) -> np.ndarray:
    """
    P[x, a] = sum of the weights of the sequences holding alphabet[a] in column x.
    Shape (ncol, len(alphabet)).
    """
    chars = alignment.char_matrix()
    proba = np.empty((alignment.ncol, len(alignment.alphabet)), dtype=float)
    for a, aa in enumerate(alignment.alphabet):
        proba[:, a] = weights @ (chars == aa)
    return proba


def entropy_lambda(alignment: Alignment) -> float:
    """1 / log(min(K, N)) with K the alphabet size and N the number of sequences."""
    m = min(len(alignment.alphabet), alignment.nseq)
    if m <= 1:
        raise DegenerateInputError(
            f"Entropy normalization undefined: min(alphabet size={len(alignment.alphabet)}, "
            f"nb seq={alignment.nseq}) = {m}"
        )
    return 1.0 / math.log(m)


def weighted_entropy(proba: np.ndarray, lam: float) -> np.ndarray:
    """Per-row -lam * sum p log(p), zero probabilities skipped.

    A row with a single non-zero probability is exactly 0: weights only sum
    to 1 within rounding, so that probability can be 1 - eps.
    """
    nonzero = proba > 0.0
    safe = np.where(nonzero, proba, 1.0)
    entropy = -lam * np.sum(np.where(nonzero, proba * np.log(safe), 0.0), axis=1)
    entropy[nonzero.sum(axis=1) <= 1] = 0.0
    return entropy
