# scorers/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from msautils.alignment import Alignment, load_alignment
from msautils.io import write_scores
from msautils.weights import henikoff_weights


@dataclass(frozen=True)
class ScoringOptions:
    verbose: bool = False
    output_path: str = "data/cache/conservation_scores.txt"
    matrix_dir: str | None = None  # None -> matrix bundled with Biopython
    matrix_name: str = "BLOSUM62"
    factor_a: float = 1.0  # trident exponents (Valdar 2002)
    factor_b: float = 0.5
    factor_c: float = 3.0
    js_lambda: float = 0.5


class ConservationScorer(ABC):
    """One scoring strategy: alignment in, one score per column out."""

    name: str = ""
    formula: str = ""

    def __init__(self, options: ScoringOptions | None = None):
        self.options = options if options is not None else ScoringOptions()

    def sequence_weights(self, alignment: Alignment) -> np.ndarray:
        return henikoff_weights(alignment, verbose=self.options.verbose)

    @staticmethod
    def gap_frequencies(alignment: Alignment) -> np.ndarray:
        return np.asarray(alignment.gap_counts, dtype=float) / alignment.nseq

    @abstractmethod
    def compute_scores(self, alignment: Alignment) -> np.ndarray:
        """Return an array of alignment.ncol scores, in column order."""

    def describe(self) -> None:
        print(f"\n[{self.name}] {self.formula}\n")

    def run(self, msa_path: str | Path) -> np.ndarray:
        """Load the alignment, score it and write the score file."""
        return self.run_alignment(load_alignment(msa_path))

    def run_alignment(self, alignment: Alignment) -> np.ndarray:
        if self.options.verbose:
            alignment.print_summary()
        scores = self.compute_scores(alignment)
        self.describe()
        out = write_scores(scores, self.options.output_path)
        print(f"[{self.name}] {len(scores)} column scores written to {out}")
        return scores
