# matrices/substitution.py
from __future__ import annotations

from pathlib import Path
from typing import Dict

import numpy as np
from Bio.Align import substitution_matrices

from msautils.errors import DegenerateInputError, FormatError, InputError

DEFAULT_MATRIX_NAME = "BLOSUM62"
DEFAULT_MATRIX_FILE = "blosum62.mat"

_MATRIX_CACHE: Dict[str, "SubstitutionMatrix"] = {}


class SubstitutionMatrix:
    """
    Symbol x symbol similarity matrix, min-max normalized to [0, 1]:
      m'(a, b) = (m(a, b) - min(m)) / (max(m) - min(m))
    `min` and `max` are the bounds of the normalized entries.
    """

    def __init__(self, alphabet: str, scores: np.ndarray, source: str = ""):
        scores = np.asarray(scores, dtype=float)
        if scores.ndim != 2 or scores.shape[0] != scores.shape[1]:
            raise FormatError(f"Substitution matrix {source} is not square")
        if len(alphabet) != scores.shape[0]:
            raise FormatError(
                f"Substitution matrix {source}: {len(alphabet)} symbols for "
                f"{scores.shape[0]} rows"
            )
        if len(alphabet) < 2:
            raise DegenerateInputError(
                f"Substitution matrix {source} needs at least 2 symbols"
            )
        lo, hi = float(scores.min()), float(scores.max())
        if hi == lo:
            raise DegenerateInputError(
                f"Substitution matrix {source} has constant scores ({lo})"
            )

        self.alphabet = alphabet
        self.source = source
        self.raw_min = lo
        self.raw_max = hi
        self._index = {aa: i for i, aa in enumerate(alphabet)}
        self._norm = (scores - lo) / (hi - lo)
        self._norm.setflags(write=False)
        self.min = float(self._norm.min())
        self.max = float(self._norm.max())

    @property
    def size(self) -> int:
        return len(self.alphabet)

    def norm_score(self, a: str, b: str) -> float:
        return float(self._norm[self._index[a], self._index[b]])

    def score_vector(self, symbol: str) -> np.ndarray:
        """Normalized scores of `symbol` against every matrix symbol."""
        return self._norm[:, self._index[symbol]]

    @classmethod
    def from_biopython(cls, matrix, source: str = "") -> "SubstitutionMatrix":
        if len(matrix.shape) != 2:
            raise FormatError(f"Substitution matrix {source} is not two-dimensional")
        alphabet = "".join(matrix.alphabet)
        return cls(alphabet, np.array(matrix, dtype=float), source=source)

    def __repr__(self) -> str:
        return f"SubstitutionMatrix({self.source!r}, alphabet={self.alphabet!r})"


def load_substitution_matrix(
    directory: str | Path | None = None,
    name: str = DEFAULT_MATRIX_NAME,
    filename: str = DEFAULT_MATRIX_FILE,
) -> SubstitutionMatrix:
    """
    Load a substitution matrix.
    With `directory`, reads `directory/filename` (NCBI text format);
    otherwise loads the matrix `name` bundled with Biopython.
    """
    if directory is not None:
        path = Path(directory) / filename
        key = str(path.resolve())
    else:
        path = None
        key = f"builtin:{name.upper()}"

    cached = _MATRIX_CACHE.get(key)
    if cached is not None:
        return cached

    if path is not None:
        if not path.is_file():
            raise InputError(f"Cannot open substitution matrix {path}")
        try:
            bio_matrix = substitution_matrices.read(str(path))
        except OSError as exc:
            raise InputError(f"Cannot open substitution matrix {path}: {exc}") from exc
        except (ValueError, IndexError, KeyError) as exc:
            raise FormatError(f"Cannot parse substitution matrix {path}: {exc}") from exc
        matrix = SubstitutionMatrix.from_biopython(bio_matrix, source=str(path))
    else:
        try:
            bio_matrix = substitution_matrices.load(name.upper())
        except (OSError, ValueError) as exc:
            raise InputError(f"Unknown substitution matrix {name}: {exc}") from exc
        matrix = SubstitutionMatrix.from_biopython(bio_matrix, source=name.upper())

    _MATRIX_CACHE[key] = matrix
    return matrix
