# msautils/alignment.py
from __future__ import annotations

import math
from collections import Counter
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import numpy as np

from msautils.errors import AlphabetError, DegenerateInputError, FormatError
from msautils.io import MAX_SEQUENCES, read_fasta

GAP_SYMBOLS = ("-", " ")


def is_gap(symbol: str) -> bool:
    return symbol in GAP_SYMBOLS


class Alignment:
    """
    Multiple sequence alignment plus the per-column statistics every scorer needs:
    alphabet, gap counts, global frequencies, column types and normalized entropy.
    Built once and never mutated; `restrict_to_alphabet` returns a new Alignment.
    """

    def __init__(
        self,
        names: Sequence[str],
        sequences: Sequence[str],
        type_lists: Sequence[str] | None = None,
    ):
        if not sequences:
            raise FormatError("No sequences found in alignment")
        if len(sequences) > MAX_SEQUENCES:
            raise FormatError(
                f"Alignment holds {len(sequences)} sequences (max {MAX_SEQUENCES})"
            )
        if len(names) != len(sequences):
            raise FormatError(
                f"Got {len(names)} names for {len(sequences)} sequences"
            )

        self.names: Tuple[str, ...] = tuple(names)
        self.sequences: Tuple[str, ...] = tuple(s.upper() for s in sequences)
        self.nseq = len(self.sequences)
        self.ncol = len(self.sequences[0])
        if self.ncol == 0:
            raise FormatError("Alignment has no columns")
        for name, seq in zip(self.names, self.sequences):
            if len(seq) != self.ncol:
                raise FormatError(
                    f"Sequence {name} has length {len(seq)}, expected {self.ncol}"
                )

        self.alphabet: str = self._define_alphabet()
        self.gap_counts: Tuple[int, ...] = self._count_gaps()
        self.frequencies: Dict[str, float] = self._count_frequencies()
        if type_lists is None:
            type_lists = self._count_types()
        elif len(type_lists) != self.ncol:
            raise FormatError(
                f"Got {len(type_lists)} type lists for {self.ncol} columns"
            )
        self._type_lists: Tuple[str, ...] = tuple(type_lists)
        self._entropy = self._count_entropy()
        self._chars: np.ndarray | None = None

    # ---------- Construction ----------
    @classmethod
    def from_records(cls, records: Sequence[Tuple[str, str]]) -> "Alignment":
        return cls([sid for sid, _ in records], [seq for _, seq in records])

    @classmethod
    def from_fasta(cls, path: str | Path) -> "Alignment":
        records = read_fasta(path)
        if not records:
            raise FormatError(f"No sequences found in {path}")
        aln = cls.from_records(records)
        print(f"[Alignment] nb seq = {aln.nseq} -- nb col = {aln.ncol} ({path})")
        return aln

    # ---------- Analysis ----------
    def _define_alphabet(self) -> str:
        # column-major scan, first occurrence wins
        seen = dict.fromkeys(
            seq[col] for col in range(self.ncol) for seq in self.sequences
        )
        return "".join(seen)

    def _count_gaps(self) -> Tuple[int, ...]:
        return tuple(
            sum(1 for seq in self.sequences if is_gap(seq[col]))
            for col in range(self.ncol)
        )

    def _count_frequencies(self) -> Dict[str, float]:
        """
        Global frequency of each alphabet symbol.
        Denominator is every position (nseq * ncol), gaps included, so the
        frequencies over the whole alphabet sum to 1.
        """
        counts = Counter("".join(self.sequences))
        for symbol in counts:
            if symbol not in self.alphabet:
                raise AlphabetError(f"Symbol {symbol!r} is not in the alphabet")
        total = self.nseq * self.ncol
        return {aa: counts[aa] / total for aa in self.alphabet}

    def _count_types(self) -> List[str]:
        return ["".join(dict.fromkeys(self.column(col))) for col in range(self.ncol)]

    def _count_entropy(self) -> np.ndarray:
        """
        Normalized Shannon entropy of each column:
          entropy[col] = -1/log(K) * sum_a p_a log(p_a),  p_a = n_a / nseq
        with K the number of non-gap symbols in the alphabet.
        NaN marks columns whose entropy is undefined (K <= 1 and a mixed column).
        """
        n_residues = sum(1 for aa in self.alphabet if not is_gap(aa))
        norm = math.log(n_residues) if n_residues > 1 else 0.0

        entropy = np.zeros(self.ncol, dtype=float)
        for col in range(self.ncol):
            raw = 0.0
            for count in Counter(self.column(col)).values():
                p = count / self.nseq
                if p < 1.0:
                    raw -= p * math.log(p)
            if raw == 0.0:
                entropy[col] = 0.0
            elif norm > 0.0:
                entropy[col] = raw / norm
            else:
                entropy[col] = math.nan
        return entropy

    # ---------- Accessors ----------
    def gap_count(self, col: int) -> int:
        return self.gap_counts[col]

    def num_types(self, col: int) -> int:
        return len(self._type_lists[col])

    def type_list(self, col: int) -> str:
        return self._type_lists[col]

    def symbol_at(self, row: int, col: int) -> str:
        return self.sequences[row][col]

    def column(self, col: int) -> str:
        return "".join(seq[col] for seq in self.sequences)

    def frequency_of(self, symbol: str) -> float:
        try:
            return self.frequencies[symbol]
        except KeyError:
            raise AlphabetError(f"Symbol {symbol!r} is not in the alphabet") from None

    def entropy_at(self, col: int) -> float:
        value = float(self._entropy[col])
        if math.isnan(value):
            raise DegenerateInputError(
                f"Entropy of column {col} is undefined: alphabet {self.alphabet!r} "
                "has fewer than 2 non-gap symbols"
            )
        return value

    def char_matrix(self) -> np.ndarray:
        """(nseq, ncol) read-only array of single characters."""
        if self._chars is None:
            chars = np.array([list(seq) for seq in self.sequences], dtype="<U1")
            chars.setflags(write=False)
            self._chars = chars
        return self._chars

    # ---------- Alphabet handling ----------
    def is_subset_of(self, candidate: str) -> bool:
        return all(aa in candidate for aa in self.alphabet if not is_gap(aa))

    def restrict_to_alphabet(self, target: str) -> "Alignment":
        """
        Copy of this alignment whose column type lists only keep symbols of `target`.
        Gap symbols are not checked against `target` and stay in the type lists.
        """
        restricted = [
            "".join(aa for aa in types if is_gap(aa) or aa in target)
            for types in self._type_lists
        ]
        return Alignment(self.names, self.sequences, type_lists=restricted)

    # ---------- Diagnostics ----------
    def print_summary(self) -> None:
        print("\n[DEBUG] Alphabet :")
        print(";".join(self.alphabet))
        print("\n[DEBUG] Multiple Alignment :")
        for name, seq in zip(self.names, self.sequences):
            print(f"{name}\t{seq}")
        print("\n[DEBUG] AA Frequencies :")
        print(";".join(f"{aa}={f:.4f}" for aa, f in self.frequencies.items()))
        print("\n[DEBUG] Gap counts :")
        print(";".join(str(g) for g in self.gap_counts))
        print("\n[DEBUG] AA Entropy (gappy columns shown as 'gap') :")
        cells = []
        for col in range(self.ncol):
            if self.gap_counts[col] >= self.nseq / 10:
                cells.append("gap")
            elif math.isnan(self._entropy[col]):
                cells.append("n/a")
            else:
                cells.append(f"{self._entropy[col]:.4f}")
        print(";".join(cells))
        print("\n[DEBUG] AA Types :")
        print(";".join(str(self.num_types(col)) for col in range(self.ncol)))

    def __repr__(self) -> str:
        return f"Alignment(nseq={self.nseq}, ncol={self.ncol}, alphabet={self.alphabet!r})"


def load_alignment(path: str | Path) -> Alignment:
    return Alignment.from_fasta(path)
