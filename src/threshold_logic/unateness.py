# src/threshold_logic/unateness.py

"""
Unateness analysis and polarity normalization.

For each variable ``x_i`` the function is compared with its cofactors
``f0 = f|x_i=0`` and ``f1 = f|x_i=1`` and their smoothing ``f0 | f1``:

- ``f0 == f1``            → independent (don't-care)
- ``f0 == f0 | f1``       → negative unate
- ``f1 != f0 | f1``       → binate
- otherwise               → positive unate

A threshold function is unate in every variable, so the first binate variable
settles the question without any optimization. Negative-unate variables are
flipped in a working copy so the remaining stages only see a function that is
monotone increasing in every variable.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Tuple

from .truth_table import TruthTable

__all__ = [
    "Unateness",
    "Polarity",
    "PolarityRecord",
    "NormalizationResult",
    "classify_variable",
    "unateness_profile",
    "normalize_polarity",
]


class Unateness(Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    INDEPENDENT = "independent"
    BINATE = "binate"


class Polarity(Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    DONT_CARE = "dont_care"


_POLARITY_OF = {
    Unateness.POSITIVE: Polarity.POSITIVE,
    Unateness.NEGATIVE: Polarity.NEGATIVE,
    Unateness.INDEPENDENT: Polarity.DONT_CARE,
}


@dataclass(frozen=True)
class PolarityRecord:
    """Polarity of every variable, in variable order."""
    polarities: Tuple[Polarity, ...]

    @property
    def num_vars(self) -> int:
        return len(self.polarities)

    def __getitem__(self, var: int) -> Polarity:
        return self.polarities[var]

    def __len__(self) -> int:
        return len(self.polarities)

    def as_dict(self) -> Mapping[int, Polarity]:
        return dict(enumerate(self.polarities))

    def negative_vars(self) -> Tuple[int, ...]:
        return tuple(i for i, p in enumerate(self.polarities) if p is Polarity.NEGATIVE)

    def dont_care_vars(self) -> Tuple[int, ...]:
        return tuple(i for i, p in enumerate(self.polarities) if p is Polarity.DONT_CARE)


@dataclass(frozen=True)
class NormalizationResult:
    """
    Output of :func:`normalize_polarity`.

    Exactly one of ``polarities`` / ``binate_var`` is set. When the function is
    binate, ``table`` is the partially flipped working copy at the point the
    scan stopped and must not be used further.
    """
    table: TruthTable
    polarities: Optional[PolarityRecord]
    binate_var: Optional[int] = None

    @property
    def is_unate(self) -> bool:
        return self.binate_var is None


def classify_variable(tt: TruthTable, var: int) -> Unateness:
    f0 = tt.cofactor0(var)
    f1 = tt.cofactor1(var)
    if f0 == f1:
        return Unateness.INDEPENDENT
    smoothing = f0 | f1
    if f0 == smoothing:
        return Unateness.NEGATIVE
    if f1 != smoothing:
        return Unateness.BINATE
    return Unateness.POSITIVE


def unateness_profile(tt: TruthTable) -> Tuple[Unateness, ...]:
    """Classification of every variable (no short-circuit)."""
    return tuple(classify_variable(tt, i) for i in range(tt.num_vars))


def normalize_polarity(tt: TruthTable) -> NormalizationResult:
    """
    Make ``tt`` positive unate by flipping its negative-unate variables.

    Parameters
    ----------
    tt : TruthTable
        Input function; never modified.

    Returns
    -------
    NormalizationResult
        The positive-unate working table with its :class:`PolarityRecord`, or
        the index of the first binate variable found.

    Examples
    --------
    >>> from threshold_logic.truth_table import TruthTable
    >>> f = TruthTable.from_function(2, lambda x: (not x[0]) and x[1])
    >>> res = normalize_polarity(f)
    >>> res.polarities.negative_vars()
    (0,)
    >>> res.table == TruthTable.from_hex("8", 2)
    True
    """
    work = tt.copy()
    found = []
    for var in range(work.num_vars):
        kind = classify_variable(work, var)
        if kind is Unateness.BINATE:
            return NormalizationResult(table=work, polarities=None, binate_var=var)
        if kind is Unateness.NEGATIVE:
            work.flip_inplace(var)
        found.append(_POLARITY_OF[kind])
    frozen = TruthTable(work.num_vars, work.bits)
    return NormalizationResult(table=frozen, polarities=PolarityRecord(tuple(found)))
