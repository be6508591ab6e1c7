# src/threshold_logic/verify.py

"""
Exhaustive checks of a linear form against its truth table.

A linear form ``(w, T)`` is sound for ``f`` when, for every assignment ``x``,
``f(x) = 1`` iff ``Σ w_i x_i ≥ T``. With at most :data:`MAX_VARS` variables the
check over all ``2**n`` assignments is a single vectorized numpy expression.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np
import pandas as pd

from .truth_table import TruthTable

if TYPE_CHECKING:  # pragma: no cover
    from .identification import LinearForm

__all__ = ["assignment_matrix", "weighted_sums", "check_linear_form", "truth_table_frame", "mismatches"]


def assignment_matrix(num_vars: int) -> np.ndarray:
    """``(2**n, n)`` 0/1 matrix; row ``k`` is minterm ``k``."""
    k = np.arange(1 << num_vars, dtype=np.int64)
    return ((k[:, None] >> np.arange(num_vars, dtype=np.int64)) & 1).astype(np.int64)


def weighted_sums(lf: "LinearForm") -> np.ndarray:
    X = assignment_matrix(lf.num_vars)
    return X @ np.asarray(lf.weights, dtype=np.int64)


def _check_arity(tt: TruthTable, lf: "LinearForm") -> None:
    if lf.num_vars != tt.num_vars:
        raise ValueError(f"linear form has {lf.num_vars} weights, table has {tt.num_vars} variables")


def check_linear_form(tt: TruthTable, lf: "LinearForm") -> bool:
    _check_arity(tt, lf)
    predicted = weighted_sums(lf) >= lf.threshold
    return bool(np.array_equal(predicted, tt.bits))


def truth_table_frame(tt: TruthTable, lf: Optional["LinearForm"] = None) -> pd.DataFrame:
    """
    One row per minterm.

    Columns ``x0 .. x{n-1}`` and ``f``; with a linear form also
    ``weighted_sum``, ``predicted`` and ``agrees``.
    """
    X = assignment_matrix(tt.num_vars)
    df = pd.DataFrame(X, columns=[f"x{i}" for i in range(tt.num_vars)])
    df["f"] = tt.bits.astype(int)
    if lf is not None:
        _check_arity(tt, lf)
        s = weighted_sums(lf)
        df["weighted_sum"] = s
        df["predicted"] = (s >= lf.threshold).astype(int)
        df["agrees"] = df["predicted"] == df["f"]
    df.index.name = "minterm"
    return df


def mismatches(tt: TruthTable, lf: "LinearForm") -> pd.DataFrame:
    df = truth_table_frame(tt, lf)
    return df.loc[~df["agrees"]]
