# src/threshold_logic/constraints.py

"""
Cube-to-constraint translation for the threshold ILP.

Column layout for ``n`` variables (``n + 1`` columns in total):

- columns ``0 .. n-1`` : weights ``w_0 .. w_{n-1}``
- column  ``n``        : threshold ``T``

On a positive-unate function every ON cube gives

    Σ_{i required true} w_i − T ≥ 0

and every OFF cube (a cube of the complement) gives

    Σ_{i absent or required true} w_i − T ≤ −1

so the constraint count equals the cube count rather than ``2**n``.
Variables the function does not depend on get an extra pin ``w_i == 0``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .isop import Cube, isop
from .truth_table import TruthTable
from .unateness import PolarityRecord

__all__ = [
    "LinearConstraint",
    "ConstraintSystem",
    "on_cube_constraint",
    "off_cube_constraint",
    "pin_constraint",
    "build_constraint_system",
]

SENSES = (">=", "<=", "==")


@dataclass(frozen=True)
class LinearConstraint:
    """``Σ coef * column  (sense)  rhs`` over integer columns."""
    terms: Tuple[Tuple[int, int], ...]
    sense: str
    rhs: int
    origin: str = "on"

    def __post_init__(self):
        if self.sense not in SENSES:
            raise ValueError(f"sense must be one of {SENSES}, got {self.sense!r}")

    def lhs_value(self, values: Sequence[float]) -> float:
        return sum(coef * values[col] for col, coef in self.terms)

    def is_satisfied(self, values: Sequence[float]) -> bool:
        lhs = self.lhs_value(values)
        if self.sense == ">=":
            return lhs >= self.rhs
        if self.sense == "<=":
            return lhs <= self.rhs
        return lhs == self.rhs


@dataclass(frozen=True)
class ConstraintSystem:
    num_vars: int
    constraints: Tuple[LinearConstraint, ...]
    objective: Tuple[int, ...]
    pinned: Tuple[int, ...] = ()

    @property
    def num_columns(self) -> int:
        return self.num_vars + 1

    @property
    def threshold_column(self) -> int:
        return self.num_vars

    def by_origin(self, origin: str) -> Tuple[LinearConstraint, ...]:
        return tuple(c for c in self.constraints if c.origin == origin)

    def is_satisfied_by(self, values: Sequence[float]) -> bool:
        if len(values) != self.num_columns:
            raise ValueError(f"expected {self.num_columns} values, got {len(values)}")
        return all(c.is_satisfied(values) for c in self.constraints)


def on_cube_constraint(cube: Cube, num_vars: int) -> LinearConstraint:
    terms = [(i, 1) for i in range(num_vars) if cube.get_mask(i) and cube.get_bit(i)]
    terms.append((num_vars, -1))
    return LinearConstraint(tuple(terms), ">=", 0, origin="on")


def off_cube_constraint(cube: Cube, num_vars: int) -> LinearConstraint:
    terms = [(i, 1) for i in range(num_vars) if not cube.get_mask(i) or cube.get_bit(i)]
    terms.append((num_vars, -1))
    return LinearConstraint(tuple(terms), "<=", -1, origin="off")


def pin_constraint(var: int, num_vars: int) -> LinearConstraint:
    if not 0 <= var < num_vars:
        raise ValueError(f"variable index {var} out of range for {num_vars} variables")
    return LinearConstraint(((var, 1),), "==", 0, origin="pin")


def build_constraint_system(
    tt: TruthTable,
    polarities: Optional[PolarityRecord] = None,
    *,
    cover: Callable[[TruthTable], List[Cube]] = isop,
    pin_dont_care: bool = True,
) -> ConstraintSystem:
    """
    Translate a positive-unate function into its ILP constraint system.

    Parameters
    ----------
    tt : TruthTable
        Function that is monotone increasing in every variable.
    polarities : PolarityRecord, optional
        Used to find don't-care variables. Without it, variables are tested
        for dependence directly on ``tt``.
    cover : callable
        Cover generator, ``cover(table) -> list[Cube]``.
    pin_dont_care : bool, default=True
        Add ``w_i == 0`` for every don't-care variable and leave it out of
        the objective.

    Returns
    -------
    ConstraintSystem
        ON-cube constraints, then OFF-cube constraints, then pins. The
        objective minimizes the sum of all non-pinned columns.
    """
    n = tt.num_vars
    if polarities is not None and polarities.num_vars != n:
        raise ValueError(f"polarity record covers {polarities.num_vars} variables, table has {n}")

    rows = [on_cube_constraint(c, n) for c in cover(tt)]
    rows += [off_cube_constraint(c, n) for c in cover(~tt)]

    pinned: Tuple[int, ...] = ()
    if pin_dont_care:
        if polarities is not None:
            pinned = polarities.dont_care_vars()
        else:
            pinned = tuple(i for i in range(n) if not tt.has_var(i))
        rows += [pin_constraint(i, n) for i in pinned]

    objective = tuple(0 if i in pinned else 1 for i in range(n + 1))
    return ConstraintSystem(num_vars=n, constraints=tuple(rows), objective=objective, pinned=pinned)
