# src/threshold_logic/isop.py

"""
Cubes and irredundant sum-of-products (ISOP) covers.

A :class:`Cube` is a product term stored as two integers: ``mask`` marks the
variables that appear in the term, ``bits`` gives the required value of each
variable that appears.

:func:`isop` computes an irredundant cover with the Minato–Morreale
recursion. It works on the (lower, upper) interval formulation: any function
``g`` with ``lower ≤ g ≤ upper`` is acceptable, and for a completely specified
function both bounds are the function itself.

Examples
--------
>>> from threshold_logic.truth_table import TruthTable
>>> from threshold_logic.isop import isop
>>> maj = TruthTable.from_hex("e8", 3)
>>> sorted(c.to_string(3) for c in isop(maj))
['-11', '1-1', '11-']
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .truth_table import TruthTable

__all__ = ["Cube", "isop", "cover_to_truth_table"]


@dataclass(frozen=True)
class Cube:
    bits: int = 0
    mask: int = 0

    def get_mask(self, var: int) -> bool:
        """True iff ``x_var`` appears in the term."""
        return bool((self.mask >> var) & 1)

    def get_bit(self, var: int) -> bool:
        """Required value of ``x_var``; only meaningful where :meth:`get_mask` holds."""
        return bool((self.bits >> var) & 1)

    def num_literals(self) -> int:
        return bin(self.mask).count("1")

    def add_literal(self, var: int, polarity: bool) -> "Cube":
        bit = 1 << var
        return Cube(bits=(self.bits | bit) if polarity else (self.bits & ~bit), mask=self.mask | bit)

    def evaluate(self, assignment: Sequence[int]) -> bool:
        for var, value in enumerate(assignment):
            if self.get_mask(var) and bool(value) != self.get_bit(var):
                return False
        return True

    def to_string(self, num_vars: int) -> str:
        """``'1'``/``'0'`` for a literal, ``'-'`` when absent; variable 0 first."""
        out = []
        for var in range(num_vars):
            if not self.get_mask(var):
                out.append("-")
            else:
                out.append("1" if self.get_bit(var) else "0")
        return "".join(out)

    @classmethod
    def from_string(cls, text: str) -> "Cube":
        cube = cls()
        for var, ch in enumerate(text):
            if ch == "1":
                cube = cube.add_literal(var, True)
            elif ch == "0":
                cube = cube.add_literal(var, False)
            elif ch != "-":
                raise ValueError(f"invalid cube character {ch!r} in {text!r}")
        return cube


# ---------------------------------------------------------------------
# Minato–Morreale recursion
# ---------------------------------------------------------------------

def _isop_rec(lower: TruthTable, upper: TruthTable, num_vars: int) -> Tuple[List[Cube], TruthTable]:
    """
    Cover ``lower`` using only minterms of ``upper``.

    Only variables below ``num_vars`` are considered for splitting. Returns
    the cubes and the function they cover.
    """
    if lower.is_const0():
        return [], lower
    if upper.is_const1():
        return [Cube()], upper

    var = num_vars - 1
    while var >= 0 and not (lower.has_var(var) or upper.has_var(var)):
        var -= 1
    if var < 0:
        # lower ≤ upper with lower ≠ 0 and upper ≠ 1 forces a support variable
        raise RuntimeError("isop: empty support with non-constant interval")

    l0, l1 = lower.cofactor0(var), lower.cofactor1(var)
    u0, u1 = upper.cofactor0(var), upper.cofactor1(var)

    cubes0, res0 = _isop_rec(l0 & ~u1, u0, var)
    cubes1, res1 = _isop_rec(l1 & ~u0, u1, var)
    lnew = (l0 & ~res0) | (l1 & ~res1)
    cubes2, res2 = _isop_rec(lnew, u0 & u1, var)

    x = TruthTable.nth_var(lower.num_vars, var)
    cover = (res0 & ~x) | (res1 & x) | res2

    cubes = [c.add_literal(var, False) for c in cubes0]
    cubes += [c.add_literal(var, True) for c in cubes1]
    cubes += cubes2
    return cubes, cover


def isop(tt: TruthTable) -> List[Cube]:
    """
    Irredundant sum-of-products cover of ``tt``.

    Parameters
    ----------
    tt : TruthTable
        Completely specified function.

    Returns
    -------
    list[Cube]
        Cubes whose union is exactly ``tt``. Constant 0 gives ``[]``;
        constant 1 gives ``[Cube()]``.
    """
    cubes, _ = _isop_rec(tt, tt, tt.num_vars)
    return cubes


def cover_to_truth_table(cubes: Sequence[Cube], num_vars: int) -> TruthTable:
    """Function computed by the disjunction of ``cubes``."""
    acc = TruthTable.zeros(num_vars)
    for cube in cubes:
        term = TruthTable.ones(num_vars)
        for var in range(num_vars):
            if cube.get_mask(var):
                x = TruthTable.nth_var(num_vars, var)
                term = term & (x if cube.get_bit(var) else ~x)
        acc = acc | term
    return acc
