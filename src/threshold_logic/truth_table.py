# src/threshold_logic/truth_table.py

"""
Completely specified Boolean functions as bit-vector truth tables.

A :class:`TruthTable` over ``n`` variables stores ``2**n`` bits in a read-only
numpy boolean array. Bit ``k`` is the value of the function at the minterm whose
variable ``i`` equals bit ``i`` of ``k`` (variable 0 is the least significant
position).

Hex strings follow the usual truth-table convention: most significant digit
first, so bit 0 (the all-zero assignment) is the lowest bit of the last digit.

Examples
--------
>>> from threshold_logic.truth_table import TruthTable
>>> a = TruthTable.nth_var(2, 0)
>>> b = TruthTable.nth_var(2, 1)
>>> (a & b).to_hex()
'8'
>>> (a | b).to_hex()
'e'
>>> TruthTable.from_hex("e8", 3).count_ones()
4
"""

from __future__ import annotations

from typing import Callable, Iterable, Sequence, Tuple

import numpy as np

__all__ = ["TruthTable", "MAX_VARS"]

MAX_VARS = 16


def _check_arity(num_vars: int) -> int:
    num_vars = int(num_vars)
    if num_vars < 0:
        raise ValueError("num_vars must be ≥ 0")
    if num_vars > MAX_VARS:
        raise ValueError(f"num_vars must be ≤ {MAX_VARS} (got {num_vars})")
    return num_vars


def _minterm_index(num_vars: int) -> np.ndarray:
    return np.arange(1 << num_vars, dtype=np.int64)


class TruthTable:
    """
    Immutable truth table of a completely specified Boolean function.

    Binary operators (``&``, ``|``, ``^``) and equality require equal arity.
    The only mutating operation is :meth:`flip_inplace`, which is allowed on
    a working copy returned by :meth:`copy` and nowhere else.
    """

    __slots__ = ("_num_vars", "_bits")

    def __init__(self, num_vars: int, bits: Iterable[bool] | np.ndarray, *, _writable: bool = False) -> None:
        num_vars = _check_arity(num_vars)
        arr = np.array(bits, dtype=bool).reshape(-1)
        if arr.size != (1 << num_vars):
            raise ValueError(
                f"expected {1 << num_vars} bits for {num_vars} variables, got {arr.size}"
            )
        arr.setflags(write=_writable)
        self._num_vars = num_vars
        self._bits = arr

    # -----------------------------------------------------------------
    # Constructors
    # -----------------------------------------------------------------
    @classmethod
    def zeros(cls, num_vars: int) -> "TruthTable":
        return cls(num_vars, np.zeros(1 << _check_arity(num_vars), dtype=bool))

    @classmethod
    def ones(cls, num_vars: int) -> "TruthTable":
        return cls(num_vars, np.ones(1 << _check_arity(num_vars), dtype=bool))

    @classmethod
    def nth_var(cls, num_vars: int, var: int) -> "TruthTable":
        """Projection function ``f(x) = x_var``."""
        num_vars = _check_arity(num_vars)
        if not 0 <= var < num_vars:
            raise ValueError(f"variable index {var} out of range for {num_vars} variables")
        return cls(num_vars, (_minterm_index(num_vars) >> var) & 1)

    @classmethod
    def from_hex(cls, text: str, num_vars: int) -> "TruthTable":
        """
        Parse a hex string (most significant digit first).

        For ``num_vars < 2`` a single digit is expected and only its low
        ``2**num_vars`` bits are used.
        """
        num_vars = _check_arity(num_vars)
        digits = text.strip().lower()
        if digits.startswith("0x"):
            digits = digits[2:]
        expected = max(1, (1 << num_vars) // 4)
        if len(digits) != expected:
            raise ValueError(
                f"hex string for {num_vars} variables needs {expected} digit(s), got {len(digits)}"
            )
        try:
            value = int(digits, 16)
        except ValueError as e:
            raise ValueError(f"invalid hex truth table {text!r}") from e
        if value >> (1 << num_vars):
            raise ValueError(f"hex truth table {text!r} has bits beyond {1 << num_vars} positions")
        return cls._from_int(value, num_vars)

    @classmethod
    def from_binary(cls, text: str, num_vars: int) -> "TruthTable":
        """Parse a binary string, most significant bit (last minterm) first."""
        num_vars = _check_arity(num_vars)
        digits = text.strip()
        if len(digits) != (1 << num_vars) or set(digits) - {"0", "1"}:
            raise ValueError(f"binary truth table {text!r} must have {1 << num_vars} digits of 0/1")
        return cls(num_vars, [c == "1" for c in reversed(digits)])

    @classmethod
    def from_function(cls, num_vars: int, fn: Callable[[Tuple[int, ...]], object]) -> "TruthTable":
        """Tabulate ``fn`` over every assignment ``(x_0, ..., x_{n-1})``."""
        num_vars = _check_arity(num_vars)
        bits = [
            bool(fn(tuple((k >> i) & 1 for i in range(num_vars))))
            for k in range(1 << num_vars)
        ]
        return cls(num_vars, bits)

    @classmethod
    def from_minterms(cls, num_vars: int, minterms: Iterable[int]) -> "TruthTable":
        num_vars = _check_arity(num_vars)
        arr = np.zeros(1 << num_vars, dtype=bool)
        for m in minterms:
            if not 0 <= m < arr.size:
                raise ValueError(f"minterm {m} out of range for {num_vars} variables")
            arr[m] = True
        return cls(num_vars, arr)

    @classmethod
    def _from_int(cls, value: int, num_vars: int) -> "TruthTable":
        return cls(num_vars, [(value >> k) & 1 for k in range(1 << num_vars)])

    # -----------------------------------------------------------------
    # Basic queries
    # -----------------------------------------------------------------
    @property
    def num_vars(self) -> int:
        return self._num_vars

    @property
    def num_bits(self) -> int:
        return self._bits.size

    @property
    def bits(self) -> np.ndarray:
        view = self._bits.view()
        view.setflags(write=False)
        return view

    def to_int(self) -> int:
        return sum(1 << k for k in np.flatnonzero(self._bits).tolist())

    def to_hex(self) -> str:
        width = max(1, self.num_bits // 4)
        return format(self.to_int(), f"0{width}x")

    def to_binary(self) -> str:
        return "".join("1" if b else "0" for b in self._bits[::-1])

    def count_ones(self) -> int:
        return int(self._bits.sum())

    def is_const0(self) -> bool:
        return not self._bits.any()

    def is_const1(self) -> bool:
        return bool(self._bits.all())

    def evaluate(self, assignment: Sequence[int]) -> bool:
        """Value at ``assignment = (x_0, ..., x_{n-1})``."""
        if len(assignment) != self._num_vars:
            raise ValueError(f"assignment needs {self._num_vars} values, got {len(assignment)}")
        k = sum((1 << i) for i, v in enumerate(assignment) if v)
        return bool(self._bits[k])

    # -----------------------------------------------------------------
    # Cofactors and variable operations (arity is preserved)
    # -----------------------------------------------------------------
    def _check_var(self, var: int) -> None:
        if not 0 <= var < self._num_vars:
            raise ValueError(f"variable index {var} out of range for {self._num_vars} variables")

    def cofactor0(self, var: int) -> "TruthTable":
        """Function with ``x_var`` fixed to 0, still over ``n`` variables."""
        self._check_var(var)
        idx = _minterm_index(self._num_vars) & ~(1 << var)
        return TruthTable(self._num_vars, self._bits[idx])

    def cofactor1(self, var: int) -> "TruthTable":
        """Function with ``x_var`` fixed to 1, still over ``n`` variables."""
        self._check_var(var)
        idx = _minterm_index(self._num_vars) | (1 << var)
        return TruthTable(self._num_vars, self._bits[idx])

    def has_var(self, var: int) -> bool:
        """True iff the function depends on ``x_var``."""
        return self.cofactor0(var) != self.cofactor1(var)

    def flip(self, var: int) -> "TruthTable":
        """Function with ``x_var`` complemented: ``g(x) = f(x with x_var negated)``."""
        self._check_var(var)
        idx = _minterm_index(self._num_vars) ^ (1 << var)
        return TruthTable(self._num_vars, self._bits[idx])

    def copy(self) -> "TruthTable":
        """Writable working copy; only copies may be flipped in place."""
        return TruthTable(self._num_vars, self._bits.copy(), _writable=True)

    def flip_inplace(self, var: int) -> None:
        self._check_var(var)
        if not self._bits.flags.writeable:
            raise ValueError("flip_inplace requires a working copy (see TruthTable.copy)")
        idx = _minterm_index(self._num_vars) ^ (1 << var)
        self._bits[:] = self._bits[idx]

    # -----------------------------------------------------------------
    # Bitwise operators
    # -----------------------------------------------------------------
    def _binary(self, other: "TruthTable", op) -> "TruthTable":
        if not isinstance(other, TruthTable):
            return NotImplemented
        if other._num_vars != self._num_vars:
            raise ValueError(
                f"arity mismatch: {self._num_vars} vs {other._num_vars} variables"
            )
        return TruthTable(self._num_vars, op(self._bits, other._bits))

    def __and__(self, other: "TruthTable") -> "TruthTable":
        return self._binary(other, np.logical_and)

    def __or__(self, other: "TruthTable") -> "TruthTable":
        return self._binary(other, np.logical_or)

    def __xor__(self, other: "TruthTable") -> "TruthTable":
        return self._binary(other, np.logical_xor)

    def __invert__(self) -> "TruthTable":
        return TruthTable(self._num_vars, ~self._bits)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TruthTable):
            return NotImplemented
        return self._num_vars == other._num_vars and bool(np.array_equal(self._bits, other._bits))

    def __ne__(self, other: object) -> bool:
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    def __hash__(self) -> int:
        return hash((self._num_vars, self._bits.tobytes()))

    def __repr__(self) -> str:
        return f"TruthTable(num_vars={self._num_vars}, hex={self.to_hex()!r})"
