# src/threshold_logic/identification.py

"""
Threshold logic function identification.

Given a truth table, decide whether it is a threshold function (TF)

    f(x_1, ..., x_n) = 1  iff  Σ w_i x_i ≥ T

and, if it is, return one linear form ``[w_1, ..., w_n, T]``.

Pipeline
--------
1. :func:`~threshold_logic.unateness.normalize_polarity` flips negative-unate
   variables; a binate variable ends the call as NOT_THRESHOLD before any
   solver is created.
2. :func:`~threshold_logic.constraints.build_constraint_system` turns the ON
   and OFF ISOP covers into one inequality per cube.
3. An :class:`~threshold_logic.solver.ILPBackend` minimizes the sum of the
   weights and threshold; infeasible means NOT_THRESHOLD.
4. :func:`back_map` restores the original polarities.

Examples
--------
>>> from threshold_logic.truth_table import TruthTable
>>> from threshold_logic.identification import identify_threshold
>>> res = identify_threshold(TruthTable.from_hex("8", 2))   # x0 AND x1
>>> res.linear_form.as_list()
[1, 1, 2]
>>> identify_threshold(TruthTable.from_hex("6", 2)).outcome.name   # XOR
'NOT_THRESHOLD'
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from .config import IdentificationConfig
from .constraints import build_constraint_system
from .solver import ILPBackend, SolveStatus, SolverInfrastructureError, make_backend
from .truth_table import TruthTable
from .unateness import PolarityRecord, normalize_polarity
from .utils.log import log_event
from .verify import check_linear_form

__all__ = [
    "LinearForm",
    "LinearFormMismatch",
    "Outcome",
    "ThresholdResult",
    "back_map",
    "identify_threshold",
    "is_threshold",
    "find_linear_form",
]


class LinearFormMismatch(ValueError):
    """A solved linear form disagrees with the truth table it was built from."""


@dataclass(frozen=True)
class LinearForm:
    weights: Tuple[int, ...]
    threshold: int

    @property
    def num_vars(self) -> int:
        return len(self.weights)

    def as_list(self) -> list:
        """``[w_1, ..., w_n, T]``."""
        return [*self.weights, self.threshold]

    @classmethod
    def from_list(cls, values: Sequence[int]) -> "LinearForm":
        if len(values) < 1:
            raise ValueError("a linear form needs at least the threshold value")
        return cls(tuple(int(v) for v in values[:-1]), int(values[-1]))

    def evaluate(self, assignment: Sequence[int]) -> bool:
        if len(assignment) != self.num_vars:
            raise ValueError(f"assignment needs {self.num_vars} values, got {len(assignment)}")
        return sum(w for w, x in zip(self.weights, assignment) if x) >= self.threshold

    def to_truth_table(self) -> TruthTable:
        return TruthTable.from_function(self.num_vars, self.evaluate)

    def __str__(self) -> str:
        terms = []
        for i, w in enumerate(self.weights):
            if w == 0:
                continue
            mag = "" if abs(w) == 1 else f"{abs(w)}*"
            if not terms:
                terms.append(f"{'-' if w < 0 else ''}{mag}x{i}")
            else:
                terms.append(f"{'-' if w < 0 else '+'} {mag}x{i}")
        lhs = " ".join(terms) if terms else "0"
        return f"{lhs} >= {self.threshold}"


class Outcome(Enum):
    THRESHOLD = "threshold"
    NOT_THRESHOLD = "not_threshold"
    SOLVER_FAILURE = "solver_failure"


@dataclass(frozen=True)
class ThresholdResult:
    """
    Tagged result of one identification call.

    ``linear_form`` is set iff ``outcome`` is THRESHOLD. ``binate_var`` is set
    when the short-circuit fired; ``solver_invoked`` tells whether a backend
    was asked to solve anything.
    """
    outcome: Outcome
    linear_form: Optional[LinearForm] = None
    reason: str = ""
    binate_var: Optional[int] = None
    solver_invoked: bool = False
    polarities: Optional[PolarityRecord] = None

    @property
    def is_threshold(self) -> bool:
        return self.outcome is Outcome.THRESHOLD

    def __bool__(self) -> bool:
        return self.is_threshold


def back_map(values: Sequence[int], polarities: PolarityRecord) -> LinearForm:
    """
    Undo the polarity flips on a solved ``[w_0, ..., w_{n-1}, T]``.

    For a negative-unate ``x_i``: ``w_i ← -w_i`` and then ``T ← T + w_i``
    with the negated weight. Don't-care weights are written as 0; the rest
    are copied unchanged.
    """
    n = polarities.num_vars
    if len(values) != n + 1:
        raise ValueError(f"expected {n + 1} solved values, got {len(values)}")
    weights = [int(v) for v in values[:n]]
    threshold = int(values[n])
    for var in polarities.negative_vars():
        weights[var] = -weights[var]
        threshold += weights[var]
    for var in polarities.dont_care_vars():
        weights[var] = 0
    return LinearForm(tuple(weights), threshold)


def identify_threshold(
    tt: TruthTable,
    *,
    backend: Optional[ILPBackend] = None,
    config: Optional[IdentificationConfig] = None,
) -> ThresholdResult:
    """
    Decide whether ``tt`` is a threshold function.

    Parameters
    ----------
    tt : TruthTable
        Completely specified function; not modified.
    backend : ILPBackend, optional
        Solver to use. When omitted, one is built from ``config`` for this
        call only, and only after the unateness check passes.
    config : IdentificationConfig, optional
        Defaults to ``IdentificationConfig()``.

    Returns
    -------
    ThresholdResult
        THRESHOLD with a linear form, NOT_THRESHOLD (binate variable or
        infeasible ILP), or SOLVER_FAILURE with the solver's message.

    Raises
    ------
    LinearFormMismatch
        If ``config.verify`` is on and the solved form is not sound for ``tt``.
    """
    cfg = config or IdentificationConfig()
    verbose = cfg.verbose

    norm = normalize_polarity(tt)
    if not norm.is_unate:
        log_event(f"x{norm.binate_var} is binate; {tt.to_hex()} is not a threshold function", verbose=verbose)
        return ThresholdResult(
            outcome=Outcome.NOT_THRESHOLD,
            reason=f"binate in x{norm.binate_var}",
            binate_var=norm.binate_var,
        )

    polarities = norm.polarities
    if verbose and polarities.negative_vars():
        log_event(f"flipped negative-unate variables {list(polarities.negative_vars())}", verbose=verbose)

    system = build_constraint_system(norm.table, polarities, pin_dont_care=cfg.pin_dont_care)
    log_event(
        f"{len(system.by_origin('on'))} ON / {len(system.by_origin('off'))} OFF cube constraints, "
        f"{len(system.pinned)} pinned weight(s)",
        verbose=verbose,
    )

    invoked = False
    try:
        solver = backend if backend is not None else make_backend(cfg.backend, time_limit=cfg.time_limit)
        invoked = True
        solution = solver.solve(system)
    except SolverInfrastructureError as e:
        log_event(f"solver failure: {e}", verbose=verbose)
        return ThresholdResult(
            outcome=Outcome.SOLVER_FAILURE,
            reason=str(e),
            solver_invoked=invoked,
            polarities=polarities,
        )

    if solution.status is SolveStatus.INFEASIBLE:
        log_event(f"ILP infeasible; {tt.to_hex()} is not a threshold function", verbose=verbose)
        return ThresholdResult(
            outcome=Outcome.NOT_THRESHOLD,
            reason="ILP infeasible",
            solver_invoked=True,
            polarities=polarities,
        )

    lf = back_map(solution.values, polarities)
    if cfg.verify and not check_linear_form(tt, lf):
        raise LinearFormMismatch(f"linear form {lf} does not realize {tt.to_hex()}")

    log_event(f"{tt.to_hex()}: {lf} ({solution.status.value})", verbose=verbose)
    return ThresholdResult(
        outcome=Outcome.THRESHOLD,
        linear_form=lf,
        reason=solution.status.value,
        solver_invoked=True,
        polarities=polarities,
    )


def is_threshold(tt: TruthTable, **kwargs) -> bool:
    """
    True iff ``tt`` is a threshold function.

    Solver failures raise :class:`SolverInfrastructureError` instead of being
    reported as ``False``.
    """
    res = identify_threshold(tt, **kwargs)
    if res.outcome is Outcome.SOLVER_FAILURE:
        raise SolverInfrastructureError(res.reason)
    return res.is_threshold


def find_linear_form(tt: TruthTable, **kwargs) -> Optional[LinearForm]:
    """Linear form of ``tt``, or None if it is not a threshold function."""
    res = identify_threshold(tt, **kwargs)
    if res.outcome is Outcome.SOLVER_FAILURE:
        raise SolverInfrastructureError(res.reason)
    return res.linear_form
