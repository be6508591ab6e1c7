# src/threshold_logic/solver.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple
import math
import shutil

import numpy as np
import pulp  # type: ignore

from .constraints import ConstraintSystem

__all__ = [
    "SolveStatus",
    "ILPSolution",
    "SolverInfrastructureError",
    "ILPBackend",
    "PuLPBackend",
    "SciPyBackend",
    "make_backend",
    "best_available_backend",
]


class SolveStatus(Enum):
    OPTIMAL = "optimal"
    SUBOPTIMAL = "suboptimal"
    INFEASIBLE = "infeasible"
    ERROR = "error"


class SolverInfrastructureError(RuntimeError):
    """The solver could not be created, is missing, failed internally, or stopped without an answer."""


@dataclass(frozen=True)
class ILPSolution:
    """Solution container: ``values`` holds one rounded integer per column, or None."""
    status: SolveStatus
    values: Optional[Tuple[int, ...]] = None
    objective: Optional[float] = None

    @property
    def feasible(self) -> bool:
        return self.status in (SolveStatus.OPTIMAL, SolveStatus.SUBOPTIMAL)


def _rounded(raw) -> Tuple[int, ...]:
    out = []
    for v in raw:
        if v is None or not math.isfinite(float(v)):
            raise SolverInfrastructureError(f"solver returned a non-finite column value: {v!r}")
        out.append(int(round(float(v))))
    return tuple(out)


class ILPBackend:
    """
    Abstracts the threshold ILP: minimize objective·x subject to the system's
    constraints, with every column integer and ≥ 0.
    """
    name = "abstract"

    def solve(self, system: ConstraintSystem) -> ILPSolution:  # pragma: no cover - abstract
        raise NotImplementedError


class PuLPBackend(ILPBackend):
    """
    CBC or GLPK through PuLP.

    A CBC or GLPK binary on PATH is preferred; otherwise the CBC build bundled
    with PuLP is used. Verbosity and time limit live on the solver instance
    created for each call, never on PuLP's process-wide defaults.
    """
    name = "pulp"

    def __init__(self, *, time_limit: Optional[float] = None, msg: bool = False, solver_path: Optional[str] = None) -> None:
        self.time_limit = time_limit
        self.msg = msg
        self.solver_path = solver_path

    def _make_solver(self):
        kw = {"msg": self.msg}
        if self.time_limit is not None:
            kw["timeLimit"] = self.time_limit

        if self.solver_path:
            return pulp.COIN_CMD(path=self.solver_path, **kw)
        cbc = shutil.which("cbc")
        if cbc:
            return pulp.COIN_CMD(path=cbc, **kw)
        glp = shutil.which("glpsol")
        if glp:
            return pulp.GLPK_CMD(path=glp, **kw)
        bundled = getattr(pulp, "PULP_CBC_CMD", None)
        if bundled is None:
            raise SolverInfrastructureError("No ILP solver found (no CBC/GLPK on PATH and no bundled CBC in PuLP).")
        return bundled(**kw)

    @staticmethod
    def _status_of(prob: pulp.LpProblem) -> SolveStatus:
        if prob.sol_status == pulp.LpSolutionOptimal:
            return SolveStatus.OPTIMAL
        if prob.sol_status == pulp.LpSolutionIntegerFeasible:
            return SolveStatus.SUBOPTIMAL
        if prob.status == pulp.LpStatusInfeasible or prob.sol_status == pulp.LpSolutionInfeasible:
            return SolveStatus.INFEASIBLE
        return SolveStatus.ERROR

    def solve(self, system: ConstraintSystem) -> ILPSolution:
        solver = self._make_solver()
        if not solver.available():
            raise SolverInfrastructureError("No ILP solver found (need CBC or GLPK for PuLP).")

        prob = pulp.LpProblem("threshold_form", pulp.LpMinimize)

        n = system.num_vars
        cols = [pulp.LpVariable(f"w_{i}", lowBound=0, cat=pulp.LpInteger) for i in range(n)]
        cols.append(pulp.LpVariable("T", lowBound=0, cat=pulp.LpInteger))

        # objective: minimize the sum of the non-pinned columns
        prob += pulp.lpSum(coef * cols[j] for j, coef in enumerate(system.objective) if coef)

        for r, row in enumerate(system.constraints):
            lhs = pulp.lpSum(coef * cols[j] for j, coef in row.terms)
            if row.sense == ">=":
                prob += (lhs >= row.rhs), f"{row.origin}_{r}"
            elif row.sense == "<=":
                prob += (lhs <= row.rhs), f"{row.origin}_{r}"
            else:
                prob += (lhs == row.rhs), f"{row.origin}_{r}"

        try:
            prob.solve(solver)
        except pulp.PulpSolverError as e:
            raise SolverInfrastructureError(f"ILP solver failed: {e}") from e

        status = self._status_of(prob)
        if status is SolveStatus.INFEASIBLE:
            return ILPSolution(status=status)
        if status is SolveStatus.ERROR:
            raise SolverInfrastructureError(
                f"ILP solver stopped without a result: {pulp.LpStatus.get(prob.status, prob.status)}"
            )

        values = _rounded(v.value() for v in cols)
        return ILPSolution(status=status, values=values, objective=pulp.value(prob.objective))


class SciPyBackend(ILPBackend):
    """
    In-process HiGHS via scipy.optimize.milp.

    Rows become ``lb ≤ A·x ≤ ub`` with ``lb = rhs`` for ≥, ``ub = rhs`` for ≤
    and both for ==; every column is integer with bounds ``[0, ∞)``.
    """
    name = "scipy"

    def __init__(self, *, time_limit: Optional[float] = None) -> None:
        from scipy.optimize import milp as _milp, LinearConstraint as _LinearConstraint, Bounds as _Bounds  # lazy import
        self._milp = _milp
        self._LinearConstraint = _LinearConstraint
        self._Bounds = _Bounds
        self.time_limit = time_limit

    def solve(self, system: ConstraintSystem) -> ILPSolution:
        ncol = system.num_columns
        m = len(system.constraints)

        A = np.zeros((m, ncol))
        lb = np.full(m, -np.inf)
        ub = np.full(m, np.inf)
        for r, row in enumerate(system.constraints):
            for j, coef in row.terms:
                A[r, j] += coef
            if row.sense in (">=", "=="):
                lb[r] = row.rhs
            if row.sense in ("<=", "=="):
                ub[r] = row.rhs

        options = {"disp": False}
        if self.time_limit is not None:
            options["time_limit"] = float(self.time_limit)

        try:
            res = self._milp(
                np.asarray(system.objective, dtype=float),
                constraints=[self._LinearConstraint(A, lb, ub)] if m else None,
                integrality=np.ones(ncol),
                bounds=self._Bounds(0, np.inf),
                options=options,
            )
        except (ValueError, MemoryError) as e:
            raise SolverInfrastructureError(f"ILP solver failed: {e}") from e

        if res.status == 2:
            return ILPSolution(status=SolveStatus.INFEASIBLE)
        if res.x is None or res.status not in (0, 1):
            raise SolverInfrastructureError(f"ILP solver stopped without a result: {res.message}")

        status = SolveStatus.OPTIMAL if res.status == 0 else SolveStatus.SUBOPTIMAL
        return ILPSolution(status=status, values=_rounded(res.x), objective=float(res.fun))


def make_backend(name: str = "auto", *, time_limit: Optional[float] = None) -> ILPBackend:
    """Backend by name: ``"pulp"``, ``"scipy"`` or ``"auto"``."""
    if name == "pulp":
        return PuLPBackend(time_limit=time_limit)
    if name == "scipy":
        try:
            return SciPyBackend(time_limit=time_limit)
        except ImportError as e:
            raise SolverInfrastructureError(f"SciPy backend unavailable: {e}") from e
    if name == "auto":
        return best_available_backend(time_limit=time_limit)
    raise ValueError("backend must be 'auto', 'pulp' or 'scipy'")


def best_available_backend(*, time_limit: Optional[float] = None) -> ILPBackend:
    """Prefer SciPy (in-process) else fall back to PuLP (external solver)."""
    try:
        return SciPyBackend(time_limit=time_limit)
    except ImportError:
        return PuLPBackend(time_limit=time_limit)
