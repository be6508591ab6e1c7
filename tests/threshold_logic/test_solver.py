import pulp
import pytest

from threshold_logic.constraints import build_constraint_system
from threshold_logic.solver import (
    ILPSolution,
    PuLPBackend,
    SciPyBackend,
    SolveStatus,
    SolverInfrastructureError,
    best_available_backend,
    make_backend,
)
from threshold_logic.truth_table import TruthTable


def _pulp_cbc_available():
    try:
        return PuLPBackend()._make_solver().available()
    except SolverInfrastructureError:
        return False


def _backends():
    out = [pytest.param(lambda: SciPyBackend(), id="scipy")]
    out.append(pytest.param(
        lambda: PuLPBackend(),
        id="pulp",
        marks=pytest.mark.skipif(not _pulp_cbc_available(), reason="no CBC/GLPK available to PuLP"),
    ))
    return out


def _non_threshold_unate():
    # x0 x1 + x2 x3 is positive unate but not linearly separable
    return TruthTable.from_function(4, lambda x: (x[0] and x[1]) or (x[2] and x[3]))


@pytest.mark.parametrize("factory", _backends())
def test_majority_optimum(factory, maj3):
    sol = factory().solve(build_constraint_system(maj3))
    assert sol.status is SolveStatus.OPTIMAL
    assert sol.feasible
    assert sol.values == (1, 1, 1, 2)
    assert sol.objective == pytest.approx(5)


@pytest.mark.parametrize("factory", _backends())
def test_and_or_optima(factory, and2, or2):
    backend = factory()
    assert backend.solve(build_constraint_system(and2)).values == (1, 1, 2)
    assert backend.solve(build_constraint_system(or2)).values == (1, 1, 1)


@pytest.mark.parametrize("factory", _backends())
def test_infeasible_system(factory):
    sol = factory().solve(build_constraint_system(_non_threshold_unate()))
    assert sol.status is SolveStatus.INFEASIBLE
    assert sol.values is None
    assert not sol.feasible


@pytest.mark.parametrize("factory", _backends())
def test_pinned_weight_is_zero(factory):
    f = TruthTable.from_function(3, lambda x: x[0] or x[2])
    sys_ = build_constraint_system(f)
    sol = factory().solve(sys_)
    assert sol.values[1] == 0
    assert sys_.is_satisfied_by(sol.values)


def test_pulp_missing_solver_is_infrastructure_error(monkeypatch, maj3):
    class _Missing:
        def available(self):
            return False

    monkeypatch.setattr(PuLPBackend, "_make_solver", lambda self: _Missing())
    with pytest.raises(SolverInfrastructureError):
        PuLPBackend().solve(build_constraint_system(maj3))


def test_pulp_solver_exception_is_infrastructure_error(monkeypatch, maj3):
    class _Broken:
        def available(self):
            return True

    def _boom(self, solver=None, **kw):
        raise pulp.PulpSolverError("crashed")

    monkeypatch.setattr(PuLPBackend, "_make_solver", lambda self: _Broken())
    monkeypatch.setattr(pulp.LpProblem, "solve", _boom)
    with pytest.raises(SolverInfrastructureError, match="crashed"):
        PuLPBackend().solve(build_constraint_system(maj3))


def test_pulp_solver_settings_are_per_instance(monkeypatch):
    monkeypatch.setattr("threshold_logic.solver.shutil.which", lambda name: None)
    before = pulp.LpSolverDefault.msg if pulp.LpSolverDefault is not None else None
    s = PuLPBackend(time_limit=3.0)._make_solver()
    assert isinstance(s, pulp.PULP_CBC_CMD)
    assert s.timeLimit == 3.0
    assert not s.msg
    after = pulp.LpSolverDefault.msg if pulp.LpSolverDefault is not None else None
    assert before == after


def test_scipy_time_limit_without_solution_is_infrastructure_error(monkeypatch, maj3):
    class _Res:
        status = 1
        x = None
        fun = None
        message = "Time limit reached"

    backend = SciPyBackend(time_limit=0.001)
    monkeypatch.setattr(backend, "_milp", lambda *a, **kw: _Res())
    with pytest.raises(SolverInfrastructureError, match="Time limit"):
        backend.solve(build_constraint_system(maj3))


def test_scipy_stopped_with_incumbent_is_suboptimal(monkeypatch, maj3):
    class _Res:
        status = 1
        x = [1.0000001, 0.9999999, 1.0, 2.0]
        fun = 5.0
        message = "Time limit reached"

    backend = SciPyBackend()
    monkeypatch.setattr(backend, "_milp", lambda *a, **kw: _Res())
    sol = backend.solve(build_constraint_system(maj3))
    assert sol.status is SolveStatus.SUBOPTIMAL
    assert sol.values == (1, 1, 1, 2)


def test_make_backend_by_name():
    assert isinstance(make_backend("pulp"), PuLPBackend)
    assert isinstance(make_backend("scipy"), SciPyBackend)
    assert isinstance(make_backend("auto"), type(best_available_backend()))
    with pytest.raises(ValueError):
        make_backend("lpsolve")


def test_solution_container_defaults():
    sol = ILPSolution(status=SolveStatus.INFEASIBLE)
    assert sol.values is None and sol.objective is None


def test_pulp_without_bundled_cbc_is_infrastructure_error(monkeypatch, maj3):
    monkeypatch.setattr("threshold_logic.solver.shutil.which", lambda name: None)
    monkeypatch.delattr(pulp, "PULP_CBC_CMD", raising=False)
    with pytest.raises(SolverInfrastructureError, match="No ILP solver"):
        PuLPBackend()._make_solver()
    with pytest.raises(SolverInfrastructureError):
        PuLPBackend().solve(build_constraint_system(maj3))
