import pytest

from threshold_logic import cli
from threshold_logic.solver import SolverInfrastructureError


def test_infer_num_vars():
    assert cli._infer_num_vars("8") == 2
    assert cli._infer_num_vars("e8") == 3
    assert cli._infer_num_vars("0xe8") == 3
    assert cli._infer_num_vars("ffff") == 4
    with pytest.raises(ValueError):
        cli._infer_num_vars("123")


def test_main_reports_each_table(capsys):
    code = cli.main(["e8", "6", "--profile", "--table"])
    out = capsys.readouterr().out
    assert code == 0
    assert "e8" in out
    assert "unateness" in out
    assert "weighted_sum" in out


def test_main_exit_code_on_solver_failure(monkeypatch, capsys):
    def _unavailable(*a, **kw):
        raise SolverInfrastructureError("no solver")

    monkeypatch.setattr("threshold_logic.identification.make_backend", _unavailable)
    assert cli.main(["8"]) == 2


def test_explicit_vars_for_small_tables(capsys):
    assert cli.main(["-n", "1", "2"]) == 0


@pytest.mark.parametrize("argv", [["zz"], ["123"], ["-n", "2", "e8"], ["-n", "3", "g8"]])
def test_malformed_tables_exit_with_usage_error(argv, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(argv)
    assert exc.value.code == 2
    assert "threshold-id" in capsys.readouterr().err
