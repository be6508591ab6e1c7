import pytest

from threshold_logic.isop import Cube, isop, cover_to_truth_table
from threshold_logic.truth_table import TruthTable


def test_cube_literals_and_strings():
    c = Cube().add_literal(0, True).add_literal(2, False)
    assert c.get_mask(0) and c.get_bit(0)
    assert c.get_mask(2) and not c.get_bit(2)
    assert not c.get_mask(1)
    assert c.num_literals() == 2
    assert c.to_string(3) == "1-0"
    assert Cube.from_string("1-0") == c
    assert c.evaluate((1, 0, 0)) and c.evaluate((1, 1, 0))
    assert not c.evaluate((1, 1, 1))

    with pytest.raises(ValueError):
        Cube.from_string("1x0")


def test_isop_constants():
    assert isop(TruthTable.zeros(3)) == []
    assert isop(TruthTable.ones(3)) == [Cube()]
    assert isop(TruthTable.ones(0)) == [Cube()]


def test_isop_majority_is_prime_cover():
    cubes = isop(TruthTable.from_hex("e8", 3))
    assert sorted(c.to_string(3) for c in cubes) == ["-11", "1-1", "11-"]


def test_isop_of_positive_unate_function_has_only_positive_literals():
    f = TruthTable.from_function(4, lambda x: (x[0] and x[1]) or x[2])
    for c in isop(f):
        for i in range(4):
            assert not c.get_mask(i) or c.get_bit(i)


def test_isop_exact_and_irredundant_for_all_3_var_functions():
    for code in range(256):
        tt = TruthTable(3, [(code >> k) & 1 for k in range(8)])
        cubes = isop(tt)
        assert cover_to_truth_table(cubes, 3) == tt
        # dropping any cube must lose some minterm
        for skip in range(len(cubes)):
            rest = cubes[:skip] + cubes[skip + 1:]
            assert cover_to_truth_table(rest, 3) != tt


def test_isop_cover_on_random_8_var_functions():
    import numpy as np
    rng = np.random.default_rng(11)
    for _ in range(5):
        tt = TruthTable(8, rng.integers(0, 2, size=256).astype(bool))
        assert cover_to_truth_table(isop(tt), 8) == tt


def test_isop_rejects_interval_without_support():
    from threshold_logic.isop import _isop_rec

    # lower ⊄ upper: no variable to split on, yet neither bound is constant-trivial
    with pytest.raises(RuntimeError, match="empty support"):
        _isop_rec(TruthTable.ones(2), TruthTable.zeros(2), 2)
