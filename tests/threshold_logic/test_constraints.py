import pytest

from threshold_logic.constraints import (
    LinearConstraint,
    build_constraint_system,
    off_cube_constraint,
    on_cube_constraint,
    pin_constraint,
)
from threshold_logic.isop import Cube, isop
from threshold_logic.truth_table import TruthTable
from threshold_logic.unateness import normalize_polarity


def test_on_cube_uses_required_true_literals_only():
    c = on_cube_constraint(Cube.from_string("1-0"), 3)
    assert c.terms == ((0, 1), (3, -1))
    assert c.sense == ">=" and c.rhs == 0 and c.origin == "on"


def test_off_cube_uses_absent_and_required_true_literals():
    c = off_cube_constraint(Cube.from_string("0-1"), 3)
    assert c.terms == ((1, 1), (2, 1), (3, -1))
    assert c.sense == "<=" and c.rhs == -1 and c.origin == "off"


def test_pin_constraint_and_sense_validation():
    p = pin_constraint(1, 3)
    assert p.terms == ((1, 1),) and p.sense == "==" and p.rhs == 0
    with pytest.raises(ValueError):
        pin_constraint(3, 3)
    with pytest.raises(ValueError):
        LinearConstraint(((0, 1),), ">", 0)


def test_majority_system(maj3):
    sys_ = build_constraint_system(maj3)
    assert sys_.num_columns == 4
    assert sys_.threshold_column == 3
    on = sys_.by_origin("on")
    off = sys_.by_origin("off")
    assert len(on) == len(isop(maj3)) == 3
    assert len(off) == len(isop(~maj3)) == 3
    assert {c.terms for c in on} == {((0, 1), (1, 1), (3, -1)), ((0, 1), (2, 1), (3, -1)), ((1, 1), (2, 1), (3, -1))}
    assert {c.terms for c in off} == {((0, 1), (3, -1)), ((1, 1), (3, -1)), ((2, 1), (3, -1))}
    assert sys_.pinned == ()
    assert sys_.objective == (1, 1, 1, 1)

    assert sys_.is_satisfied_by([1, 1, 1, 2])
    assert not sys_.is_satisfied_by([1, 1, 1, 1])
    with pytest.raises(ValueError):
        sys_.is_satisfied_by([1, 1, 2])


def test_one_constraint_per_cube_in_order():
    f = TruthTable.from_function(4, lambda x: (x[0] and x[1]) or x[2] or (x[1] and x[3]))
    sys_ = build_constraint_system(f, pin_dont_care=False)
    origins = [c.origin for c in sys_.constraints]
    n_on, n_off = len(isop(f)), len(isop(~f))
    assert origins == ["on"] * n_on + ["off"] * n_off


def test_dont_care_variables_are_pinned_and_left_out_of_objective():
    f = TruthTable.from_function(3, lambda x: x[0] and x[2])
    norm = normalize_polarity(f)
    sys_ = build_constraint_system(norm.table, norm.polarities)
    assert sys_.pinned == (1,)
    assert sys_.objective == (1, 0, 1, 1)
    pins = sys_.by_origin("pin")
    assert len(pins) == 1 and pins[0].terms == ((1, 1),)

    # same result when dependence is detected from the table itself
    assert build_constraint_system(norm.table).pinned == (1,)

    unpinned = build_constraint_system(norm.table, norm.polarities, pin_dont_care=False)
    assert unpinned.pinned == () and unpinned.by_origin("pin") == ()
    assert unpinned.objective == (1, 1, 1, 1)


def test_custom_cover_is_used():
    calls = []

    def fake_cover(tt):
        calls.append(tt)
        return [Cube()]

    f = TruthTable.from_hex("8", 2)
    sys_ = build_constraint_system(f, cover=fake_cover, pin_dont_care=False)
    assert calls == [f, ~f]
    assert len(sys_.constraints) == 2


def test_polarity_arity_mismatch(maj3):
    rec = normalize_polarity(TruthTable.from_hex("8", 2)).polarities
    with pytest.raises(ValueError):
        build_constraint_system(maj3, rec)
