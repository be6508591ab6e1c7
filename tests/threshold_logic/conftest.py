import pytest

from threshold_logic.solver import ILPBackend, best_available_backend
from threshold_logic.truth_table import TruthTable


class CountingBackend(ILPBackend):
    """Wraps a real backend and counts solve() calls."""
    name = "counting"

    def __init__(self, inner=None):
        self.inner = inner if inner is not None else best_available_backend()
        self.calls = 0
        self.systems = []

    def solve(self, system):
        self.calls += 1
        self.systems.append(system)
        return self.inner.solve(system)


@pytest.fixture
def counting_backend():
    return CountingBackend()


@pytest.fixture
def and2():
    return TruthTable.from_hex("8", 2)


@pytest.fixture
def or2():
    return TruthTable.from_hex("e", 2)


@pytest.fixture
def xor2():
    return TruthTable.from_hex("6", 2)


@pytest.fixture
def maj3():
    return TruthTable.from_hex("e8", 3)
