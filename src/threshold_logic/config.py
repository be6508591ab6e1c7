# src/threshold_logic/config.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

"""
Configuration objects for threshold identification.

:class:`IdentificationConfig` gathers the knobs of a single identification
call: which ILP backend to build, how long it may run, how don't-care
variables are handled, and whether the result is re-checked against the
truth table. Every call builds its own backend from this snapshot, so no
solver setting leaks between calls.

Examples
--------
>>> from threshold_logic.config import IdentificationConfig
>>> cfg = IdentificationConfig(backend="pulp", time_limit=5)
>>> cfg.backend
'pulp'
>>> cfg.time_limit
5
"""

__all__ = [
    'IdentificationConfig',
]

BACKENDS = ("auto", "pulp", "scipy")


@dataclass(frozen=True)
class IdentificationConfig:
    """
    Knobs for one call of :func:`threshold_logic.identification.identify_threshold`.

    Parameters
    ----------
    backend : {"auto", "pulp", "scipy"}, default="auto"
        ILP backend to build per call. ``"auto"`` prefers SciPy's in-process
        HiGHS and falls back to PuLP (CBC/GLPK).
    time_limit : float or None, default=None
        Wall-clock limit in seconds handed to the solver. A solver that stops
        at the limit without any feasible point is reported as a solver
        failure, never as "not a threshold function".
    pin_dont_care : bool, default=True
        Fix the weight of every variable the function ignores to 0 and leave
        it out of the objective.
    verify : bool, default=True
        Check the final linear form against all ``2**n`` assignments before
        returning it.
    verbose : bool, default=False
        Print pipeline events to the console.
    """

    backend: str = "auto"
    time_limit: Optional[float] = None
    pin_dont_care: bool = True
    verify: bool = True
    verbose: bool = False

    def __post_init__(self):
        if self.backend not in BACKENDS:
            raise ValueError(f"backend must be one of {BACKENDS}")
        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError("time_limit must be > 0")
