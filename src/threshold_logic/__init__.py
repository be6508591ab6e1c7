"""
Threshold logic function identification.

Single access point for:
    - Truth tables and covers           (truth_table, isop)
    - Pipeline stages                   (unateness, constraints, solver, identification)
    - Soundness checks and frames       (verify)
"""

from .truth_table import TruthTable, MAX_VARS
from .isop import Cube, isop, cover_to_truth_table
from .unateness import (
    Unateness,
    Polarity,
    PolarityRecord,
    NormalizationResult,
    classify_variable,
    unateness_profile,
    normalize_polarity,
)
from .constraints import (
    LinearConstraint,
    ConstraintSystem,
    on_cube_constraint,
    off_cube_constraint,
    pin_constraint,
    build_constraint_system,
)
from .solver import (
    SolveStatus,
    ILPSolution,
    SolverInfrastructureError,
    ILPBackend,
    PuLPBackend,
    SciPyBackend,
    make_backend,
    best_available_backend,
)
from .config import IdentificationConfig
from .identification import (
    LinearForm,
    LinearFormMismatch,
    Outcome,
    ThresholdResult,
    back_map,
    identify_threshold,
    is_threshold,
    find_linear_form,
)
from .verify import check_linear_form, truth_table_frame, mismatches

__version__ = "0.1.0"
