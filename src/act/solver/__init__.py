"""
SMT solver adapter: backends, configuration and outcome normalization.
"""

from .result import (
    CounterExample,
    ProofResult,
    Proved,
    RawOutcome,
    SolverError,
    SolverResult,
    Unknown,
    is_proved,
    normalize,
)
from .base import SolverBackend
from .z3_solver import Z3Solver
from .cvc4_solver import Cvc4Solver
from .config import (
    DEFAULT_TIMEOUT_MS,
    SUPPORTED_SOLVERS,
    SolverConfig,
    make_backend,
)

__all__ = [
    "CounterExample",
    "ProofResult",
    "Proved",
    "RawOutcome",
    "SolverError",
    "SolverResult",
    "Unknown",
    "is_proved",
    "normalize",
    "SolverBackend",
    "Z3Solver",
    "Cvc4Solver",
    "DEFAULT_TIMEOUT_MS",
    "SUPPORTED_SOLVERS",
    "SolverConfig",
    "make_backend",
]
