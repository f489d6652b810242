"""
Solver configuration and backend selection.
"""
import logging
from dataclasses import dataclass

from ..errors import ConfigurationError
from .cvc4_solver import Cvc4Solver
from .solver_runner import is_solver_available
from .z3_solver import Z3Solver

logger = logging.getLogger(__name__)

SUPPORTED_SOLVERS = ("z3", "cvc4")
DEFAULT_SOLVER = "z3"
DEFAULT_TIMEOUT_MS = 20000


@dataclass(frozen=True)
class SolverConfig:
    """Configuration in force for one proof run.

    Attributes:
        solver: Backend name, one of SUPPORTED_SOLVERS
        timeout_ms: Per-query timeout in milliseconds
        debug: Log queries and raw solver output
    """
    solver: str = DEFAULT_SOLVER
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    debug: bool = False

    def validate(self) -> "SolverConfig":
        if self.solver not in SUPPORTED_SOLVERS:
            raise ConfigurationError(
                f"Unknown solver '{self.solver}'; expected one of {', '.join(SUPPORTED_SOLVERS)}")
        if isinstance(self.timeout_ms, bool) or not isinstance(self.timeout_ms, int) \
                or self.timeout_ms <= 0:
            raise ConfigurationError(
                f"SMT timeout must be a positive number of milliseconds, got {self.timeout_ms!r}")
        return self


def make_backend(config: SolverConfig):
    """Build the backend selected by a configuration.

    Raises:
        ConfigurationError: For an unknown backend name, a bad timeout, or
            a backend executable that cannot be found
    """
    config.validate()
    if config.solver == "z3":
        backend = Z3Solver(config.timeout_ms, config.debug)
    else:
        if not is_solver_available("cvc4"):
            raise ConfigurationError("Solver 'cvc4' was selected but no cvc4 executable is on PATH")
        backend = Cvc4Solver(config.timeout_ms, config.debug)
    logger.debug("using %s backend, timeout %dms", backend.name, config.timeout_ms)
    return backend
