"""
Solver outcome types.

A backend first produces a RawOutcome (what the solver said), which
normalize() classifies into one of the four ProofResult variants.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union

from ..errors import EngineError


class SolverResult(Enum):
    """Raw answer from an SMT solver check."""
    SAT = "sat"
    UNSAT = "unsat"
    UNKNOWN = "unknown"
    ERROR = "error"
    DELTA_SAT = "delta-sat"
    EXT_FIELD_SAT = "ext-field-sat"


@dataclass
class RawOutcome:
    """What a backend observed for one query.

    Attributes:
        result: Raw solver answer
        model: Symbol assignments when the answer is sat
        reason: Diagnostic text for unknown and error answers
        solver_time_ms: Time taken by the solver in milliseconds
        solver_name: Name of the backend used
    """
    result: SolverResult
    model: Dict[str, Any] = field(default_factory=dict)
    reason: str = ""
    solver_time_ms: float = 0.0
    solver_name: str = "unknown"


@dataclass(frozen=True)
class Proved:
    """The query is unsatisfiable: the obligation holds."""

    def __str__(self) -> str:
        return "Proved"


@dataclass(frozen=True)
class CounterExample:
    """The query is satisfiable; `model` witnesses the failure."""
    model: Dict[str, Any] = field(default_factory=dict, hash=False)

    def __str__(self) -> str:
        body = ", ".join(f"{k}={v}" for k, v in self.model.items())
        return f"CounterExample({body})"


@dataclass(frozen=True)
class Unknown:
    """The solver gave up, typically on timeout."""
    reason: str = ""


@dataclass(frozen=True)
class SolverError:
    """The solver reported an error or crashed."""
    reason: str = ""


ProofResult = Union[Proved, CounterExample, Unknown, SolverError]


def is_proved(result: ProofResult) -> bool:
    return isinstance(result, Proved)


def normalize(raw: RawOutcome, context: Optional[str] = None) -> ProofResult:
    """Classify a raw outcome into the ProofResult taxonomy.

    Args:
        raw: Outcome reported by a backend
        context: Query label, used in engine error messages

    Returns:
        The matching ProofResult

    Raises:
        EngineError: For delta-sat and extended-field answers, which this
            prover never expects to see
    """
    where = f" ({context})" if context else ""
    if raw.result == SolverResult.UNSAT:
        return Proved()
    if raw.result == SolverResult.SAT:
        return CounterExample(dict(raw.model))
    if raw.result == SolverResult.UNKNOWN:
        return Unknown(raw.reason)
    if raw.result == SolverResult.ERROR:
        return SolverError(raw.reason)
    if raw.result == SolverResult.DELTA_SAT:
        raise EngineError(f"Unexpected delta-sat result from {raw.solver_name}{where}")
    if raw.result == SolverResult.EXT_FIELD_SAT:
        raise EngineError(
            f"Unexpected extended-field model from {raw.solver_name}{where}: {raw.model}")
    raise EngineError(f"Unclassifiable solver result {raw.result!r}{where}")
