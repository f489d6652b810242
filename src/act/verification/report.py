"""
Human-readable proof report.
"""
from typing import Any, Iterable, List

from ..claims.expr import lit, pretty
from ..solver.result import CounterExample, SolverError, Unknown
from .verifier import CaseOutcome, InvariantVerdict

SUCCESS_MARKER = "Q.E.D ✨"
CASE_SEPARATOR = "\n\n---\n\n"


def format_value(value: Any) -> str:
    if value is None:
        return "?"
    if isinstance(value, (bool, int, str)):
        return pretty(lit(value))
    return str(value)


def format_model(model) -> str:
    return "\n".join(f"  {name} = {format_value(value)}" for name, value in model.items())


def explain(outcome: CaseOutcome) -> str:
    """Explanation of one failed obligation."""
    result = outcome.result
    if isinstance(result, CounterExample):
        body = "Counter example found!"
        if result.model:
            body += "\n\n" + format_model(result.model)
    elif isinstance(result, Unknown):
        body = f"Unknown! {result.reason}".rstrip()
    elif isinstance(result, SolverError):
        body = f"Proof error! {result.reason}".rstrip()
    else:
        raise ValueError(f"Not a failure: {result}")
    return f"{outcome.label}\n\n{body}"


def header(verdict: InvariantVerdict) -> str:
    return f"\n============\n\nInvariant {pretty(verdict.invariant.expr)} of {verdict.contract}: "


def render_verdict(verdict: InvariantVerdict) -> str:
    if verdict.proved:
        return header(verdict) + SUCCESS_MARKER
    return header(verdict) + CASE_SEPARATOR.join(explain(o) for o in verdict.failures)


def render_report(verdicts: Iterable[InvariantVerdict]) -> str:
    parts: List[str] = [render_verdict(v) for v in verdicts]
    return "\n".join(parts)
