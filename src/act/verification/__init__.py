"""Inductive invariant verification: query building, proving and reporting."""

from .queries import Query, Symbol, base_case, build_queries, invariant_queries, step_case
from .verifier import (
    CaseOutcome,
    InvariantVerdict,
    aggregate,
    all_proved,
    check_query,
    prove_claims,
    run_queries,
)
from .report import CASE_SEPARATOR, SUCCESS_MARKER, explain, render_report, render_verdict

__all__ = [
    "Query",
    "Symbol",
    "base_case",
    "build_queries",
    "invariant_queries",
    "step_case",
    "CaseOutcome",
    "InvariantVerdict",
    "aggregate",
    "all_proved",
    "check_query",
    "prove_claims",
    "run_queries",
    "CASE_SEPARATOR",
    "SUCCESS_MARKER",
    "explain",
    "render_report",
    "render_verdict",
]
