"""
Type checker and inductive invariant prover for act specifications.

This package turns act source text into sort-checked claims about contract
storage and proves the claimed invariants with an SMT solver.
"""

__version__ = "0.1.0"

from .errors import (
    ActError,
    ConfigurationError,
    EngineError,
    LexError,
    ParseError,
    Pos,
    TypeCheckError,
    render_error,
)
from .claims import Claims, typecheck
from .solver import SolverConfig, make_backend
from .verification import InvariantVerdict, build_queries, prove_claims, render_report
from .checker import lex_source, parse_source, prove_source, typecheck_source

__all__ = [
    "ActError",
    "ConfigurationError",
    "EngineError",
    "LexError",
    "ParseError",
    "Pos",
    "TypeCheckError",
    "render_error",
    "Claims",
    "typecheck",
    "SolverConfig",
    "make_backend",
    "InvariantVerdict",
    "build_queries",
    "prove_claims",
    "render_report",
    "lex_source",
    "parse_source",
    "prove_source",
    "typecheck_source",
]
