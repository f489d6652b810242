"""Inductive invariant prover.

Builds every query of the claims, runs them one at a time on the configured
backend and groups the results per invariant. Failed obligations never stop
the run: every query is checked and reported.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from ..claims.model import Claims, Invariant
from ..solver.base import SolverBackend
from ..solver.config import SolverConfig, make_backend
from ..solver.result import ProofResult, is_proved, normalize
from .queries import Query, build_queries

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CaseOutcome:
    """Result of one query."""

    query: Query
    result: ProofResult

    @property
    def label(self) -> str:
        return self.query.label

    @property
    def proved(self) -> bool:
        return is_proved(self.result)


@dataclass(frozen=True)
class InvariantVerdict:
    """All query outcomes of one invariant, in builder order.

    The invariant is proved iff every outcome is Proved.
    """

    contract: str
    invariant: Invariant
    outcomes: Tuple[CaseOutcome, ...] = ()

    @property
    def proved(self) -> bool:
        return all(o.proved for o in self.outcomes)

    @property
    def failures(self) -> Tuple[CaseOutcome, ...]:
        return tuple(o for o in self.outcomes if not o.proved)


def check_query(backend: SolverBackend, query: Query) -> ProofResult:
    """Submit one query and classify the answer.

    Raises:
        EngineError: If the backend's answer cannot be classified
    """
    raw = backend.check(query)
    result = normalize(raw, f"{query.contract}: {query.label}")
    logger.debug("%s: %s -> %s (%.2fms)", query.contract, query.label,
                 raw.result.value, raw.solver_time_ms)
    return result


def run_queries(queries: Iterable[Query], backend: SolverBackend) -> List[CaseOutcome]:
    """Run queries sequentially, each exactly once."""
    return [CaseOutcome(q, check_query(backend, q)) for q in queries]


def aggregate(outcomes: Iterable[CaseOutcome], claims: Claims) -> List[InvariantVerdict]:
    """Group outcomes by invariant, keeping first-seen order.

    Queries name their invariant by contract and position; the invariant
    itself is looked up in `claims`.
    """
    groups: Dict[Tuple[str, int], List[CaseOutcome]] = {}
    for outcome in outcomes:
        groups.setdefault(outcome.query.invariant_key, []).append(outcome)
    verdicts = []
    for (contract, index), group in groups.items():
        invariant = claims.contract(contract).invariants[index]
        verdicts.append(InvariantVerdict(contract, invariant, tuple(group)))
    return verdicts


def prove_claims(claims: Claims,
                 config: Optional[SolverConfig] = None,
                 backend: Optional[SolverBackend] = None) -> List[InvariantVerdict]:
    """Prove every invariant of the claims.

    Args:
        claims: Typed claims
        config: Solver configuration; defaults apply when omitted
        backend: Backend to use instead of the one `config` selects

    Returns:
        One verdict per invariant, in declaration order

    Raises:
        ConfigurationError: Before any query runs, if the configuration is
            invalid
        EngineError: If a solver answer cannot be classified
    """
    if backend is None:
        backend = make_backend(config or SolverConfig())
    queries = build_queries(claims)
    logger.info("checking %d quer%s for %d invariant(s)",
                len(queries), "y" if len(queries) == 1 else "ies", len(claims.invariants))
    return aggregate(run_queries(queries, backend), claims)


def all_proved(verdicts: Iterable[InvariantVerdict]) -> bool:
    return all(v.proved for v in verdicts)
