"""Query building for inductive invariant proofs.

Pure and deterministic. For every invariant I of a contract this emits:

- a base case: storage bound to the constructor's literal values, asserting
  `not I`. UNSAT means I holds right after construction.
- one step case per (behaviour, case): fresh pre-state storage and parameter
  symbols, asserting `I(pre)`, the case precondition and `not I(post)`, where
  post is obtained by substituting the case's storage updates into I. UNSAT
  means the case preserves I. SAT is a counterexample to induction, which is
  not necessarily a reachable violation.

Queries come out grouped by invariant in declaration order, base case first,
then behaviours and cases in declaration order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from ..claims.expr import (
    EnvRef,
    Expr,
    Lit,
    ParamRef,
    StorageRef,
    apply_op,
    negate,
    pretty,
    substitute,
    walk,
)
from ..claims.model import Behaviour, Case, Claims, Contract, Invariant, Param
from ..claims.sorts import ENVIRONMENT, AbiType, Sort


@dataclass(frozen=True)
class Symbol:
    """A free constant of a query."""

    name: str
    sort: Sort


@dataclass(frozen=True)
class Query:
    """One satisfiability problem: the conjunction of `assertions`.

    Attributes:
        contract: Contract name
        invariant_index: Position of the invariant within its contract
        label: Human-readable name of the proof obligation
        behaviour: Behaviour name for step cases, None for the base case
        case_index: Case position within the behaviour for step cases
        symbols: Declared constants, storage first, then parameters, then
            environment values
        assertions: Boolean formulas to be checked jointly
    """

    contract: str
    invariant_index: int
    label: str
    behaviour: Optional[str] = None
    case_index: Optional[int] = None
    symbols: Tuple[Symbol, ...] = ()
    assertions: Tuple[Expr, ...] = ()

    @property
    def invariant_key(self) -> Tuple[str, int]:
        return (self.contract, self.invariant_index)


def _range(ref: Expr, abi_type: AbiType) -> Optional[Expr]:
    if abi_type.bounds is None:
        return None
    lo, hi = abi_type.bounds
    return apply_op("and", (
        apply_op("<=", (Lit(lo, Sort.INTEGER), ref)),
        apply_op("<=", (ref, Lit(hi, Sort.INTEGER))),
    ))


def _env_refs(exprs: Iterable[Expr]) -> List[EnvRef]:
    seen: Dict[str, EnvRef] = {}
    for e in exprs:
        for node in walk(e):
            if isinstance(node, EnvRef) and node.name not in seen:
                seen[node.name] = EnvRef(node.name, node.sort)
    return list(seen.values())


def _referenced(exprs: Iterable[Expr]) -> set:
    names = set()
    for e in exprs:
        for node in walk(e):
            if isinstance(node, (StorageRef, ParamRef, EnvRef)):
                names.add(node.name)
    return names


def _assemble(storage_refs: List[StorageRef],
              params: Tuple[Param, ...],
              abi_types: Dict[str, AbiType],
              body: List[Expr]) -> Tuple[Tuple[Symbol, ...], Tuple[Expr, ...]]:
    """Declare symbols and prepend range assumptions for bounded types."""
    env = _env_refs(body)
    refs: List[Expr] = list(storage_refs)
    refs.extend(ParamRef(p.name, p.sort) for p in params)
    refs.extend(env)

    types = dict(abi_types)
    types.update({p.name: p.abi_type for p in params})
    types.update({e.name: ENVIRONMENT[e.name] for e in env})

    ranges = [r for r in (_range(ref, types[ref.name]) for ref in refs) if r is not None]
    symbols = tuple(Symbol(ref.name, ref.sort) for ref in refs)
    return symbols, tuple(ranges + body)


def base_case(contract: Contract, index: int, invariant: Invariant) -> Query:
    """Invariant must hold on the constructor's initial storage."""
    ctor = contract.constructor
    post = substitute(invariant.expr, ctor.initial_values())
    body = list(ctor.iff) + [negate(post)]

    used = _referenced(body)
    params = tuple(p for p in ctor.interface.params if p.name in used)
    symbols, assertions = _assemble([], params, {}, body)
    return Query(
        contract=contract.name,
        invariant_index=index,
        label=f"constructor {ctor.name}",
        symbols=symbols,
        assertions=assertions,
    )


def step_case(contract: Contract,
              index: int,
              invariant: Invariant,
              behaviour: Behaviour,
              case_index: int,
              case: Case) -> Query:
    """Invariant must be preserved by one guarded case of a behaviour."""
    pre = invariant.expr
    post = substitute(pre, case.updated())

    body: List[Expr] = [pre]
    body.extend(behaviour.iff)
    if case.is_guarded:
        body.append(case.precondition)
    body.append(negate(post))

    storage_refs = [StorageRef(s.name, s.sort) for s in contract.storage]
    abi_types = {s.name: s.abi_type for s in contract.storage}
    symbols, assertions = _assemble(storage_refs, behaviour.interface.params, abi_types, body)

    label = f"behaviour {behaviour.name}"
    if case.is_guarded:
        label += f", case {pretty(case.precondition)}"
    elif len(behaviour.cases) > 1:
        label += f", case {case_index + 1}"

    return Query(
        contract=contract.name,
        invariant_index=index,
        label=label,
        behaviour=behaviour.name,
        case_index=case_index,
        symbols=symbols,
        assertions=assertions,
    )


def invariant_queries(contract: Contract, index: int, invariant: Invariant) -> List[Query]:
    """Base case followed by every step case of one invariant."""
    queries = [base_case(contract, index, invariant)]
    for behaviour in contract.behaviours:
        for case_index, case in enumerate(behaviour.cases):
            queries.append(step_case(contract, index, invariant, behaviour, case_index, case))
    return queries


def build_queries(claims: Claims) -> List[Query]:
    """All proof obligations of all invariants, in reporting order."""
    queries: List[Query] = []
    for contract in claims.contracts:
        for index, invariant in enumerate(contract.invariants):
            queries.extend(invariant_queries(contract, index, invariant))
    return queries
