"""
Typed claims: contracts, behaviours, cases, storage updates and invariants.

All structures are immutable and built once by the type checker. Positions
are kept for diagnostics but excluded from equality.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from ..errors import Pos
from .expr import TRUE, Expr, Lit
from .sorts import AbiType, Sort


@dataclass(frozen=True)
class Slot:
    """A declared storage slot."""
    name: str
    abi_type: AbiType

    @property
    def sort(self) -> Sort:
        return self.abi_type.sort


@dataclass(frozen=True)
class Param:
    """A typed call parameter."""
    name: str
    abi_type: AbiType

    @property
    def sort(self) -> Sort:
        return self.abi_type.sort


@dataclass(frozen=True)
class Interface:
    name: str
    params: Tuple[Param, ...] = ()


@dataclass(frozen=True)
class StorageUpdate:
    """New value of one slot, over pre-state storage and parameters."""
    slot: str
    value: Expr
    pos: Optional[Pos] = field(default=None, compare=False)


@dataclass(frozen=True)
class Case:
    """One guarded transition of a behaviour.

    Attributes:
        precondition: Boolean guard of the case (TRUE when unguarded)
        updates: Storage updates; slots not listed keep their value
        returns: Optional return value, not used by the prover
    """
    precondition: Expr = TRUE
    updates: Tuple[StorageUpdate, ...] = ()
    returns: Optional[Expr] = None
    pos: Optional[Pos] = field(default=None, compare=False)

    @property
    def is_guarded(self) -> bool:
        return self.precondition != TRUE

    def updated(self) -> Dict[str, Expr]:
        return {u.slot: u.value for u in self.updates}


@dataclass(frozen=True)
class Behaviour:
    """A named method of a contract with its guarded cases.

    `iff` holds behaviour-wide preconditions that apply to every case.
    """
    name: str
    contract: str
    interface: Interface
    cases: Tuple[Case, ...] = ()
    iff: Tuple[Expr, ...] = ()
    pos: Optional[Pos] = field(default=None, compare=False)


@dataclass(frozen=True)
class Constructor:
    """The constructor behaviour: literal initial values for every slot."""
    name: str
    interface: Interface
    initial: Tuple[Tuple[str, Lit], ...] = ()
    iff: Tuple[Expr, ...] = ()
    pos: Optional[Pos] = field(default=None, compare=False)

    def initial_values(self) -> Dict[str, Lit]:
        return dict(self.initial)


@dataclass(frozen=True)
class Invariant:
    """A boolean property over a contract's storage."""
    contract: str
    expr: Expr
    pos: Optional[Pos] = field(default=None, compare=False)


@dataclass(frozen=True)
class Contract:
    name: str
    storage: Tuple[Slot, ...]
    constructor: Constructor
    behaviours: Tuple[Behaviour, ...] = ()
    invariants: Tuple[Invariant, ...] = ()


@dataclass(frozen=True)
class Claims:
    """Typed claims for every contract of a specification."""
    contracts: Tuple[Contract, ...] = ()

    def contract(self, name: str) -> Optional[Contract]:
        for c in self.contracts:
            if c.name == name:
                return c
        return None

    @property
    def invariants(self) -> Tuple[Invariant, ...]:
        return tuple(i for c in self.contracts for i in c.invariants)
