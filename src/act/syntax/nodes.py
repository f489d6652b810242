"""Untyped syntax tree produced by the parser.

Nodes are immutable. Every node carries the position of the token that
started it; positions are excluded from equality so that trees rebuilt from
serialized claims compare equal to parsed ones.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from ..errors import Pos


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class IntLit:
    value: int
    pos: Optional[Pos] = field(default=None, compare=False)


@dataclass(frozen=True)
class BoolLit:
    value: bool
    pos: Optional[Pos] = field(default=None, compare=False)


@dataclass(frozen=True)
class StrLit:
    value: str
    pos: Optional[Pos] = field(default=None, compare=False)


@dataclass(frozen=True)
class Var:
    """A bare name: storage slot, call parameter or environment value."""
    name: str
    pos: Optional[Pos] = field(default=None, compare=False)


@dataclass(frozen=True)
class BinOp:
    op: str
    left: "Expr"
    right: "Expr"
    pos: Optional[Pos] = field(default=None, compare=False)


@dataclass(frozen=True)
class UnOp:
    op: str
    operand: "Expr"
    pos: Optional[Pos] = field(default=None, compare=False)


Expr = Union[IntLit, BoolLit, StrLit, Var, BinOp, UnOp]


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Decl:
    """A typed name, e.g. `uint256 amount` in an interface."""
    type_name: str
    name: str
    pos: Optional[Pos] = field(default=None, compare=False)


@dataclass(frozen=True)
class Interface:
    name: str
    params: Tuple[Decl, ...] = ()
    pos: Optional[Pos] = field(default=None, compare=False)


@dataclass(frozen=True)
class Creation:
    """`uint256 x := 0` inside a creates block."""
    type_name: str
    name: str
    value: Expr
    pos: Optional[Pos] = field(default=None, compare=False)


@dataclass(frozen=True)
class Update:
    """`x => x + 1` inside a storage block."""
    slot: str
    value: Expr
    pos: Optional[Pos] = field(default=None, compare=False)


@dataclass(frozen=True)
class CaseBlock:
    """One guarded alternative. `condition` is None for unguarded storage."""
    condition: Optional[Expr]
    updates: Tuple[Update, ...] = ()
    returns: Optional[Expr] = None
    pos: Optional[Pos] = field(default=None, compare=False)


@dataclass(frozen=True)
class Behaviour:
    """A `behaviour NAME of CONTRACT` block.

    A behaviour whose interface is named `constructor` is the contract's
    constructor: it carries `creates` and `invariants`, never cases.
    """
    name: str
    contract: str
    interface: Interface
    iffs: Tuple[Expr, ...] = ()
    cases: Tuple[CaseBlock, ...] = ()
    creates: Optional[Tuple[Creation, ...]] = None
    invariants: Tuple[Expr, ...] = ()
    pos: Optional[Pos] = field(default=None, compare=False)

    @property
    def is_constructor(self) -> bool:
        return self.interface.name == "constructor"


@dataclass(frozen=True)
class Spec:
    behaviours: Tuple[Behaviour, ...] = ()
