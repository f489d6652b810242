"""
Typed claim model: sorts, sort-checked expressions, contracts and the type
checker that builds them from the untyped syntax tree.
"""

from .sorts import Sort, AbiType, parse_abi_type, ENVIRONMENT
from .expr import (
    Expr,
    Lit,
    StorageRef,
    ParamRef,
    EnvRef,
    Apply,
    apply_op,
    lit,
    pretty,
)
from .model import (
    Slot,
    Param,
    Interface,
    StorageUpdate,
    Case,
    Behaviour,
    Constructor,
    Invariant,
    Contract,
    Claims,
)
from .typecheck import typecheck
from .serialize import claims_to_json, claims_from_json, dumps, loads

__all__ = [
    "Sort",
    "AbiType",
    "parse_abi_type",
    "ENVIRONMENT",
    "Expr",
    "Lit",
    "StorageRef",
    "ParamRef",
    "EnvRef",
    "Apply",
    "apply_op",
    "lit",
    "pretty",
    "Slot",
    "Param",
    "Interface",
    "StorageUpdate",
    "Case",
    "Behaviour",
    "Constructor",
    "Invariant",
    "Contract",
    "Claims",
    "typecheck",
    "claims_to_json",
    "claims_from_json",
    "dumps",
    "loads",
]
