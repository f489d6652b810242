"""
Sort-tagged expression trees.

Every node carries its sort. Operator nodes are only built through
apply_op, which checks operand sorts against the operator signature and
raises SortMismatch on disagreement, so a tree that exists is well-sorted.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterator, Mapping, Optional, Tuple, Union

from ..errors import Pos, SortMismatch
from .sorts import Sort


@dataclass(frozen=True)
class Lit:
    value: Union[int, bool, str]
    sort: Sort
    pos: Optional[Pos] = field(default=None, compare=False)


@dataclass(frozen=True)
class StorageRef:
    """Pre-state value of a storage slot."""
    name: str
    sort: Sort
    pos: Optional[Pos] = field(default=None, compare=False)


@dataclass(frozen=True)
class ParamRef:
    """A call parameter of the enclosing behaviour."""
    name: str
    sort: Sort
    pos: Optional[Pos] = field(default=None, compare=False)


@dataclass(frozen=True)
class EnvRef:
    """A block or transaction value such as CALLER."""
    name: str
    sort: Sort = Sort.INTEGER
    pos: Optional[Pos] = field(default=None, compare=False)


@dataclass(frozen=True)
class Apply:
    op: str
    args: Tuple["Expr", ...]
    sort: Sort
    pos: Optional[Pos] = field(default=None, compare=False)


Expr = Union[Lit, StorageRef, ParamRef, EnvRef, Apply]


_INT2 = (Sort.INTEGER, Sort.INTEGER)
_BOOL2 = (Sort.BOOLEAN, Sort.BOOLEAN)

# op -> (operand sorts, result sort). Equality is polymorphic and handled apart.
_SIGNATURES: Dict[str, Tuple[Tuple[Sort, ...], Sort]] = {
    "+": (_INT2, Sort.INTEGER),
    "-": (_INT2, Sort.INTEGER),
    "*": (_INT2, Sort.INTEGER),
    "/": (_INT2, Sort.INTEGER),
    "%": (_INT2, Sort.INTEGER),
    "neg": ((Sort.INTEGER,), Sort.INTEGER),
    "<": (_INT2, Sort.BOOLEAN),
    "<=": (_INT2, Sort.BOOLEAN),
    ">": (_INT2, Sort.BOOLEAN),
    ">=": (_INT2, Sort.BOOLEAN),
    "and": (_BOOL2, Sort.BOOLEAN),
    "or": (_BOOL2, Sort.BOOLEAN),
    "not": ((Sort.BOOLEAN,), Sort.BOOLEAN),
}

EQUALITY_OPS = ("==", "!=")

OPERATORS = tuple(_SIGNATURES) + EQUALITY_OPS


def lit(value: Union[int, bool, str], pos: Optional[Pos] = None) -> Lit:
    """Build a literal, inferring its sort from the Python value."""
    if isinstance(value, bool):
        return Lit(value, Sort.BOOLEAN, pos)
    if isinstance(value, int):
        return Lit(value, Sort.INTEGER, pos)
    if isinstance(value, str):
        return Lit(value, Sort.BYTES, pos)
    raise ValueError(f"Unsupported literal: {value!r}")


TRUE = Lit(True, Sort.BOOLEAN)


def apply_op(op: str, args: Tuple[Expr, ...], pos: Optional[Pos] = None) -> Apply:
    """Checked constructor for operator nodes.

    Raises:
        SortMismatch: If an operand's sort does not fit the operator
        ValueError: If the operator or its arity is unknown
    """
    args = tuple(args)
    if op in EQUALITY_OPS:
        if len(args) != 2:
            raise ValueError(f"Operator {op} takes 2 operands, got {len(args)}")
        lhs, rhs = args
        if lhs.sort != rhs.sort:
            raise SortMismatch(rhs.pos or pos, lhs.sort, rhs.sort)
        return Apply(op, args, Sort.BOOLEAN, pos)

    if op not in _SIGNATURES:
        raise ValueError(f"Unsupported operator: {op}")

    operand_sorts, result = _SIGNATURES[op]
    if len(args) != len(operand_sorts):
        raise ValueError(f"Operator {op} takes {len(operand_sorts)} operands, got {len(args)}")
    for arg, expected in zip(args, operand_sorts):
        if arg.sort != expected:
            raise SortMismatch(arg.pos or pos, expected, arg.sort)
    return Apply(op, args, result, pos)


def negate(expr: Expr) -> Apply:
    return apply_op("not", (expr,), expr.pos)


def walk(expr: Expr) -> Iterator[Expr]:
    """Pre-order traversal of an expression tree."""
    yield expr
    if isinstance(expr, Apply):
        for arg in expr.args:
            yield from walk(arg)


def substitute(expr: Expr, storage: Mapping[str, Expr]) -> Expr:
    """Replace storage references by the given expressions, simultaneously.

    Replacement expressions are inserted as-is; they are not themselves
    rewritten, so `x => x + 1` yields the pre-state `x` inside the result.
    """
    if isinstance(expr, StorageRef):
        return storage.get(expr.name, expr)
    if isinstance(expr, Apply):
        return Apply(expr.op, tuple(substitute(a, storage) for a in expr.args), expr.sort, expr.pos)
    return expr


_PRECEDENCE = {
    "or": 1,
    "and": 2,
    "not": 3,
    "==": 4, "!=": 4, "<": 4, "<=": 4, ">": 4, ">=": 4,
    "+": 5, "-": 5,
    "*": 6, "/": 6, "%": 6,
    "neg": 7,
}
_ATOM = 8


def _precedence(expr: Expr) -> int:
    if isinstance(expr, Apply):
        return _PRECEDENCE[expr.op]
    if isinstance(expr, Lit) and isinstance(expr.value, int) \
            and not isinstance(expr.value, bool) and expr.value < 0:
        return _PRECEDENCE["neg"]
    return _ATOM


def _format_literal(value: Union[int, bool, str]) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def pretty(expr: Expr) -> str:
    """Render an expression in act surface syntax."""
    if isinstance(expr, Lit):
        return _format_literal(expr.value)
    if isinstance(expr, (StorageRef, ParamRef, EnvRef)):
        return expr.name

    prec = _PRECEDENCE[expr.op]
    if expr.op in ("not", "neg"):
        (operand,) = expr.args
        inner = pretty(operand)
        if _precedence(operand) < prec or (expr.op == "neg" and _precedence(operand) == prec):
            inner = f"({inner})"
        return f"not {inner}" if expr.op == "not" else f"-{inner}"

    lhs, rhs = expr.args
    left = pretty(lhs)
    right = pretty(rhs)
    if _precedence(lhs) < prec:
        left = f"({left})"
    if _precedence(rhs) <= prec:
        right = f"({right})"
    return f"{left} {expr.op} {right}"
