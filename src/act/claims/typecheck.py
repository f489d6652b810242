"""
Type checking: untyped syntax tree -> typed claims.

The checker is fail-fast: the first problem found is raised as a positioned
TypeCheckError and nothing is returned.
"""
import logging
from typing import AbstractSet, Dict, List, Mapping, Optional, Tuple

from ..errors import (
    DuplicateDeclaration,
    InvariantReferencesCalldata,
    LiteralOutOfRange,
    MalformedBehaviour,
    NonLiteralInitializer,
    NotBoolean,
    Pos,
    SortMismatch,
    UndeclaredStorageSlot,
    UnknownContract,
    UnknownType,
)
from ..syntax import nodes
from .expr import TRUE, EnvRef, Expr, Lit, ParamRef, StorageRef, apply_op, lit
from .model import (
    Behaviour,
    Case,
    Claims,
    Constructor,
    Contract,
    Interface,
    Invariant,
    Param,
    Slot,
    StorageUpdate,
)
from .sorts import ENVIRONMENT, AbiType, Sort, parse_abi_type

logger = logging.getLogger(__name__)


class Scope:
    """Names visible while checking one expression.

    Attributes:
        storage: Declared slots of the owning contract
        params: Call parameters in scope (empty for invariants)
        calldata: Parameter names that exist in the contract but may not be
            referenced here
    """

    def __init__(self,
                 storage: Mapping[str, Slot],
                 params: Optional[Mapping[str, Param]] = None,
                 calldata: AbstractSet[str] = frozenset()):
        self.storage = storage
        self.params = params or {}
        self.calldata = calldata

    def resolve(self, var: nodes.Var) -> Expr:
        if var.name in self.storage:
            return StorageRef(var.name, self.storage[var.name].sort, var.pos)
        if var.name in self.params:
            return ParamRef(var.name, self.params[var.name].sort, var.pos)
        if var.name in ENVIRONMENT:
            return EnvRef(var.name, ENVIRONMENT[var.name].sort, var.pos)
        if var.name in self.calldata:
            raise InvariantReferencesCalldata(var.pos, var.name)
        raise UndeclaredStorageSlot(var.pos, var.name)


def check_expr(expr: nodes.Expr, scope: Scope) -> Expr:
    """Type an untyped expression in the given scope."""
    if isinstance(expr, nodes.IntLit):
        return lit(expr.value, expr.pos)
    if isinstance(expr, nodes.BoolLit):
        return lit(expr.value, expr.pos)
    if isinstance(expr, nodes.StrLit):
        return lit(expr.value, expr.pos)
    if isinstance(expr, nodes.Var):
        return scope.resolve(expr)
    if isinstance(expr, nodes.UnOp):
        operand = check_expr(expr.operand, scope)
        if expr.op == "not":
            return apply_op("not", (operand,), expr.pos)
        if expr.op == "-":
            if isinstance(operand, Lit) and operand.sort == Sort.INTEGER:
                return Lit(-operand.value, Sort.INTEGER, expr.pos)
            return apply_op("neg", (operand,), expr.pos)
        raise ValueError(f"Unsupported unary operator: {expr.op}")
    if isinstance(expr, nodes.BinOp):
        lhs = check_expr(expr.left, scope)
        rhs = check_expr(expr.right, scope)
        return apply_op(expr.op, (lhs, rhs), expr.pos)
    raise TypeError(f"Expected expression node, got {type(expr)}")


def check_condition(expr: nodes.Expr, scope: Scope) -> Expr:
    """Type an expression that must be Boolean."""
    typed = check_expr(expr, scope)
    if typed.sort != Sort.BOOLEAN:
        raise NotBoolean(expr.pos, typed.sort)
    return typed


def _is_literal(expr: nodes.Expr) -> bool:
    if isinstance(expr, (nodes.IntLit, nodes.BoolLit, nodes.StrLit)):
        return True
    return isinstance(expr, nodes.UnOp) and expr.op == "-" and isinstance(expr.operand, nodes.IntLit)


def _resolve_type(name: str, pos: Optional[Pos]) -> AbiType:
    abi_type = parse_abi_type(name)
    if abi_type is None:
        raise UnknownType(pos, name)
    return abi_type


def _check_interface(iface: nodes.Interface) -> Interface:
    params: Dict[str, Param] = {}
    for decl in iface.params:
        if decl.name in params:
            raise DuplicateDeclaration(decl.pos, "parameter", decl.name)
        params[decl.name] = Param(decl.name, _resolve_type(decl.type_name, decl.pos))
    return Interface(iface.name, tuple(params.values()))


def _check_shadowing(iface: nodes.Interface, storage: Mapping[str, Slot]):
    for decl in iface.params:
        if decl.name in storage:
            raise DuplicateDeclaration(decl.pos, "name (parameter shadows storage)", decl.name)


class _ContractHeader:
    """A checked constructor with the storage and invariants it declares."""

    def __init__(self,
                 storage: Dict[str, Slot],
                 constructor: Constructor,
                 invariants: Tuple[Invariant, ...]):
        self.storage = storage
        self.constructor = constructor
        self.invariants = invariants
        self.behaviours: List[Behaviour] = []


class TypeChecker:
    """Builds Claims from a parsed Spec.

    Behaviours are visited in source order. A contract's constructor, and
    with it the invariants, is checked when the first behaviour of that
    contract is reached, so the error raised is the first one in the text
    as long as constructors precede their behaviours.
    """

    def check(self, spec: nodes.Spec) -> Claims:
        constructors: Dict[str, nodes.Behaviour] = {}
        methods: Dict[str, List[nodes.Behaviour]] = {}
        for behv in spec.behaviours:
            if behv.is_constructor:
                constructors.setdefault(behv.contract, behv)
            else:
                methods.setdefault(behv.contract, []).append(behv)

        headers: Dict[str, _ContractHeader] = {}
        for behv in spec.behaviours:
            if behv.is_constructor and constructors[behv.contract] is not behv:
                raise DuplicateDeclaration(behv.pos, "constructor for contract", behv.contract)
            if behv.contract not in constructors:
                raise UnknownContract(behv.pos, behv.contract)

            header = headers.get(behv.contract)
            if header is None:
                header = self._check_header(constructors[behv.contract],
                                            methods.get(behv.contract, []))
                headers[behv.contract] = header
            if behv.is_constructor:
                continue

            if any(b.name == behv.name for b in header.behaviours):
                raise DuplicateDeclaration(behv.pos, "behaviour", behv.name)
            header.behaviours.append(self._check_behaviour(behv, header.storage))

        contracts = tuple(
            Contract(
                name=name,
                storage=tuple(headers[name].storage.values()),
                constructor=headers[name].constructor,
                behaviours=tuple(headers[name].behaviours),
                invariants=headers[name].invariants,
            )
            for name in constructors
        )
        logger.debug("typechecked %d contract(s)", len(contracts))
        return Claims(contracts)

    def _check_header(self,
                      ctor: nodes.Behaviour,
                      methods: List[nodes.Behaviour]) -> _ContractHeader:
        storage, constructor = self._check_constructor(ctor)

        calldata = {d.name for d in ctor.interface.params}
        for behv in methods:
            calldata.update(d.name for d in behv.interface.params)
        calldata -= set(storage)

        inv_scope = Scope(storage, calldata=frozenset(calldata))
        invariants = tuple(
            Invariant(ctor.contract, check_condition(e, inv_scope), e.pos) for e in ctor.invariants
        )
        return _ContractHeader(storage, constructor, invariants)

    def _check_constructor(self, ctor: nodes.Behaviour) -> Tuple[Dict[str, Slot], Constructor]:
        if ctor.creates is None:
            raise MalformedBehaviour(
                f"Constructor of {ctor.contract} has no creates block", ctor.pos)

        interface = _check_interface(ctor.interface)
        params = {p.name: p for p in interface.params}
        iff = tuple(check_condition(e, Scope({}, params)) for e in ctor.iffs)

        storage: Dict[str, Slot] = {}
        initial: List[Tuple[str, Lit]] = []
        for creation in ctor.creates:
            if creation.name in storage:
                raise DuplicateDeclaration(creation.pos, "storage variable", creation.name)
            abi_type = _resolve_type(creation.type_name, creation.pos)
            if not _is_literal(creation.value):
                raise NonLiteralInitializer(creation.value.pos or creation.pos, creation.name)
            value = check_expr(creation.value, Scope({}))
            if value.sort != abi_type.sort:
                raise SortMismatch(creation.pos, abi_type.sort, value.sort)
            if abi_type.bounds is not None:
                lo, hi = abi_type.bounds
                if not lo <= value.value <= hi:
                    raise LiteralOutOfRange(value.pos or creation.pos,
                                            creation.name, value.value, abi_type)
            storage[creation.name] = Slot(creation.name, abi_type)
            initial.append((creation.name, value))

        if ctor.cases:
            raise MalformedBehaviour(
                "Constructor cannot update storage; use a creates block", ctor.cases[0].pos)
        _check_shadowing(ctor.interface, storage)
        return storage, Constructor(ctor.name, interface, tuple(initial), iff, ctor.pos)

    def _check_behaviour(self, behv: nodes.Behaviour, storage: Mapping[str, Slot]) -> Behaviour:
        if behv.creates is not None:
            raise MalformedBehaviour(
                f"Only a constructor may have a creates block (behaviour {behv.name})", behv.pos)
        if behv.invariants:
            raise MalformedBehaviour(
                f"Invariants belong to the constructor (behaviour {behv.name})",
                behv.invariants[0].pos)

        interface = _check_interface(behv.interface)
        _check_shadowing(behv.interface, storage)
        scope = Scope(storage, {p.name: p for p in interface.params})
        iff = tuple(check_condition(e, scope) for e in behv.iffs)

        cases = tuple(self._check_case(c, scope) for c in behv.cases)
        if not cases:
            cases = (Case(pos=behv.pos),)
        return Behaviour(behv.name, behv.contract, interface, cases, iff, behv.pos)

    def _check_case(self, case: nodes.CaseBlock, scope: Scope) -> Case:
        precondition = TRUE if case.condition is None else check_condition(case.condition, scope)

        updates: List[StorageUpdate] = []
        assigned = set()
        for update in case.updates:
            slot = scope.storage.get(update.slot)
            if slot is None:
                raise UndeclaredStorageSlot(update.pos, update.slot)
            if update.slot in assigned:
                raise DuplicateDeclaration(update.pos, "storage update", update.slot)
            assigned.add(update.slot)
            value = check_expr(update.value, scope)
            if value.sort != slot.sort:
                raise SortMismatch(update.pos, slot.sort, value.sort)
            updates.append(StorageUpdate(update.slot, value, update.pos))

        returns = None if case.returns is None else check_expr(case.returns, scope)
        return Case(precondition, tuple(updates), returns, case.pos)


def typecheck(spec: nodes.Spec) -> Claims:
    """Type check a parsed specification.

    Raises:
        TypeCheckError: On the first ill-typed or unresolved construct
    """
    return TypeChecker().check(spec)
