"""
Typed expression to Z3 translation.

Used by the in-process z3 backend: every node of a sort-checked expression
maps onto the corresponding Z3 term.
"""
from typing import Any, Dict, Mapping
import z3

from ..claims.expr import Apply, EnvRef, Expr, Lit, ParamRef, StorageRef
from ..claims.sorts import Sort
from .type_translator import TypeTranslator


class ExprToZ3Translator:
    """Translates typed expressions to Z3 terms.

    Storage, parameter and environment references are looked up by name in
    the constant table passed to translate().
    """

    def __init__(self, type_translator: TypeTranslator = None):
        self.type_translator = type_translator or TypeTranslator()

    def declare_all(self, symbols) -> Dict[str, Any]:
        """Declare one Z3 constant per query symbol.

        Args:
            symbols: Iterable of query Symbols

        Returns:
            Mapping from symbol name to Z3 constant
        """
        return {s.name: self.type_translator.declare(s.name, s.sort) for s in symbols}

    def translate(self, expr: Expr, constants: Mapping[str, Any]) -> Any:
        """Translate an expression to a Z3 term.

        Args:
            expr: Typed expression
            constants: Mapping from symbol name to Z3 constant

        Returns:
            Z3 expression
        """
        if isinstance(expr, Lit):
            return self.translate_literal(expr)
        if isinstance(expr, (StorageRef, ParamRef, EnvRef)):
            if expr.name not in constants:
                raise ValueError(f"Undeclared symbol: {expr.name}")
            return constants[expr.name]
        if isinstance(expr, Apply):
            args = [self.translate(a, constants) for a in expr.args]
            return self.translate_op(expr.op, args)
        raise NotImplementedError(f"Expression type not supported: {type(expr)}")

    def translate_literal(self, expr: Lit) -> Any:
        if expr.sort == Sort.BOOLEAN:
            return z3.BoolVal(expr.value)
        if expr.sort == Sort.INTEGER:
            return z3.IntVal(expr.value)
        return z3.StringVal(expr.value)

    def translate_op(self, op: str, args) -> Any:
        if op == "and":
            return z3.And(*args)
        if op == "or":
            return z3.Or(*args)
        if op == "not":
            return z3.Not(args[0])
        if op == "neg":
            return -args[0]

        lhs, rhs = args
        if op == "+":
            return lhs + rhs
        if op == "-":
            return lhs - rhs
        if op == "*":
            return lhs * rhs
        if op == "/":
            # Integer division on Int terms
            return lhs / rhs
        if op == "%":
            return lhs % rhs
        if op == "<":
            return lhs < rhs
        if op == "<=":
            return lhs <= rhs
        if op == ">":
            return lhs > rhs
        if op == ">=":
            return lhs >= rhs
        if op == "==":
            return lhs == rhs
        if op == "!=":
            return lhs != rhs
        raise ValueError(f"Unsupported operator: {op}")
