"""
Typed expression to SMT-LIBv2 text translation.

Used to render queries for external solvers and for debug output.
Symbols are always emitted quoted (|name|).
"""
from ..claims.expr import Apply, EnvRef, Expr, Lit, ParamRef, StorageRef
from ..claims.sorts import Sort


_OP_MAP = {
    "+": "+",
    "-": "-",
    "*": "*",
    "/": "div",
    "%": "mod",
    "neg": "-",
    "<": "<",
    "<=": "<=",
    ">": ">",
    ">=": ">=",
    "and": "and",
    "or": "or",
    "not": "not",
    "==": "=",
    "!=": "distinct",
}


def quote_symbol(name: str) -> str:
    return f"|{name}|"


def format_int(value: int) -> str:
    return str(value) if value >= 0 else f"(- {-value})"


def format_string(value: str) -> str:
    out = []
    for ch in value:
        if ch == '"':
            out.append('""')
        elif 32 <= ord(ch) <= 126:
            out.append(ch)
        else:
            out.append(f"\\u{{{ord(ch):x}}}")
    return '"' + "".join(out) + '"'


class ExprToSMT2Translator:
    """Translates typed expressions to SMT-LIBv2 terms."""

    def translate(self, expr: Expr) -> str:
        """Translate an expression to an SMT2 term string."""
        if isinstance(expr, Lit):
            return self.translate_literal(expr)
        if isinstance(expr, (StorageRef, ParamRef, EnvRef)):
            return quote_symbol(expr.name)
        if isinstance(expr, Apply):
            if expr.op not in _OP_MAP:
                raise ValueError(f"Unsupported operator: {expr.op}")
            args = " ".join(self.translate(a) for a in expr.args)
            return f"({_OP_MAP[expr.op]} {args})"
        raise NotImplementedError(f"Expression type not supported: {type(expr)}")

    def translate_literal(self, expr: Lit) -> str:
        if expr.sort == Sort.BOOLEAN:
            return "true" if expr.value else "false"
        if expr.sort == Sort.INTEGER:
            return format_int(expr.value)
        return format_string(expr.value)
