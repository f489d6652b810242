"""
Error taxonomy and diagnostic rendering.

Every fatal error raised by the front end, the type checker or the proof
engine derives from ActError. Errors that point at source text carry a Pos;
errors without one are internal and are rendered without source context.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Pos:
    """1-based line/column position in the source text."""
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class ActError(Exception):
    """Base class for all fatal errors.

    Attributes:
        message: Human-readable description
        pos: Source position, or None for internal errors
    """

    def __init__(self, message: str, pos: Optional[Pos] = None):
        self.message = message
        self.pos = pos
        super().__init__(f"{pos}: {message}" if pos is not None else message)


class LexError(ActError):
    """Raised on characters the lexer cannot tokenize."""


class ParseError(ActError):
    """Raised when the token stream does not match the grammar."""


class TypeCheckError(ActError):
    """Base class for errors found while building typed claims."""


class UndeclaredStorageSlot(TypeCheckError):
    def __init__(self, pos: Optional[Pos], name: str):
        self.name = name
        super().__init__(f"Unknown storage variable or name: {name}", pos)


class SortMismatch(TypeCheckError):
    def __init__(self, pos: Optional[Pos], expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Type mismatch: expected {expected}, got {actual}", pos)


class NotBoolean(TypeCheckError):
    def __init__(self, pos: Optional[Pos], actual=None):
        self.actual = actual
        suffix = f", got {actual}" if actual is not None else ""
        super().__init__(f"Expected a boolean expression{suffix}", pos)


class InvariantReferencesCalldata(TypeCheckError):
    def __init__(self, pos: Optional[Pos], name: str):
        self.name = name
        super().__init__(
            f"Invariant refers to calldata variable {name}; "
            "invariants may only mention storage and environment values",
            pos,
        )


class UnknownContract(TypeCheckError):
    def __init__(self, pos: Optional[Pos], name: str):
        self.name = name
        super().__init__(f"No constructor found for contract {name}", pos)


class DuplicateDeclaration(TypeCheckError):
    def __init__(self, pos: Optional[Pos], kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"Duplicate {kind}: {name}", pos)


class UnknownType(TypeCheckError):
    def __init__(self, pos: Optional[Pos], name: str):
        self.name = name
        super().__init__(f"Unknown type: {name}", pos)


class NonLiteralInitializer(TypeCheckError):
    def __init__(self, pos: Optional[Pos], name: str):
        self.name = name
        super().__init__(f"Initial value of {name} must be a literal", pos)


class LiteralOutOfRange(TypeCheckError):
    def __init__(self, pos: Optional[Pos], name: str, value: int, abi_type):
        self.name = name
        self.value = value
        self.abi_type = abi_type
        super().__init__(f"Initial value {value} of {name} is out of range for {abi_type}", pos)


class MalformedBehaviour(TypeCheckError):
    """A behaviour whose blocks do not fit its kind (constructor or method)."""


class ConfigurationError(ActError):
    """Invalid solver or command configuration. Raised before any query runs."""


class EngineError(ActError):
    """A raw solver outcome outside the supported taxonomy."""


def render_error(source: str, err: ActError) -> str:
    """Render a diagnostic the way it is printed on stderr.

    Positioned errors show the offending line prefixed by its number, a caret
    under the offending column and then the message. Errors without a
    position render as an internal error.
    """
    if err.pos is None:
        return f"Internal error\n{err.message}"

    lines = source.splitlines()
    if lines:
        text = lines[min(max(err.pos.line, 1), len(lines)) - 1]
    else:
        text = ""
    prefix = f"{err.pos.line} | "
    caret = " " * (err.pos.column + len(prefix) - 1) + "^"
    return f"{prefix}{text}\n{caret}\n{err.message}"
