"""Token types and Token dataclass for the act lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from ..errors import Pos


class TokenType(Enum):
    """Every distinct token the lexer can produce."""

    # Structure
    NEWLINE = auto()
    EOF = auto()

    # Literals
    INTEGER = auto()
    STRING = auto()
    TRUE = auto()
    FALSE = auto()

    # Identifiers & punctuation
    IDENTIFIER = auto()
    LPAREN = auto()
    RPAREN = auto()
    COMMA = auto()
    COLON = auto()
    UPDATE = auto()         # =>
    DEFINE = auto()         # :=

    # Comparison / arithmetic
    EQUALS = auto()         # ==
    NOT_EQUALS = auto()     # =/= or !=
    LESS_THAN = auto()
    LESS_EQUAL = auto()
    GREATER_THAN = auto()
    GREATER_EQUAL = auto()
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    PERCENT = auto()

    # Keywords: blocks
    BEHAVIOUR = auto()
    OF = auto()
    INTERFACE = auto()
    IFF = auto()
    CASE = auto()
    STORAGE = auto()
    CREATES = auto()
    INVARIANTS = auto()
    RETURNS = auto()

    # Keywords: boolean connectives
    AND = auto()
    OR = auto()
    NOT = auto()


KEYWORDS: dict[str, TokenType] = {
    "behaviour": TokenType.BEHAVIOUR,
    "of": TokenType.OF,
    "interface": TokenType.INTERFACE,
    "iff": TokenType.IFF,
    "case": TokenType.CASE,
    "storage": TokenType.STORAGE,
    "creates": TokenType.CREATES,
    "invariants": TokenType.INVARIANTS,
    "returns": TokenType.RETURNS,
    "and": TokenType.AND,
    "or": TokenType.OR,
    "not": TokenType.NOT,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
}

# Keywords that open a new block and therefore end the current one.
BLOCK_KEYWORDS: frozenset[TokenType] = frozenset({
    TokenType.BEHAVIOUR,
    TokenType.INTERFACE,
    TokenType.IFF,
    TokenType.CASE,
    TokenType.STORAGE,
    TokenType.CREATES,
    TokenType.INVARIANTS,
    TokenType.RETURNS,
})


@dataclass(frozen=True)
class Token:
    """A single token produced by the lexer."""

    type: TokenType
    value: str
    line: int
    column: int

    @property
    def pos(self) -> Pos:
        return Pos(self.line, self.column)

    def __repr__(self) -> str:
        if self.type in (TokenType.NEWLINE, TokenType.EOF):
            return f"Token({self.type.name}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
