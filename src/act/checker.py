"""
Main API for checking act specifications.

Provides high-level functions that take source text through lexing, parsing,
type checking and invariant proving.
"""
from typing import List, Optional

from .claims import Claims, typecheck
from .solver import SolverConfig
from .syntax import Token, nodes, parse, tokenize
from .verification import InvariantVerdict, prove_claims


def lex_source(source: str) -> List[Token]:
    """Tokenize source text.

    Raises:
        LexError: On a character that starts no token
    """
    return tokenize(source)


def parse_source(source: str) -> nodes.Spec:
    """Parse source text into an untyped syntax tree.

    Raises:
        LexError, ParseError: On malformed input
    """
    return parse(source)


def typecheck_source(source: str) -> Claims:
    """Parse and type check source text.

    Args:
        source: Specification text

    Returns:
        Typed claims for every contract in the source

    Raises:
        LexError, ParseError: On malformed input
        TypeCheckError: On the first ill-typed construct

    Example:
        >>> claims = typecheck_source(open("token.act").read())
        >>> [c.name for c in claims.contracts]
        ['Token']
    """
    return typecheck(parse(source))


def prove_source(source: str, config: Optional[SolverConfig] = None) -> List[InvariantVerdict]:
    """Parse, type check and prove every invariant of source text.

    The solver configuration is validated before anything else, so a bad
    configuration fails without reading the source.

    Args:
        source: Specification text
        config: Solver configuration (z3 with the default timeout if omitted)

    Returns:
        One verdict per invariant, in declaration order

    Raises:
        ConfigurationError: On an invalid configuration, before any query
        LexError, ParseError, TypeCheckError: On a malformed specification
        EngineError: On an unclassifiable solver answer
    """
    config = (config or SolverConfig()).validate()
    return prove_claims(typecheck_source(source), config)
