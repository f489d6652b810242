"""
Front end: lexer, parser and the untyped syntax tree they produce.
"""

from .tokens import Token, TokenType
from .lexer import Lexer, tokenize
from .parser import Parser, parse
from . import nodes

__all__ = [
    "Token",
    "TokenType",
    "Lexer",
    "tokenize",
    "Parser",
    "parse",
    "nodes",
]
