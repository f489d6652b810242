"""act recursive descent parser.

Transforms the token stream from the lexer into an untyped syntax tree.

Grammar reference (simplified EBNF, NL = one or more line breaks):

    spec        ::= behaviour*
    behaviour   ::= 'behaviour' ID 'of' ID NL
                    'interface' ID '(' [decl (',' decl)*] ')' NL
                    ['iff' NL (expr NL)+]
                    ['creates' NL (ID ID ':=' expr NL)*]
                    ['invariants' NL (expr NL)+]
                    (case+ | [storage] [returns])
    case        ::= 'case' expr ':' NL [storage] [returns]
    storage     ::= 'storage' NL (ID '=>' expr NL)*
    returns     ::= 'returns' expr NL
    decl        ::= ID ID
"""

from __future__ import annotations

from ..errors import ParseError
from .lexer import tokenize
from .nodes import (
    Behaviour,
    BinOp,
    BoolLit,
    CaseBlock,
    Creation,
    Decl,
    Expr,
    IntLit,
    Interface,
    Spec,
    StrLit,
    UnOp,
    Update,
    Var,
)
from .tokens import BLOCK_KEYWORDS, Token, TokenType


_COMPARISON_OPS = {
    TokenType.EQUALS: "==",
    TokenType.NOT_EQUALS: "!=",
    TokenType.LESS_THAN: "<",
    TokenType.LESS_EQUAL: "<=",
    TokenType.GREATER_THAN: ">",
    TokenType.GREATER_EQUAL: ">=",
}

_ADDITIVE_OPS = {
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
}

_MULTIPLICATIVE_OPS = {
    TokenType.STAR: "*",
    TokenType.SLASH: "/",
    TokenType.PERCENT: "%",
}


class Parser:
    """Recursive descent parser for act source.

    Usage::

        spec = Parser(tokenize(source)).parse()
    """

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.pos = 0

    def parse(self) -> Spec:
        """Parse the entire token stream into a Spec."""
        behaviours: list[Behaviour] = []
        self._skip_newlines()
        while not self._at_end():
            behaviours.append(self._parse_behaviour())
            self._skip_newlines()
        return Spec(behaviours=tuple(behaviours))

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def _parse_behaviour(self) -> Behaviour:
        start = self._expect(TokenType.BEHAVIOUR)
        name = self._expect(TokenType.IDENTIFIER).value
        self._expect(TokenType.OF)
        contract = self._expect(TokenType.IDENTIFIER).value
        self._end_of_line()

        interface = self._parse_interface()

        iffs: tuple[Expr, ...] = ()
        if self._check(TokenType.IFF):
            self._advance()
            self._end_of_line()
            iffs = self._parse_expression_block()

        creates = None
        if self._check(TokenType.CREATES):
            self._advance()
            self._end_of_line()
            creates = self._parse_creates_block()

        invariants: tuple[Expr, ...] = ()
        if self._check(TokenType.INVARIANTS):
            self._advance()
            self._end_of_line()
            invariants = self._parse_expression_block()

        cases: list[CaseBlock] = []
        if self._check(TokenType.CASE):
            while self._check(TokenType.CASE):
                cases.append(self._parse_case())
        elif self._check(TokenType.STORAGE) or self._check(TokenType.RETURNS):
            loc = self._current().pos
            updates = self._parse_storage_block() if self._check(TokenType.STORAGE) else ()
            returns = self._parse_returns() if self._check(TokenType.RETURNS) else None
            cases.append(CaseBlock(condition=None, updates=updates, returns=returns, pos=loc))

        if not (self._at_end() or self._check(TokenType.BEHAVIOUR)):
            tok = self._current()
            raise ParseError(
                f"Unexpected {tok.type.name} ({tok.value!r}) in behaviour {name}",
                tok.pos,
            )

        return Behaviour(
            name=name,
            contract=contract,
            interface=interface,
            iffs=iffs,
            cases=tuple(cases),
            creates=creates,
            invariants=invariants,
            pos=start.pos,
        )

    def _parse_interface(self) -> Interface:
        start = self._expect(TokenType.INTERFACE)
        name = self._expect(TokenType.IDENTIFIER).value
        self._expect(TokenType.LPAREN)
        params: list[Decl] = []
        if not self._check(TokenType.RPAREN):
            params.append(self._parse_decl())
            while self._check(TokenType.COMMA):
                self._advance()
                params.append(self._parse_decl())
        self._expect(TokenType.RPAREN)
        self._end_of_line()
        return Interface(name=name, params=tuple(params), pos=start.pos)

    def _parse_decl(self) -> Decl:
        type_tok = self._expect(TokenType.IDENTIFIER)
        name = self._expect(TokenType.IDENTIFIER).value
        return Decl(type_name=type_tok.value, name=name, pos=type_tok.pos)

    def _parse_creates_block(self) -> tuple[Creation, ...]:
        entries: list[Creation] = []
        while self._check(TokenType.IDENTIFIER):
            type_tok = self._advance()
            name = self._expect(TokenType.IDENTIFIER).value
            self._expect(TokenType.DEFINE)
            value = self._parse_expression()
            self._end_of_line()
            entries.append(Creation(type_name=type_tok.value, name=name, value=value,
                                    pos=type_tok.pos))
        return tuple(entries)

    def _parse_case(self) -> CaseBlock:
        start = self._expect(TokenType.CASE)
        condition = self._parse_expression()
        self._expect(TokenType.COLON)
        self._end_of_line()
        updates = self._parse_storage_block() if self._check(TokenType.STORAGE) else ()
        returns = self._parse_returns() if self._check(TokenType.RETURNS) else None
        return CaseBlock(condition=condition, updates=updates, returns=returns, pos=start.pos)

    def _parse_storage_block(self) -> tuple[Update, ...]:
        self._expect(TokenType.STORAGE)
        self._end_of_line()
        updates: list[Update] = []
        while self._check(TokenType.IDENTIFIER):
            slot_tok = self._advance()
            self._expect(TokenType.UPDATE)
            value = self._parse_expression()
            self._end_of_line()
            updates.append(Update(slot=slot_tok.value, value=value, pos=slot_tok.pos))
        return tuple(updates)

    def _parse_returns(self) -> Expr:
        self._expect(TokenType.RETURNS)
        value = self._parse_expression()
        self._end_of_line()
        return value

    def _parse_expression_block(self) -> tuple[Expr, ...]:
        """Parse one expression per line until the next block keyword."""
        exprs: list[Expr] = []
        while not self._at_end() and self._current().type not in BLOCK_KEYWORDS:
            exprs.append(self._parse_expression())
            self._end_of_line()
        if not exprs:
            tok = self._current()
            raise ParseError("Expected at least one expression", tok.pos)
        return tuple(exprs)

    # ------------------------------------------------------------------
    # Expressions (precedence climbing)
    # ------------------------------------------------------------------

    def _parse_expression(self) -> Expr:
        return self._parse_or_expr()

    def _parse_or_expr(self) -> Expr:
        left = self._parse_and_expr()
        while self._check(TokenType.OR):
            op_tok = self._advance()
            right = self._parse_and_expr()
            left = BinOp(op="or", left=left, right=right, pos=op_tok.pos)
        return left

    def _parse_and_expr(self) -> Expr:
        left = self._parse_not_expr()
        while self._check(TokenType.AND):
            op_tok = self._advance()
            right = self._parse_not_expr()
            left = BinOp(op="and", left=left, right=right, pos=op_tok.pos)
        return left

    def _parse_not_expr(self) -> Expr:
        if self._check(TokenType.NOT):
            op_tok = self._advance()
            operand = self._parse_not_expr()
            return UnOp(op="not", operand=operand, pos=op_tok.pos)
        return self._parse_comparison()

    def _parse_comparison(self) -> Expr:
        left = self._parse_binary_level(_ADDITIVE_OPS, self._parse_multiplicative)
        while self._current().type in _COMPARISON_OPS:
            op_tok = self._advance()
            right = self._parse_binary_level(_ADDITIVE_OPS, self._parse_multiplicative)
            left = BinOp(op=_COMPARISON_OPS[op_tok.type], left=left, right=right, pos=op_tok.pos)
        return left

    def _parse_multiplicative(self) -> Expr:
        return self._parse_binary_level(_MULTIPLICATIVE_OPS, self._parse_unary)

    def _parse_binary_level(self, ops: dict, operand_parser) -> Expr:
        left = operand_parser()
        while self._current().type in ops:
            op_tok = self._advance()
            right = operand_parser()
            left = BinOp(op=ops[op_tok.type], left=left, right=right, pos=op_tok.pos)
        return left

    def _parse_unary(self) -> Expr:
        if self._check(TokenType.MINUS):
            op_tok = self._advance()
            operand = self._parse_unary()
            return UnOp(op="-", operand=operand, pos=op_tok.pos)
        return self._parse_primary()

    def _parse_primary(self) -> Expr:
        tok = self._current()

        if tok.type == TokenType.INTEGER:
            self._advance()
            return IntLit(value=int(tok.value), pos=tok.pos)

        if tok.type == TokenType.STRING:
            self._advance()
            return StrLit(value=tok.value, pos=tok.pos)

        if tok.type in (TokenType.TRUE, TokenType.FALSE):
            self._advance()
            return BoolLit(value=tok.type == TokenType.TRUE, pos=tok.pos)

        if tok.type == TokenType.IDENTIFIER:
            self._advance()
            return Var(name=tok.value, pos=tok.pos)

        if tok.type == TokenType.LPAREN:
            self._advance()
            expr = self._parse_expression()
            self._expect(TokenType.RPAREN)
            return expr

        raise ParseError(f"Expected expression, got {tok.type.name} ({tok.value!r})", tok.pos)

    # ------------------------------------------------------------------
    # Token stream helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        if self.pos >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        tok = self._current()
        self.pos += 1
        return tok

    def _check(self, token_type: TokenType) -> bool:
        return self._current().type == token_type

    def _expect(self, token_type: TokenType) -> Token:
        tok = self._current()
        if tok.type != token_type:
            raise ParseError(
                f"Expected {token_type.name}, got {tok.type.name} ({tok.value!r})",
                tok.pos,
            )
        return self._advance()

    def _end_of_line(self) -> None:
        if self._check(TokenType.NEWLINE):
            self._advance()
        elif not self._at_end():
            tok = self._current()
            raise ParseError(f"Expected end of line, got {tok.type.name} ({tok.value!r})", tok.pos)

    def _skip_newlines(self) -> None:
        while self._check(TokenType.NEWLINE):
            self._advance()

    def _at_end(self) -> bool:
        return self._current().type == TokenType.EOF


def parse(source: str) -> Spec:
    """Lex and parse act source text."""
    return Parser(tokenize(source)).parse()
