"""act lexer: hand-written tokenizer.

- Line breaks are significant: they end storage entries, invariants and
  conditions. Runs of blank lines collapse into one NEWLINE token and no
  NEWLINE is emitted inside parentheses.
- Comments (// ...) are discarded.
- Produces a flat token stream consumed by the parser.
"""

from __future__ import annotations

from ..errors import LexError, Pos
from .tokens import KEYWORDS, Token, TokenType


_TWO_CHAR_TOKENS = {
    "=>": TokenType.UPDATE,
    ":=": TokenType.DEFINE,
    "==": TokenType.EQUALS,
    "!=": TokenType.NOT_EQUALS,
    "<=": TokenType.LESS_EQUAL,
    ">=": TokenType.GREATER_EQUAL,
}

_SINGLE_CHAR_TOKENS = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "%": TokenType.PERCENT,
    "<": TokenType.LESS_THAN,
    ">": TokenType.GREATER_THAN,
}


class Lexer:
    """Tokenizes act source into a list of Token objects.

    Usage::

        tokens = Lexer(source_text).tokenize()
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.depth = 0
        self.tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Tokenize the entire source and return the token list."""
        self.tokens = []
        self.pos = 0
        self.line = 1
        self.column = 1
        self.depth = 0

        while not self._at_end():
            ch = self._peek()
            if ch == "\n":
                self._newline()
                self._advance()
            elif ch in " \t\r":
                self._advance()
            elif ch == "/" and self._peek_ahead(1) == "/":
                self._skip_comment()
            else:
                self._scan_token()

        self.tokens.append(Token(TokenType.EOF, "", self.line, self.column))
        return self.tokens

    def _newline(self) -> None:
        if self.depth > 0 or not self.tokens:
            return
        if self.tokens[-1].type == TokenType.NEWLINE:
            return
        self.tokens.append(Token(TokenType.NEWLINE, "\n", self.line, self.column))

    def _scan_token(self) -> None:
        ch = self._peek()

        if ch == '"':
            self._scan_string()
            return

        if ch.isdigit():
            self._scan_number()
            return

        if ch.isalpha() or ch == "_":
            self._scan_identifier()
            return

        # act's native inequality operator
        if self.source.startswith("=/=", self.pos):
            self._emit(TokenType.NOT_EQUALS, "=/=")
            return

        two = self.source[self.pos:self.pos + 2]
        if two in _TWO_CHAR_TOKENS:
            self._emit(_TWO_CHAR_TOKENS[two], two)
            return

        if ch in _SINGLE_CHAR_TOKENS:
            token_type = _SINGLE_CHAR_TOKENS[ch]
            if token_type == TokenType.LPAREN:
                self.depth += 1
            elif token_type == TokenType.RPAREN:
                self.depth = max(0, self.depth - 1)
            self._emit(token_type, ch)
            return

        raise LexError(f"Unexpected character: {ch!r}", Pos(self.line, self.column))

    def _emit(self, token_type: TokenType, text: str) -> None:
        self.tokens.append(Token(token_type, text, self.line, self.column))
        for _ in text:
            self._advance()

    def _scan_string(self) -> None:
        start = Pos(self.line, self.column)
        self._advance()
        chars: list[str] = []

        while not self._at_end() and self._peek() != '"':
            if self._peek() == "\n":
                raise LexError("Unterminated string literal", start)
            if self._peek() == "\\":
                self._advance()
                if self._at_end():
                    break
                escaped = self._peek()
                chars.append({"n": "\n", "t": "\t"}.get(escaped, escaped))
            else:
                chars.append(self._peek())
            self._advance()

        if self._at_end():
            raise LexError("Unterminated string literal", start)

        self._advance()
        self.tokens.append(Token(TokenType.STRING, "".join(chars), start.line, start.column))

    def _scan_number(self) -> None:
        start_col = self.column
        digits: list[str] = []
        while not self._at_end() and self._peek().isdigit():
            digits.append(self._advance())
        if not self._at_end() and (self._peek().isalpha() or self._peek() == "_"):
            raise LexError(f"Malformed number literal near {self._peek()!r}",
                           Pos(self.line, self.column))
        self.tokens.append(Token(TokenType.INTEGER, "".join(digits), self.line, start_col))

    def _scan_identifier(self) -> None:
        start_col = self.column
        chars: list[str] = []
        while not self._at_end() and (self._peek().isalnum() or self._peek() == "_"):
            chars.append(self._advance())
        word = "".join(chars)
        token_type = KEYWORDS.get(word, TokenType.IDENTIFIER)
        self.tokens.append(Token(token_type, word, self.line, start_col))

    def _skip_comment(self) -> None:
        while not self._at_end() and self._peek() != "\n":
            self._advance()

    def _peek(self) -> str:
        return self.source[self.pos]

    def _peek_ahead(self, offset: int) -> str | None:
        idx = self.pos + offset
        if idx >= len(self.source):
            return None
        return self.source[idx]

    def _advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def _at_end(self) -> bool:
        return self.pos >= len(self.source)


def tokenize(source: str) -> list[Token]:
    """Convenience wrapper around Lexer(source).tokenize()."""
    return Lexer(source).tokenize()
