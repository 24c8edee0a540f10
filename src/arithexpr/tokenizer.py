"""
Tokenizer (lexer) for arithmetic expressions.

Scans an expression string into tokens on demand. The tokenizer never
raises on bad input: an unrecognized character becomes an ERROR token and
the parser decides how to report it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional

from .limits import ExpressionLimits, check_expression_length


class TokenType(Enum):
    """Token types produced by the tokenizer."""

    # Special
    ERROR = "ERROR"
    EOF = "EOF"

    # Literals
    NUMBER = "NUMBER"

    # Identifiers (scanned, not evaluated)
    IDENTIFIER = "IDENTIFIER"

    # Operators
    PLUS = "PLUS"
    MINUS = "MINUS"
    STAR = "STAR"
    SLASH = "SLASH"
    CARET = "CARET"

    # Delimiters
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"


@dataclass(frozen=True)
class Token:
    """A token produced by the tokenizer."""

    type: TokenType
    value: str
    position: int

    @property
    def length(self) -> int:
        return len(self.value)


SINGLE_CHAR_TOKENS: Dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "^": TokenType.CARET,
}


def _is_digit(ch: str) -> bool:
    """Checks if a character is a digit."""
    return "0" <= ch <= "9"


def _is_identifier_start(ch: str) -> bool:
    """Checks if a character can start an identifier."""
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_"


def _is_identifier_part(ch: str) -> bool:
    """Checks if a character can continue an identifier."""
    return _is_identifier_start(ch) or _is_digit(ch)


def _is_whitespace(ch: str) -> bool:
    """Checks if a character is whitespace."""
    return ch in (" ", "\t", "\n", "\r")


class Tokenizer:
    """Lazy tokenizer for expression strings."""

    def __init__(self, source: str):
        self._source = source
        self._start = 0
        self._position = 0

    @property
    def source(self) -> str:
        return self._source

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def next_token(self) -> Token:
        """Scans and returns the next token, advancing past it."""
        while _is_whitespace(self._peek()):
            self._advance()

        self._start = self._position

        if self._is_at_end():
            return self._make_token(TokenType.EOF)

        ch = self._advance()

        if _is_digit(ch):
            return self._scan_number()

        if _is_identifier_start(ch):
            return self._scan_identifier()

        token_type = SINGLE_CHAR_TOKENS.get(ch, TokenType.ERROR)
        return self._make_token(token_type)

    def _is_at_end(self) -> bool:
        return self._position >= len(self._source)

    def _peek(self) -> str:
        if self._is_at_end():
            return "\0"
        return self._source[self._position]

    def _advance(self) -> str:
        ch = self._source[self._position]
        self._position += 1
        return ch

    def _make_token(self, token_type: TokenType) -> Token:
        return Token(token_type, self._source[self._start : self._position], self._start)

    def _scan_number(self) -> Token:
        # Integer part (first digit already consumed)
        while _is_digit(self._peek()):
            self._advance()

        # Fractional part; a second '.' is left for the next token
        if self._peek() == ".":
            self._advance()
            while _is_digit(self._peek()):
                self._advance()

        return self._make_token(TokenType.NUMBER)

    def _scan_identifier(self) -> Token:
        while _is_identifier_part(self._peek()):
            self._advance()

        return self._make_token(TokenType.IDENTIFIER)


def tokenize(source: str, limits: Optional[ExpressionLimits] = None) -> List[Token]:
    """
    Tokenizes an expression string into tokens.

    Args:
        source: The expression string to tokenize
        limits: Optional expression limits

    Returns:
        List of tokens, ending with an EOF token. Unrecognized characters
        appear as ERROR tokens.

    Raises:
        LimitExceededError: If the expression is too long
    """
    check_expression_length(source, limits)
    return list(Tokenizer(source))
