"""
Parser for arithmetic expressions.

Pulls tokens from the tokenizer on demand and builds an Abstract Syntax
Tree (AST) using precedence climbing.

Precedence (lowest to highest):
1. Additive: +, -
2. Multiplication: *
3. Division: /
4. Power: ^

All binary operators are left-associative, including ``^``:
``2^3^2`` is ``(2^3)^2``. Unary ``+``/``-`` apply to the prefix operand
only, so ``-2^2`` is ``(-2)^2``.

Juxtaposed operands are multiplied: ``2(3)`` is ``2*3``. The right-hand
side of an implicit multiplication binds tighter than ``/`` but looser than
``^``, so ``2(3)^2`` is ``2*(3^2)``. Chains associate to the left:
``2(3)(4)`` is ``(2*3)*4``.
"""

import logging
from enum import IntEnum
from typing import Dict, Optional

from .ast import (
    AstNode,
    BinaryOperator,
    BinaryOpNode,
    ErrorNode,
    NumberLiteralNode,
    UnaryOpNode,
    count_ast_nodes,
)
from .errors import (
    MalformedExpressionError,
    UnbalancedParenthesisError,
    UnexpectedCharacterError,
)
from .limits import (
    DEFAULT_EXPRESSION_LIMITS,
    ExpressionLimits,
    check_ast_node_count,
    check_expression_length,
    check_nesting_depth,
)
from .tokenizer import Token, Tokenizer, TokenType

logger = logging.getLogger(__name__)


class Precedence(IntEnum):
    """Binding power of binary operators."""

    MIN = 0
    TERM = 1
    MUL = 2
    DIV = 3
    POW = 4


BINARY_PRECEDENCE: Dict[TokenType, Precedence] = {
    TokenType.PLUS: Precedence.TERM,
    TokenType.MINUS: Precedence.TERM,
    TokenType.STAR: Precedence.MUL,
    TokenType.SLASH: Precedence.DIV,
    TokenType.CARET: Precedence.POW,
}

BINARY_OPERATORS: Dict[TokenType, BinaryOperator] = {
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
    TokenType.STAR: "*",
    TokenType.SLASH: "/",
    TokenType.CARET: "^",
}

# Tokens that start an operand right after another operand
IMPLICIT_MULTIPLICATION_STARTERS = (TokenType.NUMBER, TokenType.LPAREN)


class Parser:
    """Parser for expression strings."""

    def __init__(
        self,
        source: str,
        limits: ExpressionLimits = DEFAULT_EXPRESSION_LIMITS,
        allow_unclosed_parentheses: bool = False,
    ):
        self._source = source
        self._limits = limits
        self._allow_unclosed_parentheses = allow_unclosed_parentheses
        self._tokenizer = Tokenizer(source)
        self._current: Token
        self._depth = 0

    def parse(self) -> AstNode:
        """Parses the whole source into an AST."""
        check_expression_length(self._source, self._limits)

        self._advance()
        ast = self._parse_expression(Precedence.MIN)

        token = self._peek()
        if token.type == TokenType.RPAREN:
            raise MalformedExpressionError(
                "Unmatched ')'", token.position, self._source
            )
        if token.type != TokenType.EOF:
            raise MalformedExpressionError(
                f"Unexpected token: {token.value}", token.position, self._source
            )

        # Validate AST size
        node_count = count_ast_nodes(ast)
        check_ast_node_count(node_count, self._limits)

        logger.debug(
            "expression_parsed",
            extra={"node_count": node_count},
        )
        return ast

    # ============================================================
    # Token Helpers
    # ============================================================

    def _peek(self) -> Token:
        return self._current

    def _advance(self) -> None:
        token = self._tokenizer.next_token()
        if token.type == TokenType.ERROR:
            raise UnexpectedCharacterError(token.value, token.position, self._source)
        self._current = token

    def _check(self, *types: TokenType) -> bool:
        return self._peek().type in types

    # ============================================================
    # Expression Parsing
    # ============================================================

    def _parse_expression(
        self, min_precedence: Precedence, left: Optional[AstNode] = None
    ) -> AstNode:
        """Parses operators binding tighter than ``min_precedence``.

        ``left`` is an already parsed first operand; when omitted the
        expression starts with a full prefix.
        """
        if left is None:
            left = self._parse_prefix()

        while True:
            operator = self._peek()
            precedence = BINARY_PRECEDENCE.get(operator.type)
            if precedence is None or precedence <= min_precedence:
                break

            self._advance()
            right = self._parse_expression(precedence)
            left = BinaryOpNode(
                position=operator.position,
                operator=BINARY_OPERATORS[operator.type],
                left=left,
                right=right,
            )

        return left

    def _parse_prefix(self) -> AstNode:
        """Parses an operand followed by any juxtaposed operands.

        ``2(3)(4)`` becomes ``(2*3)*4``. Each juxtaposed operand takes the
        operators binding tighter than ``/`` with it, so ``2(3)^2`` is
        ``2*(3^2)`` and ``2(6)/3`` is ``(2*6)/3``.
        """
        self._depth += 1
        try:
            check_nesting_depth(self._depth, self._limits)

            node = self._parse_operand()

            while self._check(*IMPLICIT_MULTIPLICATION_STARTERS):
                position = self._peek().position
                right = self._parse_expression(Precedence.DIV, self._parse_operand())
                node = BinaryOpNode(
                    position=position,
                    operator="*",
                    left=node,
                    right=right,
                    implicit=True,
                )

            return node
        finally:
            self._depth -= 1

    def _parse_operand(self) -> AstNode:
        token = self._peek()
        position = token.position

        if token.type == TokenType.NUMBER:
            self._advance()
            return NumberLiteralNode(position=position, value=float(token.value))

        if token.type == TokenType.LPAREN:
            self._advance()
            expr = self._parse_expression(Precedence.MIN)
            if self._check(TokenType.RPAREN):
                self._advance()
            elif not self._allow_unclosed_parentheses:
                raise UnbalancedParenthesisError(
                    f"Expected ')' to close '(' at position {position}",
                    self._peek().position,
                    self._source,
                )
            return expr

        if token.type in (TokenType.PLUS, TokenType.MINUS):
            self._advance()
            operand = self._parse_prefix()
            return UnaryOpNode(
                position=position,
                operator="+" if token.type == TokenType.PLUS else "-",
                operand=operand,
            )

        # Not an operand; the evaluator rejects this node
        return ErrorNode(position=position, found=token.value)


def parse(
    source: str,
    limits: ExpressionLimits = DEFAULT_EXPRESSION_LIMITS,
    allow_unclosed_parentheses: bool = False,
) -> AstNode:
    """
    Parses an expression string into an AST.

    Args:
        source: The expression string to parse
        limits: Optional expression limits
        allow_unclosed_parentheses: Accept input such as ``(2+3`` whose
            opening parentheses are never closed

    Returns:
        The parsed AST. Positions where no operand could be parsed are
        represented by ErrorNode.

    Raises:
        UnexpectedCharacterError: If the source contains an unknown character
        UnbalancedParenthesisError: If a '(' is never closed
        MalformedExpressionError: If tokens remain after the expression
        LimitExceededError: If the expression exceeds the limits
    """
    parser = Parser(source, limits, allow_unclosed_parentheses)
    return parser.parse()
