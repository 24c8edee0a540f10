"""
Resource limits for expression parsing.

The parser recurses once per nested operand (parenthesized group, unary
operator or operator right-hand side), so ``max_nesting_depth`` keeps
deeply nested input from exhausting the interpreter stack. Flat operator
chains and juxtaposition chains do not nest. The evaluator walks the tree
iteratively and needs no depth bound.
"""

from dataclasses import dataclass
from typing import Optional

from .errors import LimitExceededError


@dataclass(frozen=True)
class ExpressionLimits:
    """Expression limits configuration."""

    # Maximum expression string length in characters
    max_expression_length: int = 1_000_000

    # Maximum operand nesting (parentheses, unary operators)
    max_nesting_depth: int = 128

    # Maximum number of AST nodes
    max_ast_nodes: int = 1_000_000


DEFAULT_EXPRESSION_LIMITS = ExpressionLimits()


def check_expression_length(
    expression: str, limits: Optional[ExpressionLimits] = None
) -> None:
    """Validates that expression length is within limits."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if len(expression) > limits.max_expression_length:
        raise LimitExceededError(
            "max_expression_length", limits.max_expression_length, len(expression)
        )


def check_nesting_depth(depth: int, limits: Optional[ExpressionLimits] = None) -> None:
    """Validates operand nesting depth during parsing."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if depth > limits.max_nesting_depth:
        raise LimitExceededError("max_nesting_depth", limits.max_nesting_depth, depth)


def check_ast_node_count(
    count: int, limits: Optional[ExpressionLimits] = None
) -> None:
    """Validates AST node count during parsing."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if count > limits.max_ast_nodes:
        raise LimitExceededError("max_ast_nodes", limits.max_ast_nodes, count)
