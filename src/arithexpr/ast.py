"""
Abstract Syntax Tree (AST) node types for arithmetic expressions.

The AST is produced by the parser and consumed by the evaluator. Nodes are
immutable and every child is fully built before its parent is created.
"""

from abc import ABC
from dataclasses import dataclass
from typing import List, Literal, Tuple, Union

# ============================================================
# Operator Types
# ============================================================

UnaryOperator = Literal["+", "-"]

BinaryOperator = Literal["+", "-", "*", "/", "^"]


# ============================================================
# AST Node Types
# ============================================================


@dataclass(frozen=True)
class AstNodeBase(ABC):
    """Base class for all AST nodes."""

    position: int
    """Position in source expression (for error reporting)."""


@dataclass(frozen=True)
class NumberLiteralNode(AstNodeBase):
    """Number literal node."""

    value: float

    @property
    def type(self) -> Literal["NumberLiteral"]:
        return "NumberLiteral"


@dataclass(frozen=True)
class UnaryOpNode(AstNodeBase):
    """Unary operator node (positive or negative)."""

    operator: UnaryOperator
    operand: "AstNode"

    @property
    def type(self) -> Literal["UnaryOp"]:
        return "UnaryOp"


@dataclass(frozen=True)
class BinaryOpNode(AstNodeBase):
    """Binary operator node."""

    operator: BinaryOperator
    left: "AstNode"
    right: "AstNode"

    implicit: bool = False
    """True for multiplication written by juxtaposition, e.g. 2(3)."""

    @property
    def type(self) -> Literal["BinaryOp"]:
        return "BinaryOp"


@dataclass(frozen=True)
class ErrorNode(AstNodeBase):
    """Placeholder for a position where no operand could be parsed."""

    found: str
    """Lexeme of the token found instead of an operand ("" at end of input)."""

    @property
    def type(self) -> Literal["Error"]:
        return "Error"


# Union type for all AST nodes
AstNode = Union[
    NumberLiteralNode,
    UnaryOpNode,
    BinaryOpNode,
    ErrorNode,
]


# ============================================================
# AST Utilities
# ============================================================


def _children(node: AstNode) -> Tuple[AstNode, ...]:
    if isinstance(node, UnaryOpNode):
        return (node.operand,)
    if isinstance(node, BinaryOpNode):
        return (node.left, node.right)
    return ()


def count_ast_nodes(node: AstNode) -> int:
    """Counts the total number of nodes in an AST."""
    count = 0
    stack: List[AstNode] = [node]

    while stack:
        current = stack.pop()
        count += 1
        stack.extend(_children(current))

    return count


def calculate_ast_depth(node: AstNode) -> int:
    """Calculates the maximum depth of an AST."""
    max_depth = 0
    stack: List[Tuple[AstNode, int]] = [(node, 1)]

    # Iterative so that long left-associated chains cannot overflow the stack
    while stack:
        current, depth = stack.pop()
        max_depth = max(max_depth, depth)
        stack.extend((child, depth + 1) for child in _children(current))

    return max_depth


def ast_to_string(node: AstNode, indent: int = 0) -> str:
    """Returns a human-readable representation of an AST node for debugging."""
    prefix = "  " * indent

    if isinstance(node, NumberLiteralNode):
        return f"{prefix}Number: {node.value}"

    if isinstance(node, UnaryOpNode):
        return f"{prefix}UnaryOp: {node.operator}\n{ast_to_string(node.operand, indent + 1)}"

    if isinstance(node, BinaryOpNode):
        label = f"{node.operator} (implicit)" if node.implicit else node.operator
        return (
            f"{prefix}BinaryOp: {label}\n"
            f"{ast_to_string(node.left, indent + 1)}\n"
            f"{ast_to_string(node.right, indent + 1)}"
        )

    if isinstance(node, ErrorNode):
        return f"{prefix}Error: {node.found or '<end of input>'}"

    return f"{prefix}Unknown: {node}"
