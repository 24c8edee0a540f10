"""
Expression evaluator.

Reduces an AST to a float using IEEE-754 double arithmetic.

Failure semantics:
- Error nodes raise MalformedExpressionError; they never evaluate to 0.
- Divisors with magnitude below DIVISION_EPSILON raise DivisionByZeroError
  instead of producing infinity.
- Power follows float ``pow`` semantics; invalid domains (e.g. a negative
  base with a fractional exponent) yield NaN rather than an error.
"""

import math
import time
from dataclasses import dataclass
from typing import List, Optional, Tuple, cast

from .ast import (
    AstNode,
    BinaryOperator,
    BinaryOpNode,
    ErrorNode,
    NumberLiteralNode,
    UnaryOpNode,
)
from .errors import (
    DivisionByZeroError,
    EvaluationError,
    ExpressionError,
    MalformedExpressionError,
)

DIVISION_EPSILON = 1e-6


@dataclass
class EvaluationContext:
    """Evaluation context."""

    source: Optional[str] = None
    """Source expression for error reporting."""


@dataclass
class EvaluationResult:
    """Result of expression evaluation."""

    value: Optional[float]
    """The evaluated value."""

    success: bool
    """Whether evaluation succeeded."""

    error: Optional[ExpressionError] = None
    """The error if evaluation failed."""

    elapsed: Optional[float] = None
    """Wall-clock seconds spent evaluating."""


class Evaluator:
    """Evaluates an AST node and returns the result.

    The tree is walked with an explicit stack, so long operator chains and
    deeply nested hand-built trees do not recurse.
    """

    def __init__(self, context: Optional[EvaluationContext] = None):
        context = context or EvaluationContext()
        self._source = context.source

    def evaluate(self, node: AstNode) -> float:
        """Evaluates an AST node and returns the value."""
        values: List[float] = []
        # (node, operands_done): operator nodes are revisited once their
        # operand values are on the value stack
        pending: List[Tuple[AstNode, bool]] = [(node, False)]

        while pending:
            current, operands_done = pending.pop()
            node_type = current.type

            if node_type == "NumberLiteral":
                values.append(cast(NumberLiteralNode, current).value)

            elif node_type == "UnaryOp":
                n = cast(UnaryOpNode, current)
                if not operands_done:
                    pending.append((n, True))
                    pending.append((n.operand, False))
                    continue
                value = values.pop()
                values.append(-value if n.operator == "-" else +value)

            elif node_type == "BinaryOp":
                n = cast(BinaryOpNode, current)
                if not operands_done:
                    # Left operand is evaluated first
                    pending.append((n, True))
                    pending.append((n.right, False))
                    pending.append((n.left, False))
                    continue
                right_value = values.pop()
                left_value = values.pop()
                values.append(
                    self._evaluate_binary_op(
                        n.operator, left_value, right_value, n.position
                    )
                )

            elif node_type == "Error":
                n = cast(ErrorNode, current)
                if n.found:
                    message = f"Expected an operand, found '{n.found}'"
                else:
                    message = "Expected an operand, found end of input"
                raise MalformedExpressionError(message, n.position, self._source)

            else:
                raise EvaluationError(
                    f"Unknown node type: {node_type}", current.position, self._source
                )

        return values.pop()

    def _evaluate_binary_op(
        self,
        operator: BinaryOperator,
        left_value: float,
        right_value: float,
        position: int,
    ) -> float:
        """Applies a binary operator to evaluated operands."""
        if operator == "+":
            return left_value + right_value

        if operator == "-":
            return left_value - right_value

        if operator == "*":
            return left_value * right_value

        if operator == "/":
            if abs(right_value) < DIVISION_EPSILON:
                raise DivisionByZeroError(right_value, position, self._source)
            return left_value / right_value

        if operator == "^":
            return _power(left_value, right_value)

        raise EvaluationError(f"Unknown operator: {operator}", position, self._source)


def _is_odd_integer(value: float) -> bool:
    return value.is_integer() and value % 2 == 1


def _power(base: float, exponent: float) -> float:
    # math.pow raises where C pow() returns NaN or an infinity
    try:
        return math.pow(base, exponent)
    except ValueError:
        if base == 0:
            # Zero to a negative power
            return math.copysign(math.inf, base) if _is_odd_integer(exponent) else math.inf
        return math.nan
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf


def evaluate(ast: AstNode, context: Optional[EvaluationContext] = None) -> EvaluationResult:
    """
    Evaluates an AST and returns the result.

    Args:
        ast: The AST to evaluate
        context: The evaluation context

    Returns:
        The evaluation result with value and success status. Expression
        errors are captured in the result; anything else propagates.
    """
    context = context or EvaluationContext()
    started = time.perf_counter()
    try:
        evaluator = Evaluator(context)
        value = evaluator.evaluate(ast)
        return EvaluationResult(
            value=value, success=True, elapsed=time.perf_counter() - started
        )
    except ExpressionError as error:
        return EvaluationResult(
            value=None,
            success=False,
            error=error,
            elapsed=time.perf_counter() - started,
        )
