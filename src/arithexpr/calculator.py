"""
Single-call entry points: text in, number out.
"""

import logging
import time
from typing import Any, Dict, Optional, Union

from .errors import ExpressionError
from .evaluator import EvaluationContext, EvaluationResult, Evaluator
from .limits import DEFAULT_EXPRESSION_LIMITS
from .options import EvaluationOptions, normalize_options
from .parser import parse

logger = logging.getLogger(__name__)

OptionsLike = Optional[Union[EvaluationOptions, Dict[str, Any]]]


def evaluate_expression(text: str, options: OptionsLike = None) -> float:
    """
    Parses and evaluates an arithmetic expression.

    Args:
        text: The expression, e.g. ``"2(3+4)^2 / 7"``
        options: Evaluation options; see EvaluationOptions

    Returns:
        The result as a float

    Raises:
        UnexpectedCharacterError: If the text contains an unknown character
        MalformedExpressionError: If an operand is missing (including empty input)
        DivisionByZeroError: If a divisor is within 1e-6 of zero
        LimitExceededError: If the expression exceeds the configured limits
    """
    resolved = normalize_options(options)
    limits = resolved.limits or DEFAULT_EXPRESSION_LIMITS

    if resolved.trace:
        logger.info("evaluation for %s", text)

    ast = parse(
        text,
        limits=limits,
        allow_unclosed_parentheses=resolved.allow_unclosed_parentheses,
    )

    # Timing covers evaluation of the parsed tree only
    started = time.perf_counter()
    evaluator = Evaluator(EvaluationContext(source=text))
    value = evaluator.evaluate(ast)
    elapsed = time.perf_counter() - started

    if resolved.trace:
        logger.info("ans=%f, time=%f", value, elapsed)
    else:
        logger.debug(
            "expression_evaluated",
            extra={"value": value, "elapsed": elapsed},
        )
    return value


def try_evaluate_expression(text: str, options: OptionsLike = None) -> EvaluationResult:
    """
    Like evaluate_expression, but reports expression errors in the result.

    Invalid options still raise.
    """
    started = time.perf_counter()
    try:
        value = evaluate_expression(text, options)
    except ExpressionError as error:
        logger.debug(
            "expression_rejected",
            extra={"error_type": type(error).__name__, "position": error.position},
        )
        return EvaluationResult(
            value=None,
            success=False,
            error=error,
            elapsed=time.perf_counter() - started,
        )
    return EvaluationResult(
        value=value, success=True, elapsed=time.perf_counter() - started
    )
