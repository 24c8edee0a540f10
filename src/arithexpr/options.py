"""
Configuration for evaluating expressions.
"""

import os
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .limits import ExpressionLimits

ENV_VAR_TRACE = "ARITHEXPR_TRACE"
ENV_VAR_ALLOW_UNCLOSED_PARENTHESES = "ARITHEXPR_ALLOW_UNCLOSED_PARENTHESES"

_TRUTHY = ("1", "true", "yes", "on")


class EvaluationOptions(BaseModel):
    """Options controlling how an expression is parsed and evaluated."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    # Log the expression, its result and the evaluation time at INFO level
    trace: bool = False

    # Accept '(' without a matching ')' at end of input
    allow_unclosed_parentheses: bool = Field(
        default=False, alias="allowUnclosedParentheses"
    )

    # Parse limits; None means DEFAULT_EXPRESSION_LIMITS
    limits: Optional[ExpressionLimits] = None


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY


def options_from_env() -> EvaluationOptions:
    """Builds options from ARITHEXPR_* environment variables."""
    return EvaluationOptions(
        trace=_env_flag(ENV_VAR_TRACE),
        allow_unclosed_parentheses=_env_flag(ENV_VAR_ALLOW_UNCLOSED_PARENTHESES),
    )


def normalize_options(
    options: Optional[Union[EvaluationOptions, Dict[str, Any]]],
) -> EvaluationOptions:
    """
    Normalizes caller-supplied options.

    Accepts an EvaluationOptions instance, a plain dict (snake_case or
    camelCase keys) or None, in which case the environment is consulted.

    Raises:
        pydantic.ValidationError: If a dict contains unknown or invalid keys
    """
    if options is None:
        return options_from_env()

    if isinstance(options, EvaluationOptions):
        return options

    return EvaluationOptions.model_validate(options)
