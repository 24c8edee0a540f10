"""
Arithmetic expression engine.

This package lexes, parses and evaluates arithmetic expressions built from
numbers, parentheses, ``+ - * / ^``, unary ``+``/``-`` and implicit
multiplication (``2(3)``), producing a float.
"""

# Core types and utilities
from .ast import (
    AstNode,
    AstNodeBase,
    BinaryOperator,
    BinaryOpNode,
    ErrorNode,
    NumberLiteralNode,
    UnaryOperator,
    UnaryOpNode,
    ast_to_string,
    calculate_ast_depth,
    count_ast_nodes,
)

# Entry points
from .calculator import (
    evaluate_expression,
    try_evaluate_expression,
)
from .errors import (
    DivisionByZeroError,
    EvaluationError,
    ExpressionError,
    LimitExceededError,
    MalformedExpressionError,
    ParseError,
    TokenizerError,
    UnbalancedParenthesisError,
    UnexpectedCharacterError,
)

# Evaluator
from .evaluator import (
    DIVISION_EPSILON,
    EvaluationContext,
    EvaluationResult,
    Evaluator,
    evaluate,
)
from .limits import (
    DEFAULT_EXPRESSION_LIMITS,
    ExpressionLimits,
    check_nesting_depth,
    check_ast_node_count,
    check_expression_length,
)
from .options import (
    EvaluationOptions,
    normalize_options,
    options_from_env,
)

# Parser
from .parser import (
    Parser,
    Precedence,
    parse,
)

# Tokenizer
from .tokenizer import (
    Token,
    Tokenizer,
    TokenType,
    tokenize,
)

__all__ = [
    # AST types
    "AstNode",
    "AstNodeBase",
    "NumberLiteralNode",
    "UnaryOpNode",
    "BinaryOpNode",
    "ErrorNode",
    "UnaryOperator",
    "BinaryOperator",
    "count_ast_nodes",
    "calculate_ast_depth",
    "ast_to_string",
    # Errors
    "ExpressionError",
    "TokenizerError",
    "UnexpectedCharacterError",
    "ParseError",
    "MalformedExpressionError",
    "UnbalancedParenthesisError",
    "EvaluationError",
    "DivisionByZeroError",
    "LimitExceededError",
    # Limits
    "ExpressionLimits",
    "DEFAULT_EXPRESSION_LIMITS",
    "check_expression_length",
    "check_nesting_depth",
    "check_ast_node_count",
    # Options
    "EvaluationOptions",
    "normalize_options",
    "options_from_env",
    # Tokenizer
    "Token",
    "TokenType",
    "Tokenizer",
    "tokenize",
    # Parser
    "Parser",
    "Precedence",
    "parse",
    # Evaluator
    "DIVISION_EPSILON",
    "EvaluationContext",
    "EvaluationResult",
    "Evaluator",
    "evaluate",
    # Entry points
    "evaluate_expression",
    "try_evaluate_expression",
]
