"""
Error types for the arithmetic expression engine.

All expression errors extend ExpressionError for consistent handling.
"""

from typing import Optional


class ExpressionError(Exception):
    """
    Base error class for all expression-related errors.
    """

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.position = position
        self.expression = expression

    def format_with_context(self) -> str:
        """
        Returns a formatted error message with position context.
        """
        if self.expression is None or self.position is None:
            return self.message

        pointer = " " * self.position + "^"
        return f"{self.message}\n  {self.expression}\n  {pointer}"


class TokenizerError(ExpressionError):
    """
    Error thrown during tokenization (lexical analysis).
    """

    pass


class UnexpectedCharacterError(TokenizerError):
    """
    Error thrown when the input contains a character the lexer cannot scan.
    """

    def __init__(self, character: str, position: int, expression: str):
        super().__init__(f"Unexpected character: '{character}'", position, expression)
        self.character = character


class ParseError(ExpressionError):
    """
    Error thrown during parsing (syntax analysis).
    """

    pass


class MalformedExpressionError(ParseError):
    """
    Error thrown when an operand is expected but cannot be started.

    Raised for empty input, stray operators and unmatched closing
    parentheses.
    """

    pass


class UnbalancedParenthesisError(MalformedExpressionError):
    """
    Error thrown when an opening parenthesis is never closed.
    """

    pass


class EvaluationError(ExpressionError):
    """
    Error thrown during evaluation (runtime error).
    """

    pass


class DivisionByZeroError(EvaluationError):
    """
    Error thrown when a divisor is zero or too close to zero.
    """

    def __init__(
        self,
        divisor: float,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__("Division by zero", position, expression)
        self.divisor = divisor


class LimitExceededError(ExpressionError):
    """
    Error thrown when expression limits are exceeded.
    """

    def __init__(self, limit_name: str, limit: int, actual: int):
        message = f"Limit exceeded: {limit_name} (limit: {limit}, actual: {actual})"
        super().__init__(message)
        self.limit_name = limit_name
        self.limit = limit
        self.actual = actual
