"""
Tests for expression evaluator.
"""

import math

import pytest

from arithexpr import (
    BinaryOpNode,
    DivisionByZeroError,
    ErrorNode,
    EvaluationContext,
    Evaluator,
    MalformedExpressionError,
    NumberLiteralNode,
    UnaryOpNode,
    evaluate,
    parse,
)


def eval_expr(expression: str) -> float:
    """Helper to parse and evaluate an expression."""
    ast = parse(expression)
    return Evaluator(EvaluationContext(source=expression)).evaluate(ast)


class TestArithmetic:
    """Tests for arithmetic evaluation."""

    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("2+3", 5.0),
            ("2*3+4", 10.0),
            ("2+3*4", 14.0),
            ("10-4-3", 3.0),
            ("7/2", 3.5),
            ("2^10", 1024.0),
            ("(2+3)*4", 20.0),
            ("1.5*4", 6.0),
        ],
    )
    def test_evaluates_binary_operators(self, expression, expected):
        assert eval_expr(expression) == expected

    def test_power_is_left_associative(self):
        assert eval_expr("2^3^2") == 64.0

    def test_negation_applies_before_power(self):
        assert eval_expr("-2^2") == 4.0

    def test_unary_operators(self):
        assert eval_expr("-5") == -5.0
        assert eval_expr("+5") == 5.0
        assert eval_expr("--5") == 5.0
        assert eval_expr("3 - -2") == 5.0

    def test_mixed_multiplication_and_division(self):
        assert eval_expr("8*4/2") == 16.0
        assert eval_expr("1/4*2") == 0.5


class TestImplicitMultiplication:
    """Tests for juxtaposition evaluation."""

    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("2(3)", 6.0),
            ("(2)(3)", 6.0),
            ("2(3)(4)", 24.0),
            ("2(3)^2", 18.0),
            ("2(6)/3", 4.0),
            ("-2(3)", -6.0),
            ("2 3", 6.0),
        ],
    )
    def test_evaluates_juxtaposition(self, expression, expected):
        assert eval_expr(expression) == expected


class TestDivisionByZero:
    """Tests for the divide-by-zero policy."""

    def test_division_by_zero_raises(self):
        with pytest.raises(DivisionByZeroError) as exc_info:
            eval_expr("1/0")
        assert exc_info.value.position == 1
        assert exc_info.value.expression == "1/0"

    def test_division_by_near_zero_raises(self):
        with pytest.raises(DivisionByZeroError):
            eval_expr("1/0.0000001")

    def test_division_by_computed_zero_raises(self):
        with pytest.raises(DivisionByZeroError) as exc_info:
            eval_expr("5/(2-2)")
        assert exc_info.value.divisor == 0.0

    def test_negative_near_zero_divisor_raises(self):
        with pytest.raises(DivisionByZeroError):
            eval_expr("1/-0.0000005")

    def test_divisor_just_above_epsilon_is_allowed(self):
        assert eval_expr("1/0.00001") == pytest.approx(100000.0)


class TestPower:
    """Tests for float power semantics."""

    def test_fractional_exponent(self):
        assert eval_expr("4^0.5") == 2.0

    def test_negative_exponent(self):
        assert eval_expr("2^-1") == 0.5

    def test_negative_base_with_fractional_exponent_is_nan(self):
        assert math.isnan(eval_expr("(-8)^(1/3)"))

    def test_zero_to_negative_power_is_infinite(self):
        assert eval_expr("0^-1") == math.inf

    def test_overflow_is_infinite(self):
        assert eval_expr("10^400") == math.inf
        assert eval_expr("(-10)^401") == -math.inf


class TestMalformed:
    """Tests for error nodes."""

    @pytest.mark.parametrize("expression", ["", "   ", "+", "*3", "1+", "2*(+)"])
    def test_error_node_raises(self, expression):
        with pytest.raises(MalformedExpressionError):
            eval_expr(expression)

    def test_error_node_never_evaluates_to_zero(self):
        node = BinaryOpNode(
            position=1,
            operator="+",
            left=NumberLiteralNode(position=0, value=1.0),
            right=ErrorNode(position=2, found=""),
        )
        with pytest.raises(MalformedExpressionError) as exc_info:
            Evaluator().evaluate(node)
        assert exc_info.value.position == 2
        assert "end of input" in exc_info.value.message

    def test_error_message_names_found_token(self):
        with pytest.raises(MalformedExpressionError) as exc_info:
            eval_expr("*3")
        assert "'*'" in exc_info.value.message


class TestEvaluateResult:
    """Tests for the result-returning evaluate function."""

    def test_success_result(self):
        result = evaluate(parse("6*7"))
        assert result.success is True
        assert result.value == 42.0
        assert result.error is None
        assert result.elapsed is not None and result.elapsed >= 0

    def test_failure_result_carries_error(self):
        result = evaluate(parse("1/0"), EvaluationContext(source="1/0"))
        assert result.success is False
        assert result.value is None
        assert isinstance(result.error, DivisionByZeroError)

    def test_deep_hand_built_tree_evaluates(self):
        node = NumberLiteralNode(position=0, value=1.0)
        for _ in range(5000):
            node = UnaryOpNode(position=0, operator="-", operand=node)
        result = evaluate(node)
        assert result.success is True
        assert result.value == 1.0


class TestLongChains:
    """Tests for flat operator chains."""

    def test_long_sum(self):
        assert eval_expr("+".join(["1"] * 300)) == 300.0

    def test_long_left_leaning_tree(self):
        node = NumberLiteralNode(position=0, value=0.0)
        for index in range(5000):
            node = BinaryOpNode(
                position=index,
                operator="+",
                left=node,
                right=NumberLiteralNode(position=index, value=2.0),
            )
        assert Evaluator().evaluate(node) == 10000.0

    def test_left_operand_error_is_reported_first(self):
        node = BinaryOpNode(
            position=1,
            operator="/",
            left=ErrorNode(position=0, found="*"),
            right=NumberLiteralNode(position=2, value=0.0),
        )
        with pytest.raises(MalformedExpressionError):
            Evaluator().evaluate(node)
