"""
Tests for operand parsing, number formatting and the binary evaluation primitive.
"""

import math

import pytest
from hypothesis import given, strategies as st

from arithmetic import (
    ArithmeticErrorKind,
    EvalResult,
    OperatorKind,
    compute,
    format_number,
    parse_operand,
)


finite_floats = st.floats(allow_nan=False, allow_infinity=False)
operands = finite_floats.map(format_number)


class TestParseOperand:

    @pytest.mark.parametrize("text, expected", [
        ("0", 0.0),
        ("-5", -5.0),
        ("12.", 12.0),
        ("0.25", 0.25),
        (".5", 0.5),
        ("-05", -5.0),
        ("1e-7", 1e-7),
        ("1.5e+22", 1.5e22),
    ])
    def test_accepts_numeric_literals(self, text, expected):
        assert parse_operand(text) == expected

    def test_accepts_formatted_non_finite(self):
        assert parse_operand("Infinity") == math.inf
        assert parse_operand("-Infinity") == -math.inf

    @pytest.mark.parametrize("text", [
        "", "-", ".", "1.2.3", "abc", "5abc", " 5", "1_000", "inf", "nan",
        "NaN", "-NaN", "2e-8.",
    ])
    def test_rejects_everything_else(self, text):
        with pytest.raises(ValueError):
            parse_operand(text)


class TestFormatNumber:

    @pytest.mark.parametrize("value, expected", [
        (8.0, "8"),
        (0.1 + 0.2, "0.3"),
        (2.5, "2.5"),
        (-0.0, "0"),
        (1 / 3, "0.333333333333"),
        (2 / 3, "0.666666666667"),
        (123456.789, "123456.789"),
        (0.000001, "0.000001"),
        (1e-7, "1e-7"),
        (1.5e-10, "1.5e-10"),
        (1e15, "1000000000000000"),
        (123456789012345.0, "123456789012345"),
        (1e22, "1e+22"),
        (999999999999.0, "999999999999"),
    ])
    def test_known_values(self, value, expected):
        assert format_number(value) == expected

    def test_non_finite_literals(self):
        assert format_number(math.inf) == "Infinity"
        assert format_number(-math.inf) == "-Infinity"
        assert format_number(math.nan) == "NaN"

    @given(finite_floats)
    def test_idempotent(self, value):
        text = format_number(value)
        assert format_number(parse_operand(text)) == text

    @given(finite_floats)
    def test_positional_output_has_no_trailing_zeros(self, value):
        text = format_number(value)
        if "." in text and "e" not in text:
            assert not text.endswith("0")
            assert not text.endswith(".")


class TestCompute:

    def test_basic_operations(self):
        assert compute("5", "3", OperatorKind.ADD) == EvalResult.success("8")
        assert compute("5", "3", OperatorKind.SUBTRACT).text == "2"
        assert compute("5", "3", OperatorKind.MULTIPLY).text == "15"
        assert compute("7", "2", OperatorKind.DIVIDE).text == "3.5"
        assert compute("7", "3", OperatorKind.MODULO).text == "1"

    def test_modulo_sign_follows_dividend(self):
        assert compute("-7", "3", OperatorKind.MODULO).text == "-1"
        assert compute("7", "-3", OperatorKind.MODULO).text == "1"
        assert compute("5.5", "2", OperatorKind.MODULO).text == "1.5"

    def test_modulo_of_infinity_is_nan(self):
        assert compute("Infinity", "2", OperatorKind.MODULO).text == "NaN"

    def test_overflow_formats_as_infinity(self):
        assert compute("1e+308", "10", OperatorKind.MULTIPLY).text == "Infinity"

    @pytest.mark.parametrize("right", ["0", "-0", "0.", "0.000"])
    @pytest.mark.parametrize("op", [OperatorKind.DIVIDE, OperatorKind.MODULO])
    def test_zero_divisor(self, op, right):
        result = compute("7", right, op)
        assert not result.ok
        assert result.error is ArithmeticErrorKind.DIVISION_BY_ZERO
        assert result.text is None

    def test_invalid_operand(self):
        assert compute("-", "3", OperatorKind.ADD).error is ArithmeticErrorKind.INVALID_NUMBER
        assert compute("3", "", OperatorKind.ADD).error is ArithmeticErrorKind.INVALID_NUMBER

    def test_nan_operand_is_invalid(self):
        assert compute("NaN", "1", OperatorKind.ADD).error is ArithmeticErrorKind.INVALID_NUMBER
        assert compute("1", "NaN", OperatorKind.MULTIPLY).error is ArithmeticErrorKind.INVALID_NUMBER

    @pytest.mark.parametrize("op", ["^", None, "add"])
    def test_unsupported_operator(self, op):
        assert compute("2", "3", op).error is ArithmeticErrorKind.UNSUPPORTED_OPERATOR

    def test_error_messages(self):
        assert ArithmeticErrorKind.INVALID_NUMBER.message == "Invalid number"
        assert ArithmeticErrorKind.DIVISION_BY_ZERO.message == "Division by zero"
        assert ArithmeticErrorKind.UNSUPPORTED_OPERATOR.message == "Unsupported operator"

    @given(operands, operands)
    def test_addition_commutes(self, a, b):
        assert compute(a, b, OperatorKind.ADD) == compute(b, a, OperatorKind.ADD)

    @given(operands, operands)
    def test_multiplication_commutes(self, a, b):
        assert compute(a, b, OperatorKind.MULTIPLY) == compute(b, a, OperatorKind.MULTIPLY)

    @given(operands, operands)
    def test_subtraction_antisymmetric(self, a, b):
        forward = compute(a, b, OperatorKind.SUBTRACT).text
        backward = compute(b, a, OperatorKind.SUBTRACT).text
        assert forward == format_number(-parse_operand(backward))

    @given(operands, st.sampled_from([OperatorKind.DIVIDE, OperatorKind.MODULO]))
    def test_zero_divisor_never_numeric(self, a, op):
        result = compute(a, "0", op)
        assert result.error is ArithmeticErrorKind.DIVISION_BY_ZERO


class TestOperatorKind:

    @pytest.mark.parametrize("symbol, expected", [
        ("+", OperatorKind.ADD),
        ("−", OperatorKind.SUBTRACT),
        ("×", OperatorKind.MULTIPLY),
        ("÷", OperatorKind.DIVIDE),
        ("%", OperatorKind.MODULO),
    ])
    def test_from_symbol(self, symbol, expected):
        assert OperatorKind.from_symbol(symbol) is expected

    def test_unknown_symbol(self):
        with pytest.raises(ValueError):
            OperatorKind.from_symbol("^")

    def test_str_is_symbol(self):
        assert f"{OperatorKind.MULTIPLY}" == "*"
