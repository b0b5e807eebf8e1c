"""
Tests for SET_VAR operators.

These tests verify:
- Addition (+) of ints and string concatenation fallback
- Subtraction (-) and multiplication (*) on ints only
- Division (/) on floats with int-tagged result
- Unsupported operators
"""

import pytest

from canscript.errors import BindingError, OperatorError
from canscript.interpreter import apply_operator
from canscript.values import TaggedValue


def calc(op, x, y):
    return str(apply_operator(op, TaggedValue.parse(x), TaggedValue.parse(y)))


class TestAddition:
    """Tests for +."""

    def test_int_addition(self):
        assert calc("+", "int:200", "int:2") == "int:202"
        assert calc("+", "int:-6", "int:4") == "int:-2"

    def test_strings_concatenate(self):
        assert calc("+", "str:Hi", "str:Ho") == "str:HiHo"

    def test_mixed_operands_concatenate_payloads(self):
        assert calc("+", "str:n=", "int:5") == "str:n=5"
        assert calc("+", "int:1", "float:2.5") == "str:12.5"


class TestSubtractionAndMultiplication:
    """Tests for - and *."""

    def test_int_subtraction(self):
        assert calc("-", "int:202", "int:2") == "int:200"

    def test_int_multiplication(self):
        assert calc("*", "int:6", "int:7") == "int:42"

    def test_non_int_operands_are_rejected(self):
        with pytest.raises(OperatorError):
            calc("-", "str:a", "int:1")
        with pytest.raises(OperatorError):
            calc("*", "int:2", "float:1.5")

    def test_malformed_int_payload(self):
        with pytest.raises(OperatorError):
            calc("-", "int:abc", "int:1")


class TestDivision:
    """Tests for /."""

    def test_float_division_is_tagged_int(self):
        assert calc("/", "float:5.0", "float:2.0") == "int:2.5"
        assert calc("/", "float:4.0", "float:2.0") == "int:2"

    def test_int_operands_are_rejected(self):
        with pytest.raises(OperatorError):
            calc("/", "int:4", "int:2")

    def test_division_by_zero(self):
        with pytest.raises(OperatorError):
            calc("/", "float:1.0", "float:0.0")


class TestUnsupported:
    """Tests for unknown operators."""

    def test_unknown_operator(self):
        with pytest.raises(OperatorError, match="Unsupported operator"):
            calc("%", "int:1", "int:2")

    def test_operator_errors_are_binding_errors(self):
        assert issubclass(OperatorError, BindingError)
