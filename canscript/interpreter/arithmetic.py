"""
Binary operators of SET_VAR statements.

Operators work on tag-stripped payloads:
- '+': int + int -> int, anything else concatenates payloads as str
- '-', '*': int operands only
- '/': float operands only; the quotient is tagged int
"""

from typing import Callable, Dict

from ..errors import OperatorError
from ..values import TaggedValue, ValueTag, parse_int

ASSIGN_GLOBAL = ":="
ASSIGN_LOCAL = "="

# compound assignment -> binary operator
COMPOUND_OPERATORS: Dict[str, str] = {
    "+=": "+",
    "-=": "-",
    "*=": "*",
    "/=": "/",
}


def _ints(op: str, x: TaggedValue, y: TaggedValue):
    if x.tag != ValueTag.INT.value or y.tag != ValueTag.INT.value:
        raise OperatorError(f"Operator '{op}' requires int operands: {x} {op} {y}")
    try:
        return parse_int(x.payload), parse_int(y.payload)
    except ValueError:
        raise OperatorError(f"Invalid int operand: {x} {op} {y}")


def _add(x: TaggedValue, y: TaggedValue) -> TaggedValue:
    if x.tag == ValueTag.INT.value and y.tag == ValueTag.INT.value:
        a, b = _ints("+", x, y)
        return TaggedValue.of_int(a + b)
    return TaggedValue.of_str(x.payload + y.payload)


def _sub(x: TaggedValue, y: TaggedValue) -> TaggedValue:
    a, b = _ints("-", x, y)
    return TaggedValue.of_int(a - b)


def _mul(x: TaggedValue, y: TaggedValue) -> TaggedValue:
    a, b = _ints("*", x, y)
    return TaggedValue.of_int(a * b)


def _div(x: TaggedValue, y: TaggedValue) -> TaggedValue:
    if x.tag != ValueTag.FLOAT.value or y.tag != ValueTag.FLOAT.value:
        raise OperatorError(f"Operator '/' requires float operands: {x} / {y}")
    try:
        a, b = x.as_float(), y.as_float()
    except ValueError:
        raise OperatorError(f"Invalid float operand: {x} / {y}")
    if b == 0:
        raise OperatorError(f"Division by zero: {x} / {y}")
    quotient = a / b
    # integral quotients print without a fraction: 4.0 / 2.0 -> int:2
    text = str(int(quotient)) if quotient.is_integer() else repr(quotient)
    return TaggedValue(ValueTag.INT.value, text)


OPERATORS: Dict[str, Callable[[TaggedValue, TaggedValue], TaggedValue]] = {
    "+": _add,
    "-": _sub,
    "*": _mul,
    "/": _div,
}


def apply_operator(op: str, x: TaggedValue, y: TaggedValue) -> TaggedValue:
    """
    Compute x op y.

    Raises:
        OperatorError: unsupported operator or operand types
    """
    func = OPERATORS.get(op)
    if func is None:
        raise OperatorError(f"Unsupported operator: '{op}'")
    return func(x, y)
