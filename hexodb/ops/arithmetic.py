"""
Arithmetic Update Module

Operator resolution and the compute step of Database.math().

math() is a fetch followed by a set. There is no lock or version token in
the shard protocol, so two concurrent updates of one key can lose a write.
"""

import operator
from enum import Enum
from typing import Any, Callable, Dict, Union

from ..errors import NotANumberError, UnsupportedOperatorError
from ..protocol.normalizer import Number, coerce_number


class MathOperator(Enum):
    """Supported arithmetic operators, valued by their symbol."""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"


# Every accepted tag -> operator
OPERATOR_ALIASES: Dict[str, MathOperator] = {
    "+": MathOperator.ADD,
    "add": MathOperator.ADD,
    "-": MathOperator.SUBTRACT,
    "sub": MathOperator.SUBTRACT,
    "subtract": MathOperator.SUBTRACT,
    "*": MathOperator.MULTIPLY,
    "mul": MathOperator.MULTIPLY,
    "multiply": MathOperator.MULTIPLY,
    "/": MathOperator.DIVIDE,
    "div": MathOperator.DIVIDE,
    "divide": MathOperator.DIVIDE,
}

OPERATIONS: Dict[MathOperator, Callable[[Number, Number], Number]] = {
    MathOperator.ADD: operator.add,
    MathOperator.SUBTRACT: operator.sub,
    MathOperator.MULTIPLY: operator.mul,
    MathOperator.DIVIDE: operator.truediv,
}


def resolve_operator(tag: Union[str, MathOperator]) -> MathOperator:
    """
    Map an operator tag to a MathOperator.

    Args:
        tag: A MathOperator, a symbol (+ - * /) or a name such as "add"

    Raises:
        UnsupportedOperatorError: the tag is empty or unknown
    """
    if isinstance(tag, MathOperator):
        return tag
    if not tag:
        raise UnsupportedOperatorError("No operator provided!")
    if isinstance(tag, str) and tag.lower() in OPERATOR_ALIASES:
        return OPERATOR_ALIASES[tag.lower()]
    raise UnsupportedOperatorError(f"Unknown operator provided! ({tag!r})")


def compute(current: Any, op: MathOperator, value: Number) -> Number:
    """
    Apply an operator to a stored value.

    Args:
        current: The value currently stored under the key
        op: The operator to apply
        value: The right-hand operand

    Returns:
        current <op> value

    Raises:
        NotANumberError: current is not numeric
        ZeroDivisionError: dividing by zero
    """
    target = coerce_number(current)
    if target is None:
        raise NotANumberError("Target is not a number!")
    return OPERATIONS[op](target, value)
