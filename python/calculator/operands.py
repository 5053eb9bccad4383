"""Operand coercion and the arithmetic behind the calculator routes."""

import logging
import math
import operator
import re
import sys
from typing import Callable, Union

from calculator.exceptions import ArithmeticOverflowError, OperandError

logger = logging.getLogger(__name__)

# Numeric type of path operands and results
Number = Union[int, float]

OperatorFn = Callable[[Number, Number], Number]

# Operation name -> binary function
OPERATIONS: dict[str, OperatorFn] = {
    "add": operator.add,
    "subtract": operator.sub,
}

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_number(text: str) -> Number:
    """
    Coerce path text to a number.

    Integral text becomes an ``int`` so integer arithmetic stays exact.
    Decimal and exponent forms become a ``float``.

    :param str text: Raw operand text
    :return: The parsed number
    :raises OperandError: If the text is not a finite number
    """
    candidate = text.strip()
    if _INTEGER_RE.fullmatch(candidate):
        return int(candidate)
    if _DECIMAL_RE.fullmatch(candidate):
        value = float(candidate)
        if math.isfinite(value):
            return value
        raise OperandError(f"Operand out of range: {text!r}")
    raise OperandError(f"Not a number: {text!r}")


def check_result(value: Number) -> Number:
    """Reject non-finite floats and ints too long to print."""
    if isinstance(value, int):
        limit = sys.get_int_max_str_digits()
        if limit and abs(value) >= 10 ** limit:
            raise ArithmeticOverflowError(f"Result out of range: more than {limit} digits")
        return value
    if isinstance(value, float) and not math.isfinite(value):
        raise ArithmeticOverflowError(f"Result out of range: {value}")
    return value


def calculate(operation: str, a: Number, b: Number) -> Number:
    """
    Apply a named operation to two operands.

    :raises KeyError: If the operation is unknown
    :raises ArithmeticOverflowError: If the result cannot be represented
    """
    fn = OPERATIONS[operation]
    try:
        result = fn(a, b)
    except OverflowError as exc:
        # int too large to mix with a float
        raise ArithmeticOverflowError(f"Result out of range: {exc}") from None
    check_result(result)
    logger.debug("%s(%r, %r) = %r", operation, a, b, result)
    return result
