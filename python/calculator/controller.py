"""Handlers for the calculator routes."""

from calculator.operands import Number, calculate
from calculator.view import View, view

GREETING = "Hello from the calculator package!"


def greeting() -> str:
    """Say hello."""
    return GREETING


def add(a: Number, b: Number) -> View:
    """Add two numbers and render the sum."""
    result = calculate("add", a, b)
    return view("calculator::index", result=result)


def subtract(a: Number, b: Number) -> View:
    """Subtract b from a and render the difference."""
    result = calculate("subtract", a, b)
    return view("calculator::index", result=result)
