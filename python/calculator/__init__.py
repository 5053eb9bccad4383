# Calculator - arithmetic endpoints rendered through views
__version__ = "0.1.0"

from calculator.app import App
from calculator.exceptions import (
    ArithmeticOverflowError,
    CalculatorError,
    ConfigError,
    MethodNotAllowedError,
    OperandError,
    ParameterError,
    RouteError,
    RouteNotFoundError,
    ViewError,
    ViewNotFoundError,
)
from calculator.operands import Number, calculate, parse_number
from calculator.route import Route
from calculator.view import View, ViewRenderer, view

__all__ = [
    # Core
    "__version__",
    "App",
    "Route",
    # Views
    "View",
    "ViewRenderer",
    "view",
    # Arithmetic
    "Number",
    "calculate",
    "parse_number",
    # Exceptions
    "CalculatorError",
    "RouteError",
    "RouteNotFoundError",
    "MethodNotAllowedError",
    "ParameterError",
    "OperandError",
    "ArithmeticOverflowError",
    "ViewError",
    "ViewNotFoundError",
    "ConfigError",
]
