"""
Calculator exceptions.
"""


class CalculatorError(Exception):
    """Base exception for all calculator errors."""
    pass


class RouteError(CalculatorError):
    """Error during route resolution or execution."""
    pass


class RouteNotFoundError(RouteError):
    """No registered route matches the requested path."""
    pass


class MethodNotAllowedError(RouteError):
    """A route matches the path but does not accept the method."""

    def __init__(self, message: str, allowed: list[str] | None = None):
        super().__init__(message)
        self.allowed = allowed or []


class ParameterError(RouteError):
    """A path parameter could not be converted for its handler."""

    def __init__(self, message: str, name: str | None = None):
        super().__init__(message)
        self.name = name


class OperandError(CalculatorError, ValueError):
    """Text that does not denote a finite number."""
    pass


class ArithmeticOverflowError(CalculatorError):
    """An arithmetic result fell outside the representable range."""
    pass


class ViewError(CalculatorError):
    """Error while rendering a view."""
    pass


class ViewNotFoundError(ViewError):
    """View template not found in any registered namespace."""
    pass


class ConfigError(CalculatorError):
    """Invalid or missing configuration."""
    pass
