"""App discovery for the calculator CLI."""

import importlib
import inspect
from typing import Callable

from calculator.app import App

DEFAULT_APP = "calculator.routes:app"


def load_app(target: str = DEFAULT_APP) -> App:
    """
    Import an App from a ``module:attribute`` reference.

    A bare module path looks for an attribute named ``app``.

    Args:
        target: Reference like "calculator.routes:app" or "myapp.main"

    Returns:
        The App instance

    Raises:
        ImportError: If the module cannot be imported
        ValueError: If the attribute is missing or is not an App
    """
    module_path, _, attr = target.partition(":")
    attr = attr or "app"

    module = importlib.import_module(module_path)
    try:
        app = getattr(module, attr)
    except AttributeError:
        raise ValueError(f"Module '{module_path}' has no attribute '{attr}'") from None

    if not isinstance(app, App):
        raise ValueError(f"'{target}' is a {type(app).__name__}, not a calculator App")
    return app


def get_handler_path(handler: Callable) -> str:  # type: ignore[type-arg]
    """
    Get fully qualified path for a handler function.

    Args:
        handler: The handler function

    Returns:
        String like "calculator.controller.add"

    Raises:
        ValueError: If module cannot be determined
    """
    module = inspect.getmodule(handler)
    if module is None:
        raise ValueError(f"Cannot determine module for {handler}")

    return f"{module.__name__}.{handler.__name__}"
