"""
Route definitions for calculator endpoints.
"""

import inspect
import logging
import re
from typing import Any, Callable, get_type_hints

from calculator.exceptions import ParameterError, RouteError
from calculator.operands import Number, parse_number

logger = logging.getLogger(__name__)

_PARAM_RE = re.compile(r"\{(\w+)\}")

# Handler annotation -> (converter, OpenAPI schema type)
_CONVERTERS: dict[Any, tuple[Callable[[str], Any], str]] = {
    Number: (parse_number, "number"),
    int: (int, "integer"),
    float: (float, "number"),
    str: (str, "string"),
}


def normalize_path(path: str) -> str:
    """
    Give a path exactly one leading slash and no trailing slash.

    Examples:
        calculator   -> /calculator
        /add/{a}/{b}/ -> /add/{a}/{b}
    """
    return "/" + path.strip("/")


def compile_path(path: str) -> tuple[re.Pattern[str], list[str]]:
    """
    Compile a path pattern into a regex and its placeholder names.

    Each ``{name}`` placeholder matches one non-empty path segment.
    """
    names: list[str] = []
    regex = ""
    pos = 0
    for match in _PARAM_RE.finditer(path):
        regex += re.escape(path[pos:match.start()])
        regex += "([^/]+)"
        names.append(match.group(1))
        pos = match.end()
    regex += re.escape(path[pos:])
    return re.compile(regex), names


class Route:
    """Represents a registered route: methods, a path pattern and its handler."""

    def __init__(
        self,
        handler: Callable[..., Any],
        path: str,
        methods: list[str] | None = None,
        summary: str | None = None,
        description: str | None = None,
        tags: list[str] | None = None,
    ):
        self.handler = handler
        self.path = normalize_path(path)
        self.methods = [m.upper() for m in (methods or ["GET"])]
        self.summary = summary or handler.__name__.replace("_", " ").title()
        self.description = description or inspect.getdoc(handler)
        self.tags = tags or []
        self.__name__ = handler.__name__
        self.__doc__ = handler.__doc__

        self._regex, self.param_names = compile_path(self.path)
        self.return_type: Any = None
        self.param_types: dict[str, str] = {}
        self._converters: list[Callable[[str], Any]] = []
        self._inspect_handler()

    def _inspect_handler(self) -> None:
        """Check handler arity and pick a converter per path parameter."""
        sig = inspect.signature(self.handler)
        try:
            sig.bind(*self.param_names)
        except TypeError as exc:
            raise RouteError(
                f"Handler '{self.__name__}' cannot take parameters of {self.path}: {exc}"
            ) from None

        type_hints = get_type_hints(self.handler)
        self.return_type = type_hints.get("return")

        positional = [
            p.name for p in sig.parameters.values()
            if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
        ]
        for index, name in enumerate(self.param_names):
            # Placeholders bind positionally; extras land in *args
            arg_name = positional[index] if index < len(positional) else None
            annotation = type_hints.get(arg_name, str) if arg_name else str
            converter, schema_type = _CONVERTERS.get(annotation, (str, "string"))
            self._converters.append(converter)
            self.param_types[name] = schema_type

    def match(self, path: str) -> tuple[str, ...] | None:
        """Return the raw path parameters if the path matches, else None."""
        m = self._regex.fullmatch(normalize_path(path))
        if m is None:
            return None
        return m.groups()

    def accepts(self, method: str) -> bool:
        method = method.upper()
        if method == "HEAD":
            return "HEAD" in self.methods or "GET" in self.methods
        return method in self.methods

    def bind(self, raw_args: tuple[str, ...] | list[str]) -> tuple[Any, ...]:
        """Convert raw path parameters for the handler.

        Raises:
            ParameterError: If a value cannot be converted.
        """
        if len(raw_args) != len(self.param_names):
            raise ParameterError(
                f"Expected {len(self.param_names)} path parameters, got {len(raw_args)}"
            )
        args = []
        for name, converter, raw in zip(self.param_names, self._converters, raw_args):
            try:
                args.append(converter(raw))
            except ValueError as exc:
                logger.warning("Rejected parameter %s=%r for %s: %s", name, raw, self.path, exc)
                raise ParameterError(f"Invalid value for '{name}': {exc}", name=name) from None
        return tuple(args)

    def invoke(self, raw_args: tuple[str, ...] | list[str]) -> Any:
        """Convert raw path parameters and execute the handler."""
        return self.handler(*self.bind(raw_args))

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        """Execute the route handler."""
        return self.handler(*args, **kwargs)

    def __repr__(self) -> str:
        methods_str = ",".join(self.methods)
        return f"<Route {self.path} [{methods_str}]>"
