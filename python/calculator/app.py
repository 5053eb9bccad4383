"""
Calculator App - route table and in-process dispatch.
"""

import json
import logging
from typing import Any, Callable

from pydantic import BaseModel

from calculator.exceptions import MethodNotAllowedError, RouteNotFoundError
from calculator.route import Route, normalize_path
from calculator.view import View, ViewRenderer

logger = logging.getLogger(__name__)


class App:
    """Route table mapping (method, path pattern) to handlers."""

    def __init__(self, renderer: ViewRenderer | None = None):
        self._route_registry: dict[str, Route] = {}
        self.renderer = renderer or ViewRenderer()

    def route(
        self,
        path: str,
        methods: list[str] | None = None,
        summary: str | None = None,
        description: str | None = None,
        tags: list[str] | None = None,
    ) -> Callable[[Callable[..., Any]], Route]:
        """Decorator to register a function as a route handler.

        Args:
            path: The path pattern (e.g., "/add/{a}/{b}").
            methods: HTTP methods for the route. Defaults to ["GET"].
            summary: Optional short summary for OpenAPI documentation.
            description: Optional detailed description for OpenAPI documentation.
            tags: Optional list of tags for grouping routes in OpenAPI docs.

        Returns:
            Decorator function that registers the route.
        """
        def decorator(func: Callable[..., Any]) -> Route:
            return self.add_route(path, func, methods, summary, description, tags)
        return decorator

    def add_route(
        self,
        path: str,
        handler: Callable[..., Any],
        methods: list[str] | None = None,
        summary: str | None = None,
        description: str | None = None,
        tags: list[str] | None = None,
    ) -> Route:
        """Register a handler for a path pattern.

        Registering a path again replaces the earlier route.
        """
        route_obj = Route(handler, path, methods, summary, description, tags)
        self._route_registry[route_obj.path] = route_obj
        logger.debug("Registered %r -> %s", route_obj, route_obj.__name__)
        return route_obj

    def get_route(self, path: str) -> Route:
        """Retrieve a registered route by its path pattern.

        Args:
            path: The route path pattern.

        Returns:
            The registered route.

        Raises:
            RouteNotFoundError: If route is not found.
        """
        try:
            return self._route_registry[normalize_path(path)]
        except KeyError:
            raise RouteNotFoundError(f"Route '{path}' not found") from None

    def list_routes(self) -> list[str]:
        """List all registered path patterns in registration order.

        Returns:
            List of route paths.
        """
        return list(self._route_registry.keys())

    def resolve(self, method: str, path: str) -> tuple[Route, tuple[str, ...]]:
        """Find the route serving a request.

        Args:
            method: HTTP method of the request.
            path: Concrete request path (e.g., "/add/2/3").

        Returns:
            Tuple of (route, raw path parameters).

        Raises:
            RouteNotFoundError: If no pattern matches the path.
            MethodNotAllowedError: If patterns match but none accepts the method.
        """
        allowed: list[str] = []
        for route in self._route_registry.values():
            raw_args = route.match(path)
            if raw_args is None:
                continue
            if route.accepts(method):
                return route, raw_args
            allowed.extend(m for m in route.methods if m not in allowed)

        if allowed:
            raise MethodNotAllowedError(
                f"Method {method.upper()} not allowed for '{path}'", allowed=allowed
            )
        raise RouteNotFoundError(f"No route matches '{path}'")

    def dispatch(self, method: str, path: str) -> Any:
        """Resolve a request and run its handler with the path parameters."""
        route, raw_args = self.resolve(method, path)
        logger.debug("Dispatching %s %s -> %s%s", method.upper(), path, route.__name__, raw_args)
        return route.invoke(raw_args)

    def render(self, result: Any) -> str:
        """Render a handler result as response text."""
        if isinstance(result, View):
            return self.renderer.render(result)
        if isinstance(result, BaseModel):
            return result.model_dump_json()
        if isinstance(result, (dict, list)):
            return json.dumps(result)
        return str(result)

    def generate_openapi(self, title: str = "Calculator API", version: str = "1.0.0") -> dict[str, Any]:
        """Generate OpenAPI 3.0 specification from registered routes.

        Args:
            title: API title for the OpenAPI spec.
            version: API version for the OpenAPI spec.

        Returns:
            OpenAPI 3.0 specification dictionary.
        """
        from calculator.openapi_generator import generate_openapi_spec
        return generate_openapi_spec(self, title, version)
