"""
ASGI hosting: expose an App's routes through FastAPI.

FastAPI owns the request lifecycle, including 404 and 405 responses.
Each App route becomes one FastAPI route with the same path and methods.
"""

import logging
from typing import Any, Callable

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel

from calculator import __version__
from calculator.app import App
from calculator.exceptions import ArithmeticOverflowError, ParameterError, ViewError
from calculator.route import Route
from calculator.view import View

logger = logging.getLogger(__name__)


def to_response(app: App, result: Any) -> Response:
    """Convert a handler result into an HTTP response."""
    if isinstance(result, Response):
        return result
    if isinstance(result, View):
        return HTMLResponse(app.renderer.render(result))
    if isinstance(result, BaseModel):
        return JSONResponse(result.model_dump(mode="json"))
    if isinstance(result, str):
        return PlainTextResponse(result)
    return JSONResponse(result)


def _make_endpoint(app: App, route: Route) -> Callable[[Request], Response]:
    def endpoint(request: Request) -> Response:
        raw_args = tuple(request.path_params[name] for name in route.param_names)
        logger.debug("%s %s -> %s%s", request.method, request.url.path, route.__name__, raw_args)
        return to_response(app, route.invoke(raw_args))

    endpoint.__name__ = route.__name__
    return endpoint


def _http_methods(route: Route) -> list[str]:
    """Route methods, with HEAD wherever GET is served."""
    methods = list(route.methods)
    if "GET" in methods and "HEAD" not in methods:
        methods.append("HEAD")
    return methods


def _error_handler(status_code: int) -> Callable[[Request, Exception], JSONResponse]:
    def handler(request: Request, exc: Exception) -> JSONResponse:
        if status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})
    return handler


def create_asgi_app(
    app: App | None = None,
    title: str = "Calculator",
    version: str = __version__,
) -> FastAPI:
    """Build a FastAPI application serving every route of an App.

    Args:
        app: The App to serve. Defaults to the package route table.
        title: Application title.
        version: Application version.

    Returns:
        FastAPI application instance.
    """
    if app is None:
        from calculator.routes import app

    asgi_app = FastAPI(
        title=title,
        version=version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    for path in app.list_routes():
        route = app.get_route(path)
        asgi_app.add_api_route(
            route.path,
            _make_endpoint(app, route),
            methods=_http_methods(route),
            name=route.__name__,
            include_in_schema=False,
        )

    asgi_app.add_exception_handler(ParameterError, _error_handler(400))
    asgi_app.add_exception_handler(ArithmeticOverflowError, _error_handler(400))
    asgi_app.add_exception_handler(ViewError, _error_handler(500))

    logger.info("ASGI app created with %d routes", len(app.list_routes()))
    return asgi_app
