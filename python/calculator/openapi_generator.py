"""
OpenAPI 3.0 specification generator for calculator routes.
"""

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from calculator.view import View

if TYPE_CHECKING:
    from calculator.app import App
    from calculator.route import Route


def pydantic_model_to_schema(model: Any) -> dict[str, Any]:
    """
    Convert a Pydantic model to OpenAPI schema.

    Args:
        model: Pydantic model class

    Returns:
        OpenAPI schema dictionary, empty for anything that is not a model
    """
    if not isinstance(model, type) or not issubclass(model, BaseModel):
        return {}
    return model.model_json_schema()


def extract_path_parameters(route: "Route") -> list[dict[str, Any]]:
    """
    Describe the path parameters of a route.

    Args:
        route: Route object

    Returns:
        List of parameter definitions
    """
    return [
        {
            "name": name,
            "in": "path",
            "required": True,
            "schema": {"type": route.param_types.get(name, "string")},
        }
        for name in route.param_names
    ]


def success_response(route: "Route") -> dict[str, Any]:
    """Describe the 200 response from the handler's return annotation."""
    return_type = route.return_type
    if isinstance(return_type, type) and issubclass(return_type, View):
        media_type, schema = "text/html", {"type": "string"}
    elif return_type is str:
        media_type, schema = "text/plain", {"type": "string"}
    else:
        schema = pydantic_model_to_schema(return_type)
        if not schema:
            return {"description": "Successful response"}
        media_type = "application/json"

    return {
        "description": "Successful response",
        "content": {media_type: {"schema": schema}},
    }


def generate_operation(route: "Route", method: str) -> dict[str, Any]:
    """
    Generate OpenAPI operation object for a route method.

    Args:
        route: Route object
        method: HTTP method (GET, POST, etc.)

    Returns:
        OpenAPI operation dictionary
    """
    operation: dict[str, Any] = {
        "operationId": f"{method.lower()}_{route.handler.__name__}",
        "summary": route.summary,
        "tags": route.tags if route.tags else [],
    }

    if route.description:
        operation["description"] = route.description

    path_params = extract_path_parameters(route)
    if path_params:
        operation["parameters"] = path_params

    responses: dict[str, Any] = {"200": success_response(route)}
    if path_params:
        responses["400"] = {"description": "Invalid path parameter"}
    responses["500"] = {"description": "Internal server error"}
    operation["responses"] = responses

    return operation


def generate_openapi_spec(app: "App", title: str = "Calculator API", version: str = "1.0.0") -> dict[str, Any]:
    """
    Generate OpenAPI 3.0 specification from an App.

    Args:
        app: Calculator App instance
        title: API title
        version: API version

    Returns:
        OpenAPI 3.0 specification dictionary
    """
    spec: dict[str, Any] = {
        "openapi": "3.0.0",
        "info": {
            "title": title,
            "version": version,
        },
        "paths": {},
        "components": {
            "schemas": {}
        }
    }

    schemas: dict[str, Any] = {}

    for route_path in app.list_routes():
        route = app.get_route(route_path)
        path_item = spec["paths"].setdefault(route.path, {})

        for method in route.methods:
            path_item[method.lower()] = generate_operation(route, method)

        schema = pydantic_model_to_schema(route.return_type)
        if schema and "title" in schema:
            schemas[schema["title"]] = schema

    if schemas:
        spec["components"]["schemas"] = schemas

    return spec
