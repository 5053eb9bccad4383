"""Main CLI entry point for the calculator."""

import json
import sys
from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.table import Table

from calculator import __version__
from calculator.cli.discovery import DEFAULT_APP, get_handler_path, load_app
from calculator.exceptions import CalculatorError, ConfigError
from calculator.log import configure_logging

APP_OPTION = click.option(
    "--app",
    "app_ref",
    default=DEFAULT_APP,
    show_default=True,
    help="App to use, as 'module:attribute'.",
)


def _load_or_exit(app_ref: str):
    try:
        return load_app(app_ref)
    except ImportError as e:
        click.echo(f"Error: Could not import module for '{app_ref}'", err=True)
        click.echo(f"Details: {e}", err=True)
        sys.exit(1)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="calculator")
def cli() -> None:
    """Calculator - arithmetic endpoints rendered through views."""
    pass


@cli.command()
@APP_OPTION
def routes(app_ref: str) -> None:
    """List registered routes."""
    app = _load_or_exit(app_ref)

    table = Table(title="Routes")
    table.add_column("Method", style="cyan")
    table.add_column("Path", style="green")
    table.add_column("Handler")
    for path in app.list_routes():
        route = app.get_route(path)
        table.add_row(",".join(route.methods), route.path, get_handler_path(route.handler))

    Console().print(table)


@cli.command()
@click.argument("method")
@click.argument("path")
@APP_OPTION
def call(method: str, path: str, app_ref: str) -> None:
    """
    Dispatch a request in-process and print the rendered response.

    Examples:

        calculator call GET /add/2/3

        calculator call GET /subtract/2/5
    """
    app = _load_or_exit(app_ref)
    try:
        result = app.dispatch(method, path)
        click.echo(app.render(result))
    except CalculatorError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@APP_OPTION
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    help="Output file path. Defaults to stdout if not specified.",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["json", "yaml"]),
    default="json",
    help="Output format (default: json)",
)
@click.option("--title", default="Calculator API", show_default=True, help="API title.")
def openapi(app_ref: str, output: str | None, output_format: str, title: str) -> None:
    """Generate the OpenAPI document for the routes."""
    app = _load_or_exit(app_ref)
    spec = app.generate_openapi(title=title, version=__version__)

    if output_format == "yaml":
        content = yaml.dump(spec, default_flow_style=False, sort_keys=False, allow_unicode=True)
    else:
        content = json.dumps(spec, indent=2)

    if output:
        Path(output).write_text(content)
        click.echo(f"OpenAPI spec written to {output}", err=True)
    else:
        click.echo(content)


@cli.command()
@APP_OPTION
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    help="YAML settings file.",
)
@click.option("--host", default=None, help="Interface to bind.")
@click.option("--port", type=int, default=None, help="TCP port to bind.")
@click.option("--log-level", default=None, help="Log level for the calculator logger.")
def serve(
    app_ref: str,
    config_path: str | None,
    host: str | None,
    port: int | None,
    log_level: str | None,
) -> None:
    """Serve the routes over HTTP with uvicorn."""
    import uvicorn

    from calculator.asgi import create_asgi_app
    from calculator.config import load_settings

    try:
        settings = load_settings(config_path, host=host, port=port, log_level=log_level)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    logger = configure_logging(settings.log_level)
    app = _load_or_exit(app_ref)
    for namespace, directory in settings.template_dirs.items():
        app.renderer.add_namespace(namespace, directory)

    logger.info("Serving %d routes on http://%s:%d", len(app.list_routes()), settings.host, settings.port)
    uvicorn.run(
        create_asgi_app(app, version=__version__),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    cli()
