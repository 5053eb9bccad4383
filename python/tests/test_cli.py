"""Tests for the calculator command line."""

import json
import logging

import pytest
import yaml
from click.testing import CliRunner

from calculator import __version__
from calculator.cli import main as cli_main
from calculator.cli.discovery import get_handler_path, load_app
from calculator.controller import add
from calculator.routes import app as package_app


@pytest.fixture
def runner():
    return CliRunner()


def test_version(runner):
    """Test --version output."""
    result = runner.invoke(cli_main.cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_routes_table(runner):
    """Test that routes lists every route with its handler."""
    result = runner.invoke(cli_main.cli, ["routes"])
    assert result.exit_code == 0
    assert "/calculator" in result.output
    assert "/add/{a}/{b}" in result.output
    assert "calculator.controller.subtract" in result.output


@pytest.mark.parametrize(
    "path, expected",
    [("/add/2/3", '<span id="result">5</span>'), ("/subtract/2/5", '<span id="result">-3</span>')],
)
def test_call_renders_view(runner, path, expected):
    """Test in-process calls of the arithmetic routes."""
    result = runner.invoke(cli_main.cli, ["call", "GET", path])
    assert result.exit_code == 0
    assert expected in result.output


def test_call_greeting(runner):
    """Test in-process call of the greeting route."""
    result = runner.invoke(cli_main.cli, ["call", "get", "calculator"])
    assert result.exit_code == 0
    assert result.output.strip() == "Hello from the calculator package!"


@pytest.mark.parametrize(
    "args",
    [["GET", "/multiply/2/3"], ["POST", "/add/2/3"], ["GET", "/add/x/3"]],
)
def test_call_errors(runner, args):
    """Test that failed dispatches exit with status 1."""
    result = runner.invoke(cli_main.cli, ["call", *args])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_call_unknown_app(runner):
    """Test that an unimportable app reference fails cleanly."""
    result = runner.invoke(cli_main.cli, ["call", "GET", "/add/1/2", "--app", "no_such_module:app"])
    assert result.exit_code == 1
    assert "Could not import" in result.output


def test_openapi_json_to_stdout(runner):
    """Test JSON OpenAPI output."""
    result = runner.invoke(cli_main.cli, ["openapi"])
    assert result.exit_code == 0
    spec = json.loads(result.output)
    assert "/add/{a}/{b}" in spec["paths"]
    assert spec["info"]["version"] == __version__


def test_openapi_yaml_to_file(runner, tmp_path):
    """Test YAML OpenAPI output written to a file."""
    target = tmp_path / "openapi.yaml"
    result = runner.invoke(cli_main.cli, ["openapi", "-f", "yaml", "-o", str(target), "--title", "Calc"])
    assert result.exit_code == 0
    spec = yaml.safe_load(target.read_text())
    assert spec["info"]["title"] == "Calc"
    assert "/subtract/{a}/{b}" in spec["paths"]


def test_serve_runs_uvicorn(runner, monkeypatch, tmp_path):
    """Test that serve passes the settings to uvicorn."""
    import uvicorn

    calls = {}

    def fake_run(asgi_app, **kwargs):
        calls["app"] = asgi_app
        calls.update(kwargs)

    monkeypatch.setattr(uvicorn, "run", fake_run)
    monkeypatch.setattr(cli_main, "configure_logging", lambda level: logging.getLogger("calculator"))
    config = tmp_path / "calculator.yaml"
    config.write_text("host: 0.0.0.0\nport: 9000\nlog_level: warning\n")

    result = runner.invoke(cli_main.cli, ["serve", "--config", str(config), "--port", "9001"])
    assert result.exit_code == 0, result.output
    assert calls["host"] == "0.0.0.0"
    assert calls["port"] == 9001
    assert calls["log_level"] == "warning"
    assert hasattr(calls["app"], "router")


def test_serve_bad_config(runner, tmp_path):
    """Test that serve reports configuration errors."""
    result = runner.invoke(cli_main.cli, ["serve", "--config", str(tmp_path / "missing.yaml")])
    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_load_app_default():
    """Test that the default reference names the package route table."""
    assert load_app() is package_app
    assert load_app("calculator.routes") is package_app


def test_load_app_rejects_non_app():
    """Test that the attribute must be an App."""
    with pytest.raises(ValueError, match="not a calculator App"):
        load_app("calculator.controller:GREETING")
    with pytest.raises(ValueError, match="no attribute"):
        load_app("calculator.controller:missing")


def test_get_handler_path():
    """Test fully qualified handler names."""
    assert get_handler_path(add) == "calculator.controller.add"


def test_call_result_too_long_to_print(runner):
    """Test that an unprintable integer result is reported, not raised."""
    nines = "9" * 4300
    result = runner.invoke(cli_main.cli, ["call", "GET", f"/add/{nines}/{nines}"])
    assert result.exit_code == 1
    assert "Error: Result out of range" in result.output
    assert not isinstance(result.exception, ValueError)
