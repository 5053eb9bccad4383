"""Tests for the calculator handlers and route table."""

import pytest

from calculator.controller import GREETING, add, greeting, subtract
from calculator.exceptions import ParameterError
from calculator.routes import app
from calculator.view import View


def test_greeting():
    """Test the fixed greeting text."""
    assert greeting() == "Hello from the calculator package!"
    assert greeting() == GREETING


def test_add_returns_index_view():
    """Test that add binds the sum into the index view."""
    assert add(2, 3) == View("calculator::index", {"result": 5})


def test_subtract_returns_index_view():
    """Test that subtract binds the difference into the index view."""
    assert subtract(2, 5) == View("calculator::index", {"result": -3})


def test_route_table():
    """Test the three registered routes."""
    assert app.list_routes() == ["/calculator", "/add/{a}/{b}", "/subtract/{a}/{b}"]
    for path in app.list_routes():
        assert app.get_route(path).methods == ["GET"]
    assert app.get_route("/add/{a}/{b}").handler is add
    assert app.get_route("/subtract/{a}/{b}").handler is subtract


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/add/2/3", 5),
        ("/add/3/2", 5),
        ("/add/-4/4", 0),
        ("/add/1.5/2", 3.5),
        ("/subtract/2/5", -3),
        ("/subtract/10/4", 6),
        ("/subtract/0.5/0.25", 0.25),
    ],
)
def test_dispatch_arithmetic(path, expected):
    """Test in-process dispatch of the arithmetic routes."""
    result = app.dispatch("GET", path)
    assert result.template == "calculator::index"
    assert result.context["result"] == expected


def test_dispatch_greeting():
    """Test in-process dispatch of the greeting route."""
    assert app.dispatch("GET", "/calculator") == GREETING


def test_dispatch_is_idempotent():
    """Test that repeated requests give identical results."""
    results = [app.dispatch("GET", "/add/2/3") for _ in range(3)]
    assert all(r == results[0] for r in results)


def test_dispatch_rejects_non_numeric():
    """Test that non-numeric operands are rejected."""
    with pytest.raises(ParameterError):
        app.dispatch("GET", "/add/two/3")
