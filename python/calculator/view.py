"""
Views: a template name plus the values bound into it.

View names take the form ``namespace::name``. The ``calculator`` namespace
points at the templates shipped with this package.
"""

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, PrefixLoader, TemplateNotFound

from calculator.exceptions import ViewNotFoundError

NAMESPACE_DELIMITER = "::"
TEMPLATE_SUFFIX = ".html"
PACKAGE_TEMPLATES = Path(__file__).parent / "templates"


class View:
    """A template reference and its context, rendered later by a ViewRenderer."""

    def __init__(self, template: str, context: dict[str, Any] | None = None):
        self.template = template
        self.context = context or {}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, View):
            return NotImplemented
        return self.template == other.template and self.context == other.context

    def __repr__(self) -> str:
        return f"<View {self.template} {self.context!r}>"


def view(name: str, **context: Any) -> View:
    """Build a View, e.g. ``view("calculator::index", result=5)``."""
    return View(name, context)


class ViewRenderer:
    """Renders views with Jinja2, one template directory per namespace."""

    def __init__(self, namespaces: dict[str, str | Path] | None = None):
        self._loaders: dict[str, FileSystemLoader] = {
            "calculator": FileSystemLoader(str(PACKAGE_TEMPLATES)),
        }
        self.env = Environment(
            loader=PrefixLoader(self._loaders, delimiter=NAMESPACE_DELIMITER),
            autoescape=True,
        )
        for name, directory in (namespaces or {}).items():
            self.add_namespace(name, directory)

    def add_namespace(self, name: str, directory: str | Path) -> None:
        """Register (or replace) the template directory for a namespace."""
        self._loaders[name] = FileSystemLoader(str(directory))
        if self.env.cache is not None:
            self.env.cache.clear()

    def namespaces(self) -> list[str]:
        return list(self._loaders.keys())

    def render(self, view: View) -> str:
        """Render a view to HTML.

        Raises:
            ViewNotFoundError: If the template does not exist.
        """
        try:
            template = self.env.get_template(view.template + TEMPLATE_SUFFIX)
        except TemplateNotFound:
            raise ViewNotFoundError(f"View '{view.template}' not found") from None
        return template.render(**view.context)
