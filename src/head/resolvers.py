"""Concrete collaborators for standalone rendering."""

import re
from collections.abc import Collection, Mapping
from urllib.parse import quote, urlencode

from src.head.errors import ExpressionEvaluationError, LocaleLookupError


RESOURCE_MAPPING = "/javax.faces.resource/"
RESOURCE_SUFFIX = ".xhtml"

_EXPRESSION = re.compile(r"^[#$]\{\s*([A-Za-z_][\w.]*)\s*\}$")


class LibraryResourceResolver:
    """Resolves resources against a catalog of library contents.

    Request paths follow ``<contextPath>/javax.faces.resource/<name>.xhtml?ln=<library>``
    with an optional ``v`` parameter carrying the library version.
    """

    def __init__(
        self,
        catalog: Mapping[str, Collection[str]],
        context_path: str = "",
        versions: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            catalog: Library name to the resource names it contains.
            context_path: Request context path prepended to every path.
            versions: Optional library name to version.
        """
        self._catalog = {library: frozenset(names) for library, names in catalog.items()}
        self._context_path = context_path.rstrip("/")
        self._versions = dict(versions or {})

    def resolve(self, library: str, name: str) -> str | None:
        if name not in self._catalog.get(library, frozenset()):
            return None

        params = {"ln": library}
        version = self._versions.get(library)
        if version:
            params["v"] = version
        return (
            f"{self._context_path}{RESOURCE_MAPPING}{quote(name)}{RESOURCE_SUFFIX}"
            f"?{urlencode(params)}"
        )


class MappingExpressionEvaluator:
    """Evaluates ``#{name}`` expressions against a variables mapping.

    Anything that is not an expression is returned unchanged.
    """

    def __init__(self, variables: Mapping[str, str | None] | None = None) -> None:
        self._variables = dict(variables or {})

    def evaluate(self, expression: str) -> str | None:
        if "{" not in expression:
            return expression

        match = _EXPRESSION.match(expression.strip())
        if match is None:
            raise ExpressionEvaluationError(expression, "unsupported expression syntax")

        name = match.group(1)
        if name not in self._variables:
            raise ExpressionEvaluationError(expression, f"unknown variable {name!r}")
        return self._variables[name]


class StaticLocaleProvider:
    """Returns a fixed locale."""

    def __init__(self, locale: str | None) -> None:
        self._locale = locale

    def current_locale(self) -> str:
        if not self._locale:
            raise LocaleLookupError("no locale configured")
        return self._locale


class StaticResourceTracker:
    """Rendered-resource record filled from a fixed set of pairs."""

    def __init__(self, rendered: Collection[tuple[str, str]] = ()) -> None:
        self._rendered = frozenset(rendered)

    def is_resource_rendered(self, library: str, name: str) -> bool:
        return (library, name) in self._rendered


class CookieRecorder:
    """Collects cookies expired on the outgoing response."""

    def __init__(self) -> None:
        self.expired: list[str] = []

    def expire(self, name: str) -> None:
        self.expired.append(name)

    def headers(self) -> list[str]:
        """Render ``Set-Cookie`` header values for the expired cookies."""
        return [f"{name}=; Max-Age=0; Path=/" for name in self.expired]
