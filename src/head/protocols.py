"""Protocol interfaces for collaborators of the head assembler."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from src.head.context import HeadRenderContext


@runtime_checkable
class ResourceResolver(Protocol):
    """Resolves a logical resource to the path a browser requests."""

    def resolve(self, library: str, name: str) -> str | None:
        """Resolve a resource.

        Args:
            library: Resource library.
            name: Resource name inside the library.

        Returns:
            Request path of the resource, or None when it does not exist.
        """
        ...


@runtime_checkable
class ResourceRenderedTracker(Protocol):
    """Framework-level record of resources rendered elsewhere in the response."""

    def is_resource_rendered(self, library: str, name: str) -> bool:
        """Check whether the framework already rendered a resource."""
        ...


@runtime_checkable
class ExpressionEvaluator(Protocol):
    """Evaluates a configured value that may be an expression."""

    def evaluate(self, expression: str) -> str | None:
        """Evaluate an expression to a string.

        Raises:
            ExpressionEvaluationError: If the expression cannot be evaluated.
        """
        ...


@runtime_checkable
class LocaleProvider(Protocol):
    """Gives the locale of the current request."""

    def current_locale(self) -> str:
        """Get the current locale.

        Raises:
            LocaleLookupError: If no locale can be determined.
        """
        ...


@runtime_checkable
class ResponseWriter(Protocol):
    """Element-stream writer all head markup goes through."""

    def start_element(self, name: str) -> None: ...

    def write_attribute(self, name: str, value: str) -> None: ...

    def write(self, text: str) -> None:
        """Write raw text (script bodies, pre-rendered markup)."""
        ...

    def write_text(self, text: str) -> None:
        """Write escaped character data."""
        ...

    def end_element(self, name: str) -> None: ...


@runtime_checkable
class ResponseCookies(Protocol):
    """Cookies of the outgoing response."""

    def expire(self, name: str) -> None:
        """Add a cookie with max-age 0 so the browser removes it."""
        ...


@runtime_checkable
class Encodable(Protocol):
    """A facet or registered head resource that writes its own markup."""

    @property
    def rendered(self) -> bool: ...

    def encode_all(self, context: "HeadRenderContext") -> None: ...
