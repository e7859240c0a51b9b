"""Error types for head rendering."""

from enum import Enum


class HeadErrorClass(str, Enum):
    """Classification of head rendering errors.

    - RESOURCE_NOT_FOUND: A stylesheet or script could not be resolved
    - EXPRESSION: The configured theme expression could not be evaluated
    - LOCALE: The current locale could not be determined
    """

    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    EXPRESSION = "EXPRESSION"
    LOCALE = "LOCALE"


class HeadRenderError(Exception):
    """Base exception for head rendering errors.

    Provides structured error information for logging.
    """

    def __init__(
        self,
        error_class: HeadErrorClass,
        message: str,
        details: dict[str, str | None] | None = None,
    ) -> None:
        """Initialize the head render error.

        Args:
            error_class: Classification of the error.
            message: Human-readable error message.
            details: Additional structured error details.
        """
        super().__init__(message)
        self.error_class = error_class
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, str | dict[str, str | None]]:
        """Convert error to dictionary for logging.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error_class": self.error_class.value,
            "message": self.message,
            "details": self.details,
        }


class ResourceNotFoundError(HeadRenderError):
    """A named resource could not be resolved to a URL.

    Fatal for every inclusion except the optional locale script.
    """

    def __init__(self, library: str, name: str, resource_type: str) -> None:
        """Initialize the error.

        Args:
            library: Resource library.
            name: Resource name inside the library.
            resource_type: Either "css" or "js".
        """
        label = "CSS" if resource_type == "css" else "JavaScript"
        super().__init__(
            HeadErrorClass.RESOURCE_NOT_FOUND,
            f'Error loading {label}, cannot find "{name}" resource of "{library}" library',
            details={
                "library": library,
                "name": name,
                "resource_type": resource_type,
            },
        )
        self.library = library
        self.name = name
        self.resource_type = resource_type


class ExpressionEvaluationError(HeadRenderError):
    """The theme expression could not be evaluated."""

    def __init__(self, expression: str, reason: str) -> None:
        """Initialize the error.

        Args:
            expression: The expression that failed.
            reason: Why evaluation failed.
        """
        super().__init__(
            HeadErrorClass.EXPRESSION,
            f"Cannot evaluate expression {expression!r}: {reason}",
            details={"expression": expression, "reason": reason},
        )
        self.expression = expression
        self.reason = reason


class LocaleLookupError(HeadRenderError):
    """The locale provider could not determine the current locale."""

    def __init__(self, reason: str) -> None:
        """Initialize the error.

        Args:
            reason: Why the lookup failed.
        """
        super().__init__(
            HeadErrorClass.LOCALE,
            f"Cannot determine current locale: {reason}",
            details={"reason": reason},
        )
        self.reason = reason
