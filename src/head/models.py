"""Data models for head assembly."""

from dataclasses import dataclass
from enum import Enum


class ResourceType(str, Enum):
    """Kind of a referenced resource."""

    CSS = "css"
    JS = "js"


@dataclass(frozen=True)
class ResourceKey:
    """Logical identity of a stylesheet or script.

    Independent of the URL the resource resolves to. Equality is exact
    and case-sensitive on both fields.

    Attributes:
        library: Resource library.
        name: Resource name inside the library.
    """

    library: str
    name: str

    def __str__(self) -> str:
        return f"{self.library}:{self.name}"


@dataclass(frozen=True)
class ClientWindowState:
    """Client window of the current request.

    Attributes:
        window_id: Raw window identifier.
        framework_managed: Whether the window mechanism is the framework's own.
    """

    window_id: str
    framework_managed: bool = True


@dataclass(frozen=True)
class RequestState:
    """Per-request values written into the client settings.

    Attributes:
        locale: Current locale in string form (e.g. "en_US").
        view_id: Identifier of the rendered view.
        context_path: Request context path.
        secure: Whether the request arrived over a secure channel.
        client_window: Client window of the request, if any.
    """

    locale: str
    view_id: str
    context_path: str = ""
    secure: bool = False
    client_window: ClientWindowState | None = None


def locale_language(locale: str) -> str:
    """Get the language part of a locale string.

    Args:
        locale: Locale such as "pt_BR", "pt-BR" or "pt".

    Returns:
        Lower-cased language code.
    """
    return locale.replace("-", "_").split("_", 1)[0].lower()
