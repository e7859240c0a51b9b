"""Encodable building blocks for facets and registered head resources."""

from collections.abc import Mapping
from dataclasses import dataclass, field

from src.head.context import HeadRenderContext
from src.head.emitter import StyleScriptEmitter
from src.head.models import ResourceType
from src.head.protocols import Encodable


@dataclass(frozen=True)
class ResourceComponent:
    """A stylesheet or script registered for the head by another component.

    Encodes through the shared emitter, so it is deduplicated against
    the resources the head includes itself.

    Attributes:
        library: Resource library.
        name: Resource name inside the library.
        resource_type: Stylesheet or script.
        rendered: Whether the component takes part in rendering.
    """

    library: str
    name: str
    resource_type: ResourceType = ResourceType.JS
    rendered: bool = True

    def encode_all(self, context: HeadRenderContext) -> None:
        emitter = StyleScriptEmitter(context)
        if self.resource_type is ResourceType.CSS:
            emitter.emit_css(self.library, self.name)
        else:
            emitter.emit_js(self.library, self.name)


@dataclass(frozen=True)
class MarkupFacet:
    """A facet contributing a pre-rendered markup snippet."""

    markup: str
    rendered: bool = True

    def encode_all(self, context: HeadRenderContext) -> None:
        context.writer.write(self.markup)


@dataclass(frozen=True)
class InlineScriptFacet:
    """A facet contributing one inline script element."""

    script: str
    rendered: bool = True

    def encode_all(self, context: HeadRenderContext) -> None:
        writer = context.writer
        writer.start_element("script")
        if not context.config.html5_doctype:
            writer.write_attribute("type", "text/javascript")
        writer.write(self.script)
        writer.end_element("script")


@dataclass(frozen=True)
class HeadComponent:
    """The head component being rendered.

    Attributes:
        client_id: Value of the head element's id attribute.
        facets: Facets by name ("first", "middle", "last").
    """

    client_id: str
    facets: Mapping[str, Encodable] = field(default_factory=dict)

    def get_facet(self, name: str) -> Encodable | None:
        """Get a facet by name."""
        return self.facets.get(name)
