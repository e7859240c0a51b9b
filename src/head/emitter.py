"""Stylesheet and script inclusion with per-render deduplication."""

import structlog

from src.head.constants import COMPONENT_EMITTER
from src.head.context import HeadRenderContext
from src.head.errors import ResourceNotFoundError
from src.head.metrics import HeadMetrics
from src.head.models import ResourceKey, ResourceType


logger = structlog.get_logger()


class StyleScriptEmitter:
    """Writes ``<link>`` and ``<script>`` references, each at most once.

    Deduplication is keyed by the logical (library, name) pair in the
    context's registry, so a resource is included once even when it
    resolves to different URLs.
    """

    def __init__(
        self,
        context: HeadRenderContext,
        metrics: HeadMetrics | None = None,
    ) -> None:
        """Initialize the emitter.

        Args:
            context: Render context holding the registry and collaborators.
            metrics: Optional metrics instance, defaults to the context's.
        """
        self._context = context
        self._metrics = metrics or context.metrics
        self._log = logger.bind(
            component=COMPONENT_EMITTER,
            request_id=context.request_id,
        )

    def emit_css(self, library: str, name: str) -> None:
        """Include a stylesheet.

        Raises:
            ResourceNotFoundError: If the stylesheet cannot be resolved.
        """
        self._emit(ResourceKey(library, name), ResourceType.CSS)

    def emit_js(self, library: str, name: str) -> None:
        """Include a script.

        Raises:
            ResourceNotFoundError: If the script cannot be resolved.
        """
        self._emit(ResourceKey(library, name), ResourceType.JS)

    def _already_rendered(self, key: ResourceKey) -> bool:
        if self._context.registry.has_been_emitted(key):
            return True
        tracker = self._context.tracker
        return tracker is not None and tracker.is_resource_rendered(
            key.library, key.name
        )

    def _emit(self, key: ResourceKey, resource_type: ResourceType) -> None:
        if self._already_rendered(key):
            self._metrics.record_duplicate()
            self._log.debug("resource_already_emitted", resource=str(key))
            return

        path = self._context.resolver.resolve(key.library, key.name)
        if path is None:
            self._metrics.record_resolution_failure()
            raise ResourceNotFoundError(key.library, key.name, resource_type.value)

        url = self._context.encode_resource_url(path)
        writer = self._context.writer
        if resource_type is ResourceType.CSS:
            writer.start_element("link")
            writer.write_attribute("type", "text/css")
            writer.write_attribute("rel", "stylesheet")
            writer.write_attribute("href", url)
            writer.end_element("link")
        else:
            writer.start_element("script")
            writer.write_attribute("src", url)
            writer.end_element("script")

        self._context.registry.mark_emitted(key)
        self._metrics.record_emitted(resource_type.value)
        self._log.debug(
            "resource_emitted",
            resource=str(key),
            resource_type=resource_type.value,
            url=url,
        )
