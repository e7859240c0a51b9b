"""Per-request render context."""

import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from src.config.schemas.head import HeadConfig
from src.head.init_scripts import InitScriptQueue
from src.head.metrics import HeadMetrics
from src.head.models import ClientWindowState
from src.head.protocols import (
    Encodable,
    ExpressionEvaluator,
    LocaleProvider,
    ResourceRenderedTracker,
    ResourceResolver,
    ResponseCookies,
    ResponseWriter,
)
from src.head.registry import ResourceRegistry


def _identity(url: str) -> str:
    return url


@dataclass
class HeadRenderContext:
    """Everything one head render reads and mutates.

    A context is created per request and discarded after ``encode_end``.
    The registry and the init script queue are owned by it and never
    shared with another request.

    Attributes:
        config: Head configuration.
        writer: Output sink.
        resolver: Resource resolution collaborator.
        evaluator: Expression collaborator for the theme value.
        locale_provider: Locale collaborator.
        view_id: Identifier of the rendered view.
        context_path: Request context path.
        secure: Whether the request arrived over a secure channel.
        request_cookies: Cookies sent with the request.
        response_cookies: Cookies of the outgoing response.
        client_window: Client window of the request, if any.
        tracker: Framework-level rendered-resource record, if any.
        encode_resource_url: Response URL encoding for resource paths.
        secure_window_id: Securing transform for window ids.
        head_resources: Resources registered for the head by other components.
        request_id: Identifier bound into log records.
        registry: Resources emitted in this render.
        init_scripts: Init script fragments collected during this render.
        metrics: Counters shared by every emitter of this render.
    """

    config: HeadConfig
    writer: ResponseWriter
    resolver: ResourceResolver
    evaluator: ExpressionEvaluator
    locale_provider: LocaleProvider
    view_id: str
    context_path: str = ""
    secure: bool = False
    request_cookies: dict[str, str] = field(default_factory=dict)
    response_cookies: ResponseCookies | None = None
    client_window: ClientWindowState | None = None
    tracker: ResourceRenderedTracker | None = None
    encode_resource_url: Callable[[str], str] = _identity
    secure_window_id: Callable[[str], str] | None = None
    head_resources: Sequence[Encodable] = ()
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    registry: ResourceRegistry = field(default_factory=ResourceRegistry)
    init_scripts: InitScriptQueue = field(default_factory=InitScriptQueue)
    metrics: HeadMetrics = field(default_factory=HeadMetrics)
