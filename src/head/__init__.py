"""Server-side head assembly module."""

from src.head.assembler import HeadAssembler, render_head
from src.head.components import (
    HeadComponent,
    InlineScriptFacet,
    MarkupFacet,
    ResourceComponent,
)
from src.head.context import HeadRenderContext
from src.head.emitter import StyleScriptEmitter
from src.head.errors import (
    ExpressionEvaluationError,
    HeadErrorClass,
    HeadRenderError,
    LocaleLookupError,
    ResourceNotFoundError,
)
from src.head.init_scripts import InitScriptQueue, build_init_script
from src.head.metrics import HeadMetrics
from src.head.models import ClientWindowState, RequestState, ResourceKey, ResourceType
from src.head.registry import ResourceRegistry
from src.head.settings_script import build_settings_script, consume_initial_redirect
from src.head.state_machine import HeadState, HeadStateError, HeadStateMachine
from src.head.theme import ThemeResolver
from src.head.writer import HtmlResponseWriter


__all__ = [
    "ClientWindowState",
    "ExpressionEvaluationError",
    "HeadAssembler",
    "HeadComponent",
    "HeadErrorClass",
    "HeadMetrics",
    "HeadRenderContext",
    "HeadRenderError",
    "HeadState",
    "HeadStateError",
    "HeadStateMachine",
    "HtmlResponseWriter",
    "InitScriptQueue",
    "InlineScriptFacet",
    "LocaleLookupError",
    "MarkupFacet",
    "RequestState",
    "ResourceComponent",
    "ResourceKey",
    "ResourceNotFoundError",
    "ResourceRegistry",
    "ResourceType",
    "StyleScriptEmitter",
    "ThemeResolver",
    "build_init_script",
    "build_settings_script",
    "consume_initial_redirect",
    "render_head",
]
