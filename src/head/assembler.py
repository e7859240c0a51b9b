"""Head assembly orchestrator."""

import time

import structlog

from src.head.components import HeadComponent
from src.head.constants import (
    BEAN_VALIDATION_JS,
    COMPONENT_HEAD,
    FACET_FIRST,
    FACET_LAST,
    FACET_MIDDLE,
    LIBRARY,
    LOCALE_JS_TEMPLATE,
    MOMENT_JS,
    PRIMEICONS_CSS,
)
from src.head.context import HeadRenderContext
from src.head.emitter import StyleScriptEmitter
from src.head.errors import LocaleLookupError, ResourceNotFoundError
from src.head.init_scripts import build_init_script
from src.head.metrics import HeadMetrics
from src.head.models import RequestState, locale_language
from src.head.settings_script import (
    build_settings_script,
    consume_initial_redirect,
    secure_window_id,
)
from src.head.state_machine import HeadState, HeadStateMachine
from src.head.theme import ThemeResolver


logger = structlog.get_logger()


class HeadAssembler:
    """Renders the head of one page.

    Implements the head state machine:
        START -> LEADING_FACET -> THEME_CSS -> ICON_CSS -> MIDDLE_FACET
        -> REGISTERED_RESOURCES -> VALIDATION_SCRIPTS -> LOCALE_SCRIPT
        -> SETTINGS_SCRIPT -> INIT_SCRIPT -> AWAITING_TRAILING_FACET

    ``encode_begin`` runs up to AWAITING_TRAILING_FACET. ``encode_end``
    writes the trailing facet after the rest of the component tree had
    its chance to contribute resources, then closes the head.

    A fatal error aborts the render and leaves already written markup
    in place. The locale script is the only inclusion whose failure is
    tolerated.
    """

    def __init__(
        self,
        context: HeadRenderContext,
        metrics: HeadMetrics | None = None,
    ) -> None:
        """Initialize the assembler.

        Args:
            context: Render context of the current request.
            metrics: Optional metrics instance replacing the context's.
        """
        if metrics is not None:
            context.metrics = metrics
        self._context = context
        self._metrics = context.metrics
        self._emitter = StyleScriptEmitter(context, self._metrics)
        self._theme_resolver = ThemeResolver(context.evaluator)
        self._state_machine = HeadStateMachine(context.request_id)
        self._started_at: float | None = None
        self._log = logger.bind(
            component=COMPONENT_HEAD,
            request_id=context.request_id,
            view_id=context.view_id,
        )

    @property
    def state(self) -> HeadState:
        """Get current head state."""
        return self._state_machine.state

    def encode_begin(self, component: HeadComponent) -> None:
        """Write the head start tag and everything before the trailing facet.

        Args:
            component: The head component.

        Raises:
            ResourceNotFoundError: If a required resource cannot be resolved.
            ExpressionEvaluationError: If the theme expression fails.
            LocaleLookupError: If the settings script has no locale.
        """
        self._started_at = time.perf_counter()
        self._log.info("head_render_started")

        try:
            writer = self._context.writer
            writer.start_element("head")
            writer.write_attribute("id", component.client_id)

            self._advance(HeadState.LEADING_FACET)
            self._encode_facet(component, FACET_FIRST)

            self._advance(HeadState.THEME_CSS)
            self._encode_theme()

            self._advance(HeadState.ICON_CSS)
            if self._context.config.primeicons_enabled:
                self._emitter.emit_css(LIBRARY, PRIMEICONS_CSS)

            self._advance(HeadState.MIDDLE_FACET)
            self._encode_facet(component, FACET_MIDDLE)

            self._advance(HeadState.REGISTERED_RESOURCES)
            for resource in self._context.head_resources:
                if resource.rendered:
                    resource.encode_all(self._context)

            self._advance(HeadState.VALIDATION_SCRIPTS)
            self._encode_validation_scripts()

            self._advance(HeadState.LOCALE_SCRIPT)
            self._encode_locale_script()

            self._advance(HeadState.SETTINGS_SCRIPT)
            self._encode_settings_script()

            self._advance(HeadState.INIT_SCRIPT)
            self._encode_init_script()

            self._advance(HeadState.AWAITING_TRAILING_FACET)
        except Exception as e:
            self._fail(e)
            raise

    def encode_end(self, component: HeadComponent) -> None:
        """Write the trailing facet and close the head.

        Args:
            component: The head component.
        """
        try:
            self._advance(HeadState.TRAILING_FACET)
            self._encode_facet(component, FACET_LAST)
            self._context.writer.end_element("head")
            self._advance(HeadState.DONE)
        except Exception as e:
            self._fail(e)
            raise

        duration_ms = 0.0
        if self._started_at is not None:
            duration_ms = (time.perf_counter() - self._started_at) * 1000
        self._metrics.record_render(duration_ms)
        self._log.info(
            "head_render_complete",
            resources_emitted=len(self._context.registry),
            duration_ms=round(duration_ms, 2),
        )

    def _advance(self, state: HeadState) -> None:
        self._state_machine.transition(state)

    def _fail(self, error: Exception) -> None:
        failed_in = self._state_machine.state.name
        if not self._state_machine.is_terminal():
            self._state_machine.to_failed()
        self._metrics.record_failure()
        self._log.error(
            "head_render_failed",
            state=failed_in,
            error=f"{type(error).__name__}: {error}",
        )

    def _encode_facet(self, component: HeadComponent, name: str) -> None:
        facet = component.get_facet(name)
        if facet is not None and facet.rendered:
            facet.encode_all(self._context)

    def _encode_theme(self) -> None:
        key = self._theme_resolver.resolve_theme(self._context.config.theme)
        if key is not None:
            self._emitter.emit_css(key.library, key.name)

    def _encode_validation_scripts(self) -> None:
        config = self._context.config
        if not config.client_side_validation:
            return

        # moment is needed for date validation
        self._emitter.emit_js(LIBRARY, MOMENT_JS)
        if config.bean_validation:
            self._emitter.emit_js(LIBRARY, BEAN_VALIDATION_JS)

    def _encode_locale_script(self) -> None:
        config = self._context.config
        if not config.client_side_localization:
            return

        try:
            locale = self._context.locale_provider.current_locale()
            name = LOCALE_JS_TEMPLATE.format(language=locale_language(locale))
            self._emitter.emit_js(LIBRARY, name)
        except (LocaleLookupError, ResourceNotFoundError) as e:
            self._metrics.record_locale_script_failure()
            if config.is_development:
                self._log.warning(
                    "locale_script_unavailable",
                    error=e.message,
                    **e.details,
                )

    def _encode_settings_script(self) -> None:
        context = self._context
        window = context.client_window

        # an aborted render leaves the redirect marker unconsumed
        request = RequestState(
            locale=context.locale_provider.current_locale(),
            view_id=context.view_id,
            context_path=context.context_path,
            secure=context.secure,
            client_window=window,
        )

        initial_redirect = False
        if window is not None and window.framework_managed:
            initial_redirect = consume_initial_redirect(
                window.window_id,
                context.request_cookies,
                context.response_cookies,
            )

        script = build_settings_script(
            context.config,
            request,
            initial_redirect=initial_redirect,
            window_id_transform=context.secure_window_id or secure_window_id,
        )
        self._write_inline_script(script)

    def _encode_init_script(self) -> None:
        count = len(self._context.init_scripts)
        script = build_init_script(
            self._context.init_scripts,
            self._context.config.move_scripts_to_bottom,
        )
        if script is None:
            return

        self._metrics.record_init_scripts(count)
        self._write_inline_script(script)

    def _write_inline_script(self, script: str) -> None:
        writer = self._context.writer
        writer.start_element("script")
        if not self._context.config.html5_doctype:
            writer.write_attribute("type", "text/javascript")
        writer.write(script)
        writer.end_element("script")


def render_head(
    context: HeadRenderContext,
    component: HeadComponent,
    metrics: HeadMetrics | None = None,
) -> None:
    """Render a complete head in one go.

    Args:
        context: Render context of the current request.
        component: The head component.
        metrics: Optional metrics instance.
    """
    assembler = HeadAssembler(context, metrics)
    assembler.encode_begin(component)
    assembler.encode_end(component)
