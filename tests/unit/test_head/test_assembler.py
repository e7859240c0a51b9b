"""Unit tests for the head assembler."""

import pytest
from structlog.testing import capture_logs

from src.config.schemas.base import ProjectStage
from src.config.schemas.head import HeadConfig
from src.head.assembler import HeadAssembler, render_head
from src.head.components import (
    HeadComponent,
    InlineScriptFacet,
    MarkupFacet,
    ResourceComponent,
)
from src.head.errors import (
    ExpressionEvaluationError,
    LocaleLookupError,
    ResourceNotFoundError,
)
from src.head.metrics import HeadMetrics
from src.head.models import ClientWindowState, ResourceType
from src.head.state_machine import HeadState, HeadStateError
from tests.helpers.head import make_context, output, resource_url


THEME_LINK = (
    '<link type="text/css" rel="stylesheet" href="'
    + resource_url("primefaces", "primefaces-saga-blue/theme.css")
    + '">'
)
ICONS_LINK = (
    '<link type="text/css" rel="stylesheet" href="'
    + resource_url("primefaces", "primeicons/primeicons.css")
    + '">'
)


@pytest.fixture
def metrics() -> HeadMetrics:
    """Fresh metrics instance."""
    return HeadMetrics()


@pytest.fixture
def component() -> HeadComponent:
    """Head component with all three facets."""
    return HeadComponent(
        client_id="j_idt2",
        facets={
            "first": MarkupFacet('<meta charset="utf-8">'),
            "middle": MarkupFacet("<title>Page</title>"),
            "last": MarkupFacet('<link rel="icon" href="/favicon.ico">'),
        },
    )


class TestEncodeBegin:
    """Tests for HeadAssembler.encode_begin."""

    @pytest.mark.unit
    def test_default_head_order(
        self, component: HeadComponent, metrics: HeadMetrics
    ) -> None:
        """Facets, theme, icons and settings appear in the fixed order."""
        context = make_context()
        assembler = HeadAssembler(context, metrics)
        assembler.encode_begin(component)

        markup = output(context)
        assert markup.startswith('<head id="j_idt2"><meta charset="utf-8">')
        positions = [
            markup.index('<meta charset="utf-8">'),
            markup.index(THEME_LINK),
            markup.index(ICONS_LINK),
            markup.index("<title>Page</title>"),
            markup.index("<script>if(window.PrimeFaces){"),
        ]
        assert positions == sorted(positions)
        assert "favicon" not in markup
        assert assembler.state == HeadState.AWAITING_TRAILING_FACET

    @pytest.mark.unit
    def test_encode_end_writes_trailing_facet(
        self, component: HeadComponent, metrics: HeadMetrics
    ) -> None:
        """The trailing facet comes last, then the head closes."""
        context = make_context()
        assembler = HeadAssembler(context, metrics)
        assembler.encode_begin(component)
        assembler.encode_end(component)

        assert output(context).endswith(
            '<link rel="icon" href="/favicon.ico"></head>'
        )
        assert assembler.state == HeadState.DONE
        assert metrics.renders_total == 1

    @pytest.mark.unit
    def test_trailing_facet_follows_subtree_resources(
        self, component: HeadComponent, metrics: HeadMetrics
    ) -> None:
        """Markup written between begin and end precedes the trailing facet."""
        context = make_context()
        assembler = HeadAssembler(context, metrics)
        assembler.encode_begin(component)
        context.writer.write("<!-- subtree -->")
        assembler.encode_end(component)

        markup = output(context)
        assert markup.index("<!-- subtree -->") < markup.index("favicon")

    @pytest.mark.unit
    def test_unrendered_facet_is_skipped(self, metrics: HeadMetrics) -> None:
        """Facets marked not rendered write nothing."""
        context = make_context()
        render_head(
            context,
            HeadComponent("h", {"first": MarkupFacet("<x-first>", rendered=False)}),
            metrics,
        )
        assert "<x-first>" not in output(context)

    @pytest.mark.unit
    def test_theme_none_and_icons_disabled(self, metrics: HeadMetrics) -> None:
        """No stylesheets when the theme is none and icons are off."""
        context = make_context(HeadConfig(theme="none", primeicons_enabled=False))
        render_head(context, HeadComponent("h"), metrics)
        assert "<link" not in output(context)

    @pytest.mark.unit
    def test_theme_expression(self, metrics: HeadMetrics) -> None:
        """The configured expression selects the theme."""
        context = make_context(
            HeadConfig(theme="#{sessionTheme}"), variables={"sessionTheme": "vela"}
        )
        render_head(context, HeadComponent("h"), metrics)
        assert "primefaces-vela-blue/theme.css" in output(context)

    @pytest.mark.unit
    def test_theme_expression_failure_aborts(self, metrics: HeadMetrics) -> None:
        """Evaluation failure aborts the render."""
        context = make_context(HeadConfig(theme="#{sessionTheme}"))
        assembler = HeadAssembler(context, metrics)
        with pytest.raises(ExpressionEvaluationError):
            assembler.encode_begin(HeadComponent("h"))
        assert assembler.state == HeadState.FAILED

    @pytest.mark.unit
    def test_missing_theme_aborts_with_partial_output(
        self, component: HeadComponent, metrics: HeadMetrics
    ) -> None:
        """Markup written before the failure stays in place."""
        context = make_context(HeadConfig(theme="nova-light"))
        assembler = HeadAssembler(context, metrics)
        with pytest.raises(ResourceNotFoundError) as exc_info:
            assembler.encode_begin(component)

        assert exc_info.value.name == "primefaces-nova-light/theme.css"
        assert output(context) == '<head id="j_idt2"><meta charset="utf-8">'
        assert assembler.state == HeadState.FAILED
        assert metrics.render_failures_total == 1

    @pytest.mark.unit
    def test_failure_is_logged(self, metrics: HeadMetrics) -> None:
        """Aborted renders log the failing state."""
        context = make_context(HeadConfig(theme="nova-light"))
        with capture_logs() as logs, pytest.raises(ResourceNotFoundError):
            HeadAssembler(context, metrics).encode_begin(HeadComponent("h"))

        failures = [e for e in logs if e["event"] == "head_render_failed"]
        assert len(failures) == 1
        assert failures[0]["state"] == "THEME_CSS"
        assert failures[0]["log_level"] == "error"

    @pytest.mark.unit
    def test_encode_end_after_failure_is_rejected(self, metrics: HeadMetrics) -> None:
        """A failed render cannot be completed."""
        context = make_context(HeadConfig(theme="nova-light"))
        assembler = HeadAssembler(context, metrics)
        with pytest.raises(ResourceNotFoundError):
            assembler.encode_begin(HeadComponent("h"))
        with pytest.raises(HeadStateError):
            assembler.encode_end(HeadComponent("h"))


class TestRegisteredResources:
    """Tests for resources registered by other components."""

    @pytest.mark.unit
    def test_registered_resources_after_middle_facet(
        self, component: HeadComponent, metrics: HeadMetrics
    ) -> None:
        """Registered resources follow the middle facet."""
        context = make_context(
            head_resources=[ResourceComponent("app", "app.js", ResourceType.JS)]
        )
        render_head(context, component, metrics)

        markup = output(context)
        assert markup.index("<title>Page</title>") < markup.index("app.js")

    @pytest.mark.unit
    def test_registered_duplicate_of_theme_is_suppressed(
        self, metrics: HeadMetrics
    ) -> None:
        """A registered resource already emitted by the head is skipped."""
        context = make_context(
            head_resources=[
                ResourceComponent(
                    "primefaces", "primeicons/primeicons.css", ResourceType.CSS
                ),
                ResourceComponent("app", "app.css", ResourceType.CSS),
                ResourceComponent("app", "app.css", ResourceType.CSS),
            ]
        )
        render_head(context, HeadComponent("h"), metrics)

        markup = output(context)
        assert markup.count("primeicons/primeicons.css") == 1
        assert markup.count("app.css") == 1

    @pytest.mark.unit
    def test_registered_script_suppresses_validation_script(
        self, metrics: HeadMetrics
    ) -> None:
        """The head skips scripts a registered resource already included."""
        context = make_context(
            HeadConfig(client_side_validation=True),
            head_resources=[ResourceComponent("primefaces", "moment/moment.js")],
        )
        render_head(context, HeadComponent("h"), metrics)
        assert output(context).count("moment/moment.js") == 1

    @pytest.mark.unit
    def test_unrendered_registered_resource_is_skipped(
        self, metrics: HeadMetrics
    ) -> None:
        """Resources marked not rendered write nothing."""
        context = make_context(
            head_resources=[ResourceComponent("app", "app.js", rendered=False)]
        )
        render_head(context, HeadComponent("h"), metrics)
        assert "app.js" not in output(context)

    @pytest.mark.unit
    def test_inline_script_facet_honors_doctype(self, metrics: HeadMetrics) -> None:
        """Inline script facets carry a type outside HTML5 documents."""
        context = make_context(HeadConfig(html5_doctype=False))
        render_head(
            context,
            HeadComponent("h", {"middle": InlineScriptFacet("var x=1;")}),
            metrics,
        )
        assert '<script type="text/javascript">var x=1;</script>' in output(context)


class TestValidationScripts:
    """Tests for client-side validation scripts."""

    @pytest.mark.unit
    def test_disabled_by_default(self, metrics: HeadMetrics) -> None:
        """No validation scripts without the flag."""
        context = make_context()
        render_head(context, HeadComponent("h"), metrics)
        assert "moment" not in output(context)

    @pytest.mark.unit
    def test_moment_only(self, metrics: HeadMetrics) -> None:
        """Client-side validation adds moment."""
        context = make_context(HeadConfig(client_side_validation=True))
        render_head(context, HeadComponent("h"), metrics)
        markup = output(context)
        assert f'<script src="{resource_url("primefaces", "moment/moment.js")}"></script>' in markup
        assert "validation.bv.js" not in markup

    @pytest.mark.unit
    def test_bean_validation(self, metrics: HeadMetrics) -> None:
        """Bean Validation adds its script after moment."""
        context = make_context(
            HeadConfig(client_side_validation=True, bean_validation=True)
        )
        render_head(context, HeadComponent("h"), metrics)
        markup = output(context)
        assert markup.index("moment/moment.js") < markup.index("validation.bv.js")


class TestLocaleScript:
    """Tests for the client-side locale script."""

    @pytest.mark.unit
    def test_locale_script_by_language(self, metrics: HeadMetrics) -> None:
        """The script is chosen by the locale's language."""
        context = make_context(
            HeadConfig(client_side_localization=True), locale="de_AT"
        )
        render_head(context, HeadComponent("h"), metrics)
        assert resource_url("primefaces", "locales/locale-de.js") in output(context)

    @pytest.mark.unit
    def test_missing_locale_script_does_not_abort(self, metrics: HeadMetrics) -> None:
        """An unavailable locale script is skipped and the render completes."""
        context = make_context(
            HeadConfig(client_side_localization=True), locale="ja_JP"
        )
        assembler = HeadAssembler(context, metrics)
        assembler.encode_begin(HeadComponent("h"))
        assembler.encode_end(HeadComponent("h"))

        markup = output(context)
        assert "locale-ja" not in markup
        assert "PrimeFaces.settings.locale='ja_JP';" in markup
        assert assembler.state == HeadState.DONE
        assert metrics.locale_script_failures_total == 1

    @pytest.mark.unit
    def test_warning_logged_in_development(self, metrics: HeadMetrics) -> None:
        """Development stage logs a warning for the skipped script."""
        context = make_context(
            HeadConfig(
                client_side_localization=True,
                project_stage=ProjectStage.DEVELOPMENT,
            ),
            locale="ja_JP",
        )
        with capture_logs() as logs:
            render_head(context, HeadComponent("h"), metrics)

        warnings = [e for e in logs if e["event"] == "locale_script_unavailable"]
        assert len(warnings) == 1
        assert warnings[0]["log_level"] == "warning"
        assert warnings[0]["name"] == "locales/locale-ja.js"

    @pytest.mark.unit
    def test_no_warning_in_production(self, metrics: HeadMetrics) -> None:
        """Production stays silent about the skipped script."""
        context = make_context(
            HeadConfig(client_side_localization=True), locale="ja_JP"
        )
        with capture_logs() as logs:
            render_head(context, HeadComponent("h"), metrics)
        assert not [e for e in logs if e["event"] == "locale_script_unavailable"]

    @pytest.mark.unit
    def test_locale_lookup_failure_in_settings_is_fatal(
        self, metrics: HeadMetrics
    ) -> None:
        """The settings script cannot be written without a locale."""
        context = make_context(HeadConfig(client_side_localization=True), locale=None)
        assembler = HeadAssembler(context, metrics)
        with pytest.raises(LocaleLookupError):
            assembler.encode_begin(HeadComponent("h"))
        assert assembler.state == HeadState.FAILED
        assert "<script>if(window.PrimeFaces)" not in output(context)


class TestScripts:
    """Tests for the settings and init scripts."""

    @pytest.mark.unit
    def test_init_script_after_settings(self, metrics: HeadMetrics) -> None:
        """Queued fragments follow the settings script."""
        context = make_context()
        context.init_scripts.add("a()")
        context.init_scripts.add("b()")
        render_head(context, HeadComponent("h"), metrics)

        markup = output(context)
        assert markup.index("if(window.PrimeFaces)") < markup.index("pfInit")
        assert "const pfInit=() => {a();b();}" in markup
        assert len(context.init_scripts) == 0

    @pytest.mark.unit
    def test_no_init_script_tag_when_queue_empty(self, metrics: HeadMetrics) -> None:
        """Only the settings script is written without fragments."""
        context = make_context()
        render_head(context, HeadComponent("h"), metrics)
        assert output(context).count("<script") == 1

    @pytest.mark.unit
    def test_move_scripts_to_bottom(self, metrics: HeadMetrics) -> None:
        """Bottom placement writes the fragments unwrapped."""
        context = make_context(HeadConfig(move_scripts_to_bottom=True))
        context.init_scripts.add("a()")
        render_head(context, HeadComponent("h"), metrics)
        assert "<script>a();</script>" in output(context)

    @pytest.mark.unit
    def test_non_html5_adds_script_type(self, metrics: HeadMetrics) -> None:
        """Inline scripts carry a type outside HTML5 documents."""
        context = make_context(HeadConfig(html5_doctype=False))
        context.init_scripts.add("a()")
        render_head(context, HeadComponent("h"), metrics)
        assert output(context).count('<script type="text/javascript">') == 2

    @pytest.mark.unit
    def test_client_window_initial_redirect_consumed(self, metrics: HeadMetrics) -> None:
        """The redirect marker is reported and expired on the response."""
        context = make_context(
            client_window=ClientWindowState("w1"),
            request_cookies={"pf.initialredirect-w1": "true"},
        )
        render_head(context, HeadComponent("h"), metrics)

        assert "PrimeFaces.clientwindow.init('w1', true);" in output(context)
        assert context.response_cookies.expired == ["pf.initialredirect-w1"]

    @pytest.mark.unit
    def test_failed_locale_lookup_keeps_redirect_cookie(
        self, metrics: HeadMetrics
    ) -> None:
        """The redirect marker survives a render aborted by the locale lookup."""
        context = make_context(
            locale=None,
            client_window=ClientWindowState("w1"),
            request_cookies={"pf.initialredirect-w1": "true"},
        )
        with pytest.raises(LocaleLookupError):
            render_head(context, HeadComponent("h"), metrics)

        assert context.response_cookies.expired == []

    @pytest.mark.unit
    def test_foreign_client_window_keeps_cookie(self, metrics: HeadMetrics) -> None:
        """Windows of another mechanism neither init nor consume the marker."""
        context = make_context(
            client_window=ClientWindowState("w1", framework_managed=False),
            request_cookies={"pf.initialredirect-w1": "true"},
        )
        render_head(context, HeadComponent("h"), metrics)

        assert "clientwindow" not in output(context)
        assert context.response_cookies.expired == []
