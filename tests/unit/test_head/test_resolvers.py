"""Unit tests for the standalone collaborators."""

import pytest

from src.head.errors import ExpressionEvaluationError, LocaleLookupError
from src.head.models import locale_language
from src.head.resolvers import (
    CookieRecorder,
    LibraryResourceResolver,
    MappingExpressionEvaluator,
    StaticLocaleProvider,
)


class TestLibraryResourceResolver:
    """Tests for LibraryResourceResolver."""

    @pytest.mark.unit
    def test_resolves_known_resource(self) -> None:
        """Known resources map to the resource servlet path."""
        resolver = LibraryResourceResolver({"primefaces": ["core.js"]}, "/app")
        assert (
            resolver.resolve("primefaces", "core.js")
            == "/app/javax.faces.resource/core.js.xhtml?ln=primefaces"
        )

    @pytest.mark.unit
    def test_unknown_resource_is_none(self) -> None:
        """Resources outside the catalog do not resolve."""
        resolver = LibraryResourceResolver({"primefaces": ["core.js"]})
        assert resolver.resolve("primefaces", "other.js") is None
        assert resolver.resolve("other", "core.js") is None

    @pytest.mark.unit
    def test_version_parameter(self) -> None:
        """Library versions are appended."""
        resolver = LibraryResourceResolver(
            {"primefaces": ["core.js"]}, "/app/", {"primefaces": "14.0"}
        )
        assert (
            resolver.resolve("primefaces", "core.js")
            == "/app/javax.faces.resource/core.js.xhtml?ln=primefaces&v=14.0"
        )


class TestMappingExpressionEvaluator:
    """Tests for MappingExpressionEvaluator."""

    @pytest.mark.unit
    def test_literal_passes_through(self) -> None:
        """Plain values are returned unchanged."""
        assert MappingExpressionEvaluator().evaluate("saga") == "saga"

    @pytest.mark.unit
    @pytest.mark.parametrize("expression", ["#{theme}", "${theme}", "#{ theme }"])
    def test_variable_lookup(self, expression: str) -> None:
        """Expressions read the variables mapping."""
        evaluator = MappingExpressionEvaluator({"theme": "vela"})
        assert evaluator.evaluate(expression) == "vela"

    @pytest.mark.unit
    def test_unknown_variable_raises(self) -> None:
        """Unknown names fail evaluation."""
        with pytest.raises(ExpressionEvaluationError):
            MappingExpressionEvaluator().evaluate("#{theme}")

    @pytest.mark.unit
    def test_unsupported_syntax_raises(self) -> None:
        """Only single-variable expressions are supported."""
        with pytest.raises(ExpressionEvaluationError):
            MappingExpressionEvaluator({"a": "b"}).evaluate("#{a ? 'x' : 'y'}")


class TestLocale:
    """Tests for locale helpers."""

    @pytest.mark.unit
    def test_static_provider(self) -> None:
        """The fixed locale is returned."""
        assert StaticLocaleProvider("de_DE").current_locale() == "de_DE"

    @pytest.mark.unit
    def test_missing_locale_raises(self) -> None:
        """No locale is a lookup failure."""
        with pytest.raises(LocaleLookupError):
            StaticLocaleProvider(None).current_locale()

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("locale", "language"),
        [("pt_BR", "pt"), ("pt-BR", "pt"), ("de", "de"), ("EN_us", "en")],
    )
    def test_locale_language(self, locale: str, language: str) -> None:
        """The language part is extracted and lower-cased."""
        assert locale_language(locale) == language


class TestCookieRecorder:
    """Tests for CookieRecorder."""

    @pytest.mark.unit
    def test_headers_expire_cookies(self) -> None:
        """Expired cookies render with Max-Age=0."""
        cookies = CookieRecorder()
        cookies.expire("pf.initialredirect-w1")
        assert cookies.headers() == ["pf.initialredirect-w1=; Max-Age=0; Path=/"]
