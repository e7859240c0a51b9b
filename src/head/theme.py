"""Theme stylesheet resolution."""

from collections.abc import Mapping

import structlog

from src.head.constants import (
    DEFAULT_THEME,
    LIBRARY,
    THEME_ALIASES,
    THEME_NONE,
    THEME_STYLESHEET,
)
from src.head.models import ResourceKey
from src.head.protocols import ExpressionEvaluator


logger = structlog.get_logger()


class ThemeResolver:
    """Maps the configured theme to the stylesheet resource to include.

    Legacy short names are replaced through the alias table, and the
    sentinel "none" disables the theme stylesheet.
    """

    def __init__(
        self,
        evaluator: ExpressionEvaluator,
        aliases: Mapping[str, str] = THEME_ALIASES,
        default_theme: str = DEFAULT_THEME,
    ) -> None:
        """Initialize the resolver.

        Args:
            evaluator: Evaluates the configured value.
            aliases: Legacy theme name to canonical theme name.
            default_theme: Theme used when nothing is configured.
        """
        self._evaluator = evaluator
        self._aliases = aliases
        self._default_theme = default_theme
        self._log = logger.bind(component="theme")

    def resolve_theme(self, configured_value: str | None) -> ResourceKey | None:
        """Resolve the theme stylesheet.

        Args:
            configured_value: Configured theme name or expression.

        Returns:
            Key of the theme stylesheet, or None when themes are disabled.

        Raises:
            ExpressionEvaluationError: If the configured expression fails.
        """
        theme = None
        if configured_value is not None:
            theme = self._evaluator.evaluate(configured_value)
        if theme is None:
            theme = self._default_theme

        if theme == THEME_NONE:
            self._log.debug("theme_disabled")
            return None

        canonical = self._aliases.get(theme, theme)
        if canonical != theme:
            self._log.debug("theme_alias_applied", alias=theme, theme=canonical)

        return ResourceKey(LIBRARY, f"{LIBRARY}-{canonical}/{THEME_STYLESHEET}")
