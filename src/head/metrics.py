"""Head assembler metrics collection."""

from dataclasses import dataclass, field


@dataclass
class HeadMetrics:
    """Metrics for head assembly.

    One instance belongs to one render context, so concurrent requests
    never share counters. Counters only observe rendering; emission
    decisions never read them.
    """

    _renders_total: int = 0
    _render_failures_total: int = 0
    _resources_emitted_total: int = 0
    _duplicates_skipped_total: int = 0
    _resolution_failures_total: int = 0
    _locale_script_failures_total: int = 0
    _init_scripts_flushed_total: int = 0
    _last_render_ms: float = 0.0
    _emitted_by_type: dict[str, int] = field(default_factory=dict)

    def record_render(self, duration_ms: float) -> None:
        """Record a completed render.

        Args:
            duration_ms: Duration in milliseconds.
        """
        self._renders_total += 1
        self._last_render_ms = duration_ms

    def record_failure(self) -> None:
        """Record an aborted render."""
        self._render_failures_total += 1

    def record_emitted(self, resource_type: str) -> None:
        """Record a written resource element.

        Args:
            resource_type: Either "css" or "js".
        """
        self._resources_emitted_total += 1
        self._emitted_by_type[resource_type] = (
            self._emitted_by_type.get(resource_type, 0) + 1
        )

    def record_duplicate(self) -> None:
        """Record a suppressed duplicate inclusion."""
        self._duplicates_skipped_total += 1

    def record_resolution_failure(self) -> None:
        """Record a resource that could not be resolved."""
        self._resolution_failures_total += 1

    def record_locale_script_failure(self) -> None:
        """Record a locale script that was skipped."""
        self._locale_script_failures_total += 1

    def record_init_scripts(self, count: int) -> None:
        """Record flushed init script fragments.

        Args:
            count: Number of fragments.
        """
        self._init_scripts_flushed_total += count

    @property
    def renders_total(self) -> int:
        """Get number of completed renders."""
        return self._renders_total

    @property
    def render_failures_total(self) -> int:
        """Get number of aborted renders."""
        return self._render_failures_total

    @property
    def resources_emitted_total(self) -> int:
        """Get number of written resource elements."""
        return self._resources_emitted_total

    @property
    def duplicates_skipped_total(self) -> int:
        """Get number of suppressed duplicates."""
        return self._duplicates_skipped_total

    @property
    def resolution_failures_total(self) -> int:
        """Get number of unresolvable resources."""
        return self._resolution_failures_total

    @property
    def locale_script_failures_total(self) -> int:
        """Get number of skipped locale scripts."""
        return self._locale_script_failures_total

    def get_summary(self) -> dict[str, object]:
        """Get metrics summary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "renders_total": self._renders_total,
            "render_failures_total": self._render_failures_total,
            "resources_emitted_total": self._resources_emitted_total,
            "duplicates_skipped_total": self._duplicates_skipped_total,
            "resolution_failures_total": self._resolution_failures_total,
            "locale_script_failures_total": self._locale_script_failures_total,
            "init_scripts_flushed_total": self._init_scripts_flushed_total,
            "last_render_ms": self._last_render_ms,
            "emitted_by_type": dict(self._emitted_by_type),
        }
