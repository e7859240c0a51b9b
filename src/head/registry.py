"""Per-render record of emitted resources."""

from collections.abc import Iterator

from src.head.models import ResourceKey


class ResourceRegistry:
    """Tracks which resources were already written in one response.

    One instance belongs to exactly one render. Sharing an instance
    between requests would suppress resources in unrelated responses.
    """

    def __init__(self) -> None:
        self._emitted: set[ResourceKey] = set()
        self._order: list[ResourceKey] = []

    def has_been_emitted(self, key: ResourceKey) -> bool:
        """Check whether a resource was already written.

        Args:
            key: Logical resource identity.

        Returns:
            True if the resource was marked emitted in this render.
        """
        return key in self._emitted

    def mark_emitted(self, key: ResourceKey) -> None:
        """Record that a resource was written.

        Marking an already emitted key is a no-op.

        Args:
            key: Logical resource identity.
        """
        if key in self._emitted:
            return
        self._emitted.add(key)
        self._order.append(key)

    @property
    def emitted(self) -> tuple[ResourceKey, ...]:
        """Emitted keys in emission order."""
        return tuple(self._order)

    def __contains__(self, key: object) -> bool:
        return key in self._emitted

    def __iter__(self) -> Iterator[ResourceKey]:
        return iter(self._order)

    def __len__(self) -> int:
        return len(self._order)
