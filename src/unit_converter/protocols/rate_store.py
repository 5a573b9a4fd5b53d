"""Rate snapshot storage protocol.

Defines the interface for the durable store that lets the rate table
survive process restarts. Persistence is advisory: the cache treats every
failure here as non-fatal.

Implementations can include:
- Redis hashes, one per currency (default)
- Any key-value table keyed by currency code
"""

from typing import Protocol, runtime_checkable

from unit_converter.entities import RateTable


@runtime_checkable
class RateStore(Protocol):
    """Protocol for rate snapshot storage backends."""

    def save(self, table: RateTable) -> None:
        """Replace the stored snapshot with every rate in the table.

        Args:
            table: A refreshed (non-empty) rate table
        """
        ...

    def load(self) -> RateTable | None:
        """Read the last saved snapshot.

        Returns:
            The stored table, or None if nothing has been saved
        """
        ...

    def health_check(self) -> bool:
        """Check if the store is accessible.

        Returns:
            True if healthy, False otherwise
        """
        ...
