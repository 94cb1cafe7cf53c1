# ==============================================================================
# Snapshot Store Abstract Base Class
# ==============================================================================
"""
Abstract interface for whole-state persistence of a record list.

Each save replaces the previous snapshot entirely; there is no append or
patch format.
"""

from abc import ABC, abstractmethod


class SnapshotStore(ABC):
    """Store holding the latest snapshot of a list of records."""

    @abstractmethod
    def load(self) -> list[dict]:
        """
        Load the most recent snapshot.

        Returns:
            Stored records, or an empty list if nothing usable is stored
        """
        ...

    @abstractmethod
    def save(self, records: list[dict]) -> bool:
        """
        Replace the stored snapshot.

        Args:
            records: Records to persist

        Returns:
            True if the snapshot was written
        """
        ...
