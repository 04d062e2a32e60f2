"""
Record Store Interface

Defines the contract for the durable store behind the production registry
and the identity service.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

Record = dict[str, Any]


class RecordStore(ABC):
    """
    Abstract durable store of named record collections.

    A collection is an ordered sequence of self-describing records. Stores
    may skip unreadable records on load but must report how many they
    skipped through ``skipped_records``.
    """

    @abstractmethod
    def load_all(self, name: str) -> list[Record] | None:
        """
        Load every readable record of a collection.

        Args:
            name: Collection name

        Returns:
            Records in stored order, or None if the collection does not exist
        """

    @abstractmethod
    def append_one(self, name: str, record: Record) -> None:
        """
        Durably append a single record to a collection.

        Raises:
            OSError: If the write fails
        """

    @abstractmethod
    def replace_all(self, name: str, records: Sequence[Record]) -> None:
        """
        Replace the whole collection with ``records``.

        Raises:
            OSError: If the write fails
        """

    @property
    @abstractmethod
    def skipped_records(self) -> dict[str, int]:
        """Number of unreadable records skipped per collection on the last load."""
