"""Abstract base classes for non-secrets storage."""

from abc import ABC, abstractmethod
from typing import Mapping, Sequence

from .error import StorageError
from .record import StorageRecord


def validate_record(record: StorageRecord, *, delete=False):
    """Ensure that a record is ready to be saved or deleted."""
    if not record:
        raise StorageError("No record provided")
    if not record.id:
        raise StorageError("Record has no ID")
    if not record.type:
        raise StorageError("Record has no type")
    if not record.value and not delete:
        raise StorageError("Record must have a non-empty value")


class BaseStorage(ABC):
    """Abstract stored records interface."""

    @abstractmethod
    async def add_record(self, record: StorageRecord):
        """Add a new record to the store.

        Args:
            record: `StorageRecord` to be stored

        Raises:
            StorageDuplicateError: If the record id is already in use

        """

    @abstractmethod
    async def get_record(self, record_type: str, record_id: str) -> StorageRecord:
        """Fetch a record from the store by type and ID.

        Args:
            record_type: The record type
            record_id: The record id

        Returns:
            A `StorageRecord` instance

        Raises:
            StorageNotFoundError: If the record is not found

        """

    @abstractmethod
    async def delete_record(self, record: StorageRecord):
        """Delete an existing record.

        Args:
            record: `StorageRecord` to delete

        Raises:
            StorageNotFoundError: If the record is not found

        """

    @abstractmethod
    async def find_all_records(
        self, type_filter: str, tag_query: Mapping = None
    ) -> Sequence[StorageRecord]:
        """Find all records matching a type and an optional tag query.

        Records are returned in insertion order.
        """

    def __repr__(self) -> str:
        """Human readable representation of a `BaseStorage` implementation."""
        return "<{}>".format(self.__class__.__name__)
