"""Basic in-memory storage implementation."""

from typing import Mapping, Sequence

from .base import BaseStorage, validate_record
from .error import StorageDuplicateError, StorageNotFoundError, StorageSearchError
from .record import StorageRecord


class InMemoryStorage(BaseStorage):
    """Basic in-memory storage class.

    Every operation completes without yielding to the event loop, so
    concurrent tasks never observe a partially written record.
    """

    def __init__(self):
        """Initialize a `InMemoryStorage` instance."""
        self.records = {}

    async def add_record(self, record: StorageRecord):
        """Add a new record to the store.

        Args:
            record: `StorageRecord` to be stored

        Raises:
            StorageError: If no record is provided
            StorageError: If the record has no ID
            StorageDuplicateError: If the record ID is already in use

        """
        validate_record(record)
        if record.id in self.records:
            raise StorageDuplicateError("Duplicate record")
        self.records[record.id] = record

    async def get_record(self, record_type: str, record_id: str) -> StorageRecord:
        """Fetch a record from the store by type and ID.

        Raises:
            StorageNotFoundError: If the record is not found

        """
        row = self.records.get(record_id)
        if row and row.type == record_type:
            return row
        raise StorageNotFoundError("Record not found: {}".format(record_id))

    async def delete_record(self, record: StorageRecord):
        """Delete a record.

        Raises:
            StorageNotFoundError: If record not found

        """
        validate_record(record, delete=True)
        if record.id not in self.records:
            raise StorageNotFoundError("Record not found: {}".format(record.id))
        del self.records[record.id]

    async def find_all_records(
        self, type_filter: str, tag_query: Mapping = None
    ) -> Sequence[StorageRecord]:
        """Find all records matching a type and an optional tag query."""
        return [
            record
            for record in list(self.records.values())
            if record.type == type_filter and tag_query_match(record.tags, tag_query)
        ]


def tag_query_match(tags: dict, tag_query: dict) -> bool:
    """Match simple tag filters (string values)."""
    if not tag_query:
        return True
    tags = tags or {}
    for k, v in tag_query.items():
        if not isinstance(v, str):
            raise StorageSearchError(
                "Expected string for filter value, got {}".format(v)
            )
        if tags.get(k) != v:
            return False
    return True
