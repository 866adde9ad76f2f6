"""Record storage."""

from finsuite.storage.records import RecordStore

__all__ = ["RecordStore"]
