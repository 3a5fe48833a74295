"""Persistence backends for published landing pages."""

from .file_store import JsonFilePageStore
from .memory_store import MemoryPageStore
from .rest_store import RestPageStore
from .store import (
    PageStore,
    PersistenceError,
    StoreError,
    WriteConflictError,
    is_live,
)

__all__ = [
    "PageStore",
    "MemoryPageStore",
    "JsonFilePageStore",
    "RestPageStore",
    "StoreError",
    "PersistenceError",
    "WriteConflictError",
    "is_live",
]
