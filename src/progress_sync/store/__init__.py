"""Almacén local: contrato e implementaciones."""

from .base import LocalStore, StorageError
from .json_store import JsonLocalStore
from .memory import MemoryLocalStore

__all__ = [
    "LocalStore",
    "StorageError",
    "MemoryLocalStore",
    "JsonLocalStore",
]
