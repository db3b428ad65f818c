"""Sincronización offline/online del progreso de ejercicios y favoritos."""

from .api import ApiResponse, RemoteClient, TransportError
from .auth import AuthGateway, StaticTokenGateway
from .config import Config, get_config, set_config
from .core import (
    DEFAULT_FOLDER,
    MergeReport,
    MergeStatus,
    ProgressRecord,
    StarRecord,
    SyncCoordinator,
    UserSettings,
)
from .errors import SyncError
from .notify import NotificationLog
from .store import JsonLocalStore, MemoryLocalStore, StorageError

__version__ = "0.1.0"

__all__ = [
    "ApiResponse",
    "RemoteClient",
    "TransportError",
    "AuthGateway",
    "StaticTokenGateway",
    "Config",
    "get_config",
    "set_config",
    "DEFAULT_FOLDER",
    "MergeReport",
    "MergeStatus",
    "ProgressRecord",
    "StarRecord",
    "SyncCoordinator",
    "UserSettings",
    "SyncError",
    "NotificationLog",
    "JsonLocalStore",
    "MemoryLocalStore",
    "StorageError",
]
