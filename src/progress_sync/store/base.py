"""Contrato del almacén local."""

from __future__ import annotations

from typing import Protocol

from ..core.models import DEFAULT_FOLDER, ProgressRecord, StarRecord
from ..errors import SyncError


class StorageError(SyncError):
    """Error de lectura o escritura en el almacén local."""

    pass


class LocalStore(Protocol):
    """Almacén de documentos con progreso y favoritos por carpeta."""

    async def get_all(self) -> list[ProgressRecord]: ...

    async def replace_all(self, records: list[ProgressRecord]) -> None: ...

    async def exists(self, pid: str) -> bool: ...

    async def count(self) -> int: ...

    async def exists_in_folder(self, pid: str, folder: str | None = None) -> bool: ...

    async def add_to_folder(self, record: StarRecord, folder: str = DEFAULT_FOLDER) -> None: ...

    async def remove_from_folder(self, pid: str, folder: str = DEFAULT_FOLDER) -> None: ...

    async def get_folder(self, folder: str = DEFAULT_FOLDER) -> list[StarRecord]: ...

    async def replace_folder(self, folder: str, records: list[StarRecord]) -> None: ...
