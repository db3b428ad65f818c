"""Almacén local en memoria."""

from __future__ import annotations

from ..core.models import DEFAULT_FOLDER, ProgressRecord, StarRecord, dedupe


class MemoryLocalStore:
    """Implementación en memoria del almacén local.

    Cada escritura construye el estado nuevo, lo entrega a _persist y solo
    lo aplica en memoria si _persist no lanza.
    """

    def __init__(self) -> None:
        self.progress: list[ProgressRecord] = []
        self.folders: dict[str, list[StarRecord]] = {}

    def _persist(
        self,
        progress: list[ProgressRecord] | None,
        folders: dict[str, list[StarRecord]] | None,
    ) -> None:
        """Punto de enganche antes de cada escritura; None = sin cambios."""

    def _apply(
        self,
        progress: list[ProgressRecord] | None = None,
        folders: dict[str, list[StarRecord]] | None = None,
    ) -> None:
        self._persist(progress, folders)
        if progress is not None:
            self.progress = progress
        if folders is not None:
            self.folders = folders

    async def get_all(self) -> list[ProgressRecord]:
        return list(self.progress)

    async def replace_all(self, records: list[ProgressRecord]) -> None:
        self._apply(progress=dedupe(records))

    async def exists(self, pid: str) -> bool:
        return any(r.pid == pid for r in self.progress)

    async def count(self) -> int:
        return len(self.progress)

    async def exists_in_folder(self, pid: str, folder: str | None = None) -> bool:
        """Comprobar un pid en una carpeta, o en cualquiera si folder es None."""
        if folder is None:
            folders = self.folders.values()
        else:
            folders = [self.folders.get(folder, [])]
        return any(r.pid == pid for items in folders for r in items)

    async def add_to_folder(self, record: StarRecord, folder: str = DEFAULT_FOLDER) -> None:
        items = self.folders.get(folder, [])
        if any(r.pid == record.pid for r in items):
            return
        self._apply(folders={**self.folders, folder: items + [record]})

    async def remove_from_folder(self, pid: str, folder: str = DEFAULT_FOLDER) -> None:
        items = self.folders.get(folder)
        if not items:
            return
        self._apply(folders={**self.folders, folder: [r for r in items if r.pid != pid]})

    async def get_folder(self, folder: str = DEFAULT_FOLDER) -> list[StarRecord]:
        return list(self.folders.get(folder, []))

    async def replace_folder(self, folder: str, records: list[StarRecord]) -> None:
        self._apply(folders={**self.folders, folder: dedupe(records)})
