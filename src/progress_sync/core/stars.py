"""Reconciliación de favoritos por carpeta."""

from __future__ import annotations

import logging
from typing import Any

from ..errors import SyncError
from .base import Reconciler
from .models import DEFAULT_FOLDER, WILDCARD, StarRecord, filter_by_subject
from .result import Ok

logger = logging.getLogger(__name__)


def parse_remote_stars(payload: Any) -> list[StarRecord]:
    """Convertir la lista del servidor en favoritos."""
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise SyncError(f"Formato de favoritos inesperado: {type(payload).__name__}")
    return [
        StarRecord.from_dict(item)
        for item in payload
        if isinstance(item, dict) and "pid" in item
    ]


class StarSync(Reconciler):
    """Favoritos locales alineados con el servidor.

    A diferencia del progreso no hay fusión: el servidor reemplaza la
    carpeta por defecto completa.
    """

    async def fetch_stars(self) -> bool:
        if not self.is_online():
            return False
        try:
            result = await self.call_remote("fetch_stars", self.remote.fetch_stars)
            if not isinstance(result, Ok):
                self.handle_failure("fetch_stars", result)
                return False
            await self.store.replace_folder(DEFAULT_FOLDER, parse_remote_stars(result.payload))
        except Exception as e:
            self.report("fetch_stars", e)
            return False
        return True

    async def is_starred(self, pid: str, folder: str | None = None) -> bool:
        """Favorito en la carpeta indicada, o en cualquiera si es None."""
        try:
            return await self.store.exists_in_folder(pid, folder)
        except Exception:
            logger.exception("Error comprobando favorito %s", pid)
            return False

    async def add_star(
        self,
        pid: str,
        course: int,
        subject: int,
        type_: int,
        folder: str = DEFAULT_FOLDER,
    ) -> bool:
        record = StarRecord(pid=pid, course=course, subject=subject, type=type_)
        try:
            if not await self._confirm_remote(
                "add_star", lambda token: self.remote.add_stars([pid], token)
            ):
                return False
            # un reintento anterior pudo haberlo insertado ya
            if not await self.store.exists_in_folder(pid, folder):
                await self.store.add_to_folder(record, folder)
        except Exception as e:
            self.report("add_star", e)
            return False
        return True

    async def remove_star(self, pid: str, folder: str = DEFAULT_FOLDER) -> bool:
        try:
            if not await self._confirm_remote(
                "delete_star", lambda token: self.remote.delete_stars([pid], token)
            ):
                return False
            await self.store.remove_from_folder(pid, folder)
        except Exception as e:
            self.report("delete_star", e)
            return False
        return True

    async def get_folder(self, folder: str = DEFAULT_FOLDER) -> list[StarRecord]:
        try:
            return await self.store.get_folder(folder)
        except Exception:
            logger.exception("Error leyendo la carpeta %s", folder)
            return []

    async def get_folder_by_subject(
        self,
        course: int,
        subject: int = WILDCARD,
        type_: int = WILDCARD,
        folder: str = DEFAULT_FOLDER,
    ) -> list[StarRecord]:
        """Favoritos de un curso; subject/type = -1 significa cualquiera."""
        try:
            return filter_by_subject(await self.store.get_folder(folder), course, subject, type_)
        except Exception:
            logger.exception("Error filtrando la carpeta %s", folder)
            return []
