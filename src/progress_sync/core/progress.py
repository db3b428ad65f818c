"""Reconciliación del progreso de ejercicios."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import SyncError
from .base import Reconciler
from .models import WILDCARD, ProgressCounter, ProgressRecord, filter_by_subject
from .result import Ok

logger = logging.getLogger(__name__)


class MergeStatus(Enum):
    """Resultado de fetch_and_merge."""

    CONVERGED = "converged"  # local == remoto
    PARTIAL = "partial"  # se agotaron las rondas con local más grande que remoto
    FAILED = "failed"
    SKIPPED = "skipped"  # sin sesión


@dataclass
class MergeReport:
    """Resumen de una fusión local/remoto."""

    status: MergeStatus
    rounds: int = 0
    pushed: list[str] = field(default_factory=list)

    @property
    def converged(self) -> bool:
        return self.status is MergeStatus.CONVERGED


def parse_remote_progress(payload: Any) -> list[ProgressRecord]:
    """Convertir la lista del servidor en registros."""
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise SyncError(f"Formato de progreso inesperado: {type(payload).__name__}")
    return [
        ProgressRecord.from_dict(item)
        for item in payload
        if isinstance(item, dict) and "pid" in item
    ]


def missing_remotely(local: list[ProgressRecord], remote: list[ProgressRecord]) -> list[str]:
    """Pids locales que el servidor no tiene, en orden local."""
    remote_pids = {r.pid for r in remote}
    return [r.pid for r in local if r.pid not in remote_pids]


class ProgressSync(Reconciler):
    """Mantiene el progreso local alineado con el servidor."""

    async def _read_local(self) -> list[ProgressRecord]:
        records = await self.store.get_all()
        return list(records) if isinstance(records, list) else []

    async def _insert_missing(self, records: list[ProgressRecord]) -> int:
        local = await self._read_local()
        present = {r.pid for r in local}
        new = [r for r in records if r.pid not in present]
        if new:
            await self.store.replace_all(local + new)
        return len(new)

    async def fetch_and_merge(self, max_rounds: int | None = None) -> MergeReport:
        """Traer el progreso remoto y fusionarlo con el local.

        Si auto_sync_data está activo y la colección local es más grande que
        la remota, se suben los pids que faltan y se vuelve a pedir la lista.
        En cualquier otro caso el servidor manda y reemplaza la colección
        local, así que lo borrado en otro dispositivo desaparece aquí.
        """
        if not self.is_online():
            return MergeReport(status=MergeStatus.SKIPPED)

        max_rounds = max_rounds or self.ctx.max_merge_rounds
        report = MergeReport(status=MergeStatus.PARTIAL)

        try:
            while report.rounds < max_rounds:
                report.rounds += 1
                result = await self.call_remote("fetch_progress", self.remote.fetch_progress)
                if not isinstance(result, Ok):
                    self.handle_failure("fetch_progress", result)
                    report.status = MergeStatus.FAILED
                    break

                remote = parse_remote_progress(result.payload)

                if self.ctx.settings.auto_sync_data:
                    local = await self._read_local()
                    if len(local) > len(remote):
                        extra = missing_remotely(local, remote)
                        logger.info("Subiendo %d registros solo locales", len(extra))
                        if not await self.add_batch(extra):
                            report.status = MergeStatus.FAILED
                            break
                        report.pushed.extend(extra)
                        continue

                await self.store.replace_all(remote)
                report.status = MergeStatus.CONVERGED
                break
        except Exception as e:
            self.report("fetch_progress", e)
            report.status = MergeStatus.FAILED

        if report.status is MergeStatus.PARTIAL:
            logger.warning("Fusión sin converger tras %d rondas", report.rounds)
        await self._recount()
        return report

    async def _recount(self) -> None:
        """Igualar el contador al tamaño real de la colección local."""
        try:
            self.ctx.counter.current = await self.store.count()
        except Exception:
            logger.exception("Error contando el progreso local")

    async def add(self, pid: str, course: int, subject: int, type_: int) -> bool:
        """Marcar un ejercicio como hecho."""
        record = ProgressRecord(pid=pid, course=course, subject=subject, type=type_)

        with self.ctx.counter.adjust(1) as adjustment:
            try:
                if not await self._confirm_remote(
                    "add_progress", lambda token: self.remote.add_progress([pid], token)
                ):
                    return False
                await self._insert_missing([record])
            except Exception as e:
                self.report("add_progress", e)
                return False
            adjustment.commit()
        return True

    async def add_batch(self, pids: list[str]) -> bool:
        """Marcar varios ejercicios a la vez.

        Los registros creados aquí no llevan course/subject/type: el servidor
        solo recibe pids y es quien conserva esos datos.
        """
        pids = list(dict.fromkeys(pids))
        if not pids:
            return True

        with self.ctx.counter.adjust(len(pids)) as adjustment:
            try:
                if not await self._confirm_remote(
                    "add_progress", lambda token: self.remote.add_progress(pids, token)
                ):
                    return False
                await self._insert_missing([ProgressRecord(pid=pid) for pid in pids])
            except Exception as e:
                self.report("add_progress", e)
                return False
            adjustment.commit()
        return True

    async def delete(self, pid: str) -> bool:
        """Desmarcar un ejercicio."""
        with self.ctx.counter.adjust(-1) as adjustment:
            try:
                if not await self._confirm_remote(
                    "delete_progress", lambda token: self.remote.delete_progress([pid], token)
                ):
                    return False
                local = await self._read_local()
                await self.store.replace_all([r for r in local if r.pid != pid])
            except Exception as e:
                self.report("delete_progress", e)
                return False
            adjustment.commit()
        return True

    async def has_progress(self, pid: str) -> bool:
        try:
            return await self.store.exists(pid)
        except Exception:
            logger.exception("Error comprobando progreso de %s", pid)
            return False

    async def get_all(self) -> list[ProgressRecord]:
        try:
            return await self._read_local()
        except Exception:
            logger.exception("Error leyendo el progreso local")
            return []

    async def get_by_subject(
        self,
        course: int,
        subject: int = WILDCARD,
        type_: int = WILDCARD,
    ) -> list[ProgressRecord]:
        """Progreso de un curso; subject/type = -1 significa cualquiera."""
        try:
            return filter_by_subject(await self._read_local(), course, subject, type_)
        except Exception:
            logger.exception("Error filtrando el progreso local")
            return []

    async def update_counter(self, general_count: int, profession_count: int) -> ProgressCounter:
        """Recalcular el contador desde el almacén y el temario."""
        await self._recount()
        counter = self.ctx.counter
        counter.total = general_count + profession_count
        return counter
