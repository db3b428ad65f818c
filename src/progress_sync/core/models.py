"""Modelos de progreso, favoritos y contador."""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Iterator, TypeVar

DEFAULT_FOLDER = "wrong"
WILDCARD = -1


def now_millis() -> str:
    """Marca de tiempo en milisegundos como cadena."""
    return str(int(time.time() * 1000))


def now_iso() -> str:
    """Marca de tiempo ISO-8601 en UTC."""
    return datetime.now(timezone.utc).isoformat()


@dataclass
class ProgressRecord:
    """Ejercicio completado por el usuario."""

    pid: str
    course: int | None = None
    subject: int | None = None
    type: int | None = None
    time: str = field(default_factory=now_millis)

    def to_dict(self) -> dict[str, Any]:
        """Convertir a diccionario."""
        return {
            "pid": self.pid,
            "course": self.course,
            "subject": self.subject,
            "type": self.type,
            "time": self.time,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProgressRecord:
        """Crear desde diccionario."""
        return cls(
            pid=str(data["pid"]),
            course=data.get("course"),
            subject=data.get("subject"),
            type=data.get("type"),
            time=str(data.get("time") or now_millis()),
        )


@dataclass
class StarRecord:
    """Pregunta marcada como favorita dentro de una carpeta."""

    pid: str
    course: int | None = None
    subject: int | None = None
    type: int | None = None
    time: str = field(default_factory=now_iso)

    def to_dict(self) -> dict[str, Any]:
        """Convertir a diccionario."""
        return {
            "pid": self.pid,
            "course": self.course,
            "subject": self.subject,
            "type": self.type,
            "time": self.time,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StarRecord:
        """Crear desde diccionario."""
        return cls(
            pid=str(data["pid"]),
            course=data.get("course"),
            subject=data.get("subject"),
            type=data.get("type"),
            time=str(data.get("time") or now_iso()),
        )


RecordT = TypeVar("RecordT", ProgressRecord, StarRecord)


def filter_by_subject(
    records: Iterable[RecordT],
    course: int,
    subject: int = WILDCARD,
    type: int = WILDCARD,
) -> list[RecordT]:
    """Filtrar por curso; subject y type aceptan -1 como comodín."""
    return [
        r for r in records
        if r.course == course
        and (subject == WILDCARD or r.subject == subject)
        and (type == WILDCARD or r.type == type)
    ]


def dedupe(records: Iterable[RecordT]) -> list[RecordT]:
    """Quitar pids repetidos conservando el primero."""
    seen: set[str] = set()
    unique = []
    for record in records:
        if record.pid in seen:
            continue
        seen.add(record.pid)
        unique.append(record)
    return unique


@dataclass
class CounterAdjustment:
    """Ajuste pendiente del contador; se revierte si no se confirma."""

    delta: int
    committed: bool = False

    def commit(self) -> None:
        self.committed = True


@dataclass
class ProgressCounter:
    """Caché de tamaño de la colección para mostrar al usuario."""

    current: int = 0
    total: int = 0

    @contextmanager
    def adjust(self, delta: int) -> Iterator[CounterAdjustment]:
        """Aplicar delta de forma optimista y revertirlo si no hay commit."""
        adjustment = CounterAdjustment(delta=delta)
        self.current += delta
        try:
            yield adjustment
        finally:
            if not adjustment.committed:
                self.current -= delta

    def ratio(self) -> float:
        """Fracción completada (0.0 - 1.0)."""
        if self.total <= 0:
            return 0.0
        return min(self.current / self.total, 1.0)

    def to_dict(self) -> dict[str, int]:
        return {"current": self.current, "total": self.total}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProgressCounter:
        return cls(current=data.get("current", 0), total=data.get("total", 0))
