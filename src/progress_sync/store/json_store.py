"""Almacén local persistido en ficheros JSON."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from ..core.models import ProgressRecord, StarRecord
from .base import StorageError
from .memory import MemoryLocalStore

logger = logging.getLogger(__name__)


class JsonLocalStore(MemoryLocalStore):
    """Guarda progreso y favoritos en base_path antes de aplicar cada escritura."""

    PROGRESS_FILENAME = "user_progress.json"
    STARS_FILENAME = "star_questions.json"

    def __init__(self, base_path: Path) -> None:
        """Inicializar con ruta base y cargar lo que haya en disco."""
        super().__init__()
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)
        self.progress_file = self.base_path / self.PROGRESS_FILENAME
        self.stars_file = self.base_path / self.STARS_FILENAME
        self.load()

    @staticmethod
    def _read(path: Path) -> Any:
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("No se pudo leer %s: %s", path, e)
            return None

    def load(self) -> None:
        """Cargar progreso y carpetas desde disco."""
        progress = self._read(self.progress_file)
        if not isinstance(progress, list):
            progress = []
        self.progress = [
            ProgressRecord.from_dict(item)
            for item in progress
            if isinstance(item, dict) and "pid" in item
        ]

        stars = self._read(self.stars_file)
        if not isinstance(stars, list):
            stars = []
        self.folders = {}
        for folder in stars:
            if not isinstance(folder, dict) or "folderName" not in folder:
                continue
            self.folders[folder["folderName"]] = [
                StarRecord.from_dict(item)
                for item in folder.get("items", [])
                if isinstance(item, dict) and "pid" in item
            ]

    @staticmethod
    def _write(path: Path, data: Any) -> None:
        """Escribir en un temporal y renombrarlo encima del fichero."""
        tmp = path.with_name(path.name + ".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp, path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise

    def _persist(
        self,
        progress: list[ProgressRecord] | None,
        folders: dict[str, list[StarRecord]] | None,
    ) -> None:
        try:
            if progress is not None:
                self._write(self.progress_file, [r.to_dict() for r in progress])
            if folders is not None:
                stars = [
                    {"folderName": name, "items": [r.to_dict() for r in items]}
                    for name, items in folders.items()
                ]
                self._write(self.stars_file, stars)
        except OSError as e:
            raise StorageError(f"No se pudo guardar en {self.base_path}: {e}") from e
