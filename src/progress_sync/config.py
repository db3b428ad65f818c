"""Configuración global de la sincronización."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_data_dir


def _default_data_dir() -> Path:
    return Path(user_data_dir("progress-sync", "progress-sync"))


@dataclass(frozen=True)
class Config:
    """Configuración inmutable de la aplicación."""

    # API remota
    api_url: str = "http://localhost:8000/api"
    request_timeout: int = 30

    # Reintentos
    max_renewals: int = 2
    max_merge_rounds: int = 3

    # Sesión
    token: str | None = None

    # Logging
    log_level: str = "INFO"
    log_file: Path | None = None

    # Paths
    data_dir: Path = field(default_factory=_default_data_dir)
    store_dir: Path = field(init=False)
    settings_file: Path = field(init=False)

    # App
    app_name: str = "Progress Sync"
    version: str = "0.1.0"

    def __post_init__(self) -> None:
        object.__setattr__(self, "store_dir", self.data_dir / "store")
        object.__setattr__(self, "settings_file", self.data_dir / "settings.yaml")

    @classmethod
    def from_env(cls) -> Config:
        """Crear configuración desde variables de entorno."""
        data_dir = os.getenv("PROGRESS_SYNC_DATA_DIR")
        log_file = os.getenv("LOG_FILE")

        return cls(
            api_url=os.getenv("PROGRESS_SYNC_API_URL", "http://localhost:8000/api"),
            request_timeout=int(os.getenv("PROGRESS_SYNC_TIMEOUT", "30")),
            max_renewals=int(os.getenv("PROGRESS_SYNC_MAX_RENEWALS", "2")),
            max_merge_rounds=int(os.getenv("PROGRESS_SYNC_MAX_MERGE_ROUNDS", "3")),
            token=os.getenv("PROGRESS_SYNC_TOKEN") or None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=Path(log_file) if log_file else None,
            data_dir=Path(data_dir) if data_dir else _default_data_dir(),
        )

    def validate(self) -> None:
        """Validar valores y lanzar ValueError si no son válidos."""
        if self.max_renewals < 0:
            raise ValueError("PROGRESS_SYNC_MAX_RENEWALS no puede ser negativo")
        if self.max_merge_rounds < 1:
            raise ValueError("PROGRESS_SYNC_MAX_MERGE_ROUNDS debe ser positivo")
        if self.request_timeout <= 0:
            raise ValueError("PROGRESS_SYNC_TIMEOUT debe ser positivo")

    def ensure_dirs(self) -> None:
        """Crear directorios necesarios si no existen."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.store_dir.mkdir(parents=True, exist_ok=True)


# Instancia global
_config: Config | None = None


def get_config() -> Config:
    """Obtener instancia de configuración (singleton)."""
    global _config
    if _config is None:
        _config = Config.from_env()
        _config.validate()
    return _config


def set_config(config: Config) -> None:
    """Establecer configuración (para tests)."""
    global _config
    config.validate()
    _config = config
