"""Estado de sesión, perfil y ajustes del usuario."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from .models import ProgressCounter


class CredentialState(Enum):
    """Estado de la credencial."""

    LOGGED_OUT = "logged_out"
    LOGGED_IN = "logged_in"
    REFRESHING = "refreshing"


@dataclass
class LoginState:
    """Estado de login de la sesión actual."""

    state: CredentialState = CredentialState.LOGGED_OUT
    is_reset_password: bool = False

    @property
    def is_logged(self) -> bool:
        return self.state is not CredentialState.LOGGED_OUT

    @property
    def refreshing(self) -> bool:
        return self.state is CredentialState.REFRESHING


@dataclass
class UserProfile:
    """Datos del usuario mostrados en la aplicación."""

    uuid: str = ""
    name: str = ""
    id_number: str = ""
    school: str = ""
    profession: str = ""
    profession_main_subject: int = 1
    last_login: str = ""
    reg_date: str = ""
    permission: int = 1
    progress: ProgressCounter = field(default_factory=ProgressCounter)

    def reset(self) -> None:
        """Borrar los datos de identidad (al cerrar sesión)."""
        self.uuid = ""
        self.name = ""
        self.id_number = ""
        self.school = ""
        self.profession = ""
        self.last_login = ""
        self.reg_date = ""

    def to_dict(self) -> dict[str, Any]:
        """Convertir a diccionario."""
        return {
            "uuid": self.uuid,
            "name": self.name,
            "id_number": self.id_number,
            "school": self.school,
            "profession": self.profession,
            "profession_main_subject": self.profession_main_subject,
            "last_login": self.last_login,
            "reg_date": self.reg_date,
            "permission": self.permission,
            "user_progress": self.progress.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserProfile:
        """Crear desde diccionario."""
        return cls(
            uuid=data.get("uuid", ""),
            name=data.get("name", ""),
            id_number=data.get("id_number", ""),
            school=data.get("school", ""),
            profession=data.get("profession", ""),
            profession_main_subject=data.get("profession_main_subject", 1),
            last_login=data.get("last_login", ""),
            reg_date=data.get("reg_date", ""),
            permission=data.get("permission", 1),
            progress=ProgressCounter.from_dict(data.get("user_progress", {})),
        )


@dataclass
class UserSettings:
    """Preferencias del usuario."""

    main_profession_subject: int = 1
    auto_sync_data: bool = True  # fusionar el progreso local al conectar
    auto_save_progress: bool = True
    auto_star_question: bool = True
    show_user_stat: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Convertir a diccionario."""
        return {
            "user_main_profession_subject": self.main_profession_subject,
            "auto_sync_data": self.auto_sync_data,
            "auto_save_progress": self.auto_save_progress,
            "auto_star_question": self.auto_star_question,
            "show_user_stat": self.show_user_stat,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserSettings:
        """Crear desde diccionario."""
        return cls(
            main_profession_subject=data.get("user_main_profession_subject", 1),
            auto_sync_data=data.get("auto_sync_data", True),
            auto_save_progress=data.get("auto_save_progress", True),
            auto_star_question=data.get("auto_star_question", True),
            show_user_stat=data.get("show_user_stat", True),
        )

    def save(self, path: Path) -> None:
        """Guardar ajustes a disco."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(self.to_dict(), f, allow_unicode=True, sort_keys=False)

    @classmethod
    def load(cls, path: Path) -> UserSettings:
        """Cargar ajustes; valores por defecto si no hay fichero."""
        if not path.exists():
            return cls()
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)
