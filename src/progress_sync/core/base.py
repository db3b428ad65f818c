"""Piezas compartidas por la reconciliación de progreso y favoritos."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..notify import FAILED
from .result import MissingCredential, Ok, RemoteResult, describe
from .retry import RenewalRetry, Request
from .session import CredentialState, LoginState, UserSettings

if TYPE_CHECKING:
    from ..api.client import RemoteClient
    from ..auth import AuthGateway
    from ..notify import Notifier
    from ..store.base import LocalStore
    from .models import ProgressCounter

logger = logging.getLogger(__name__)

MESSAGES = {
    "fetch_progress": "Error al obtener el progreso del usuario",
    "add_progress": "Error al añadir progreso",
    "delete_progress": "Error al eliminar progreso",
    "fetch_stars": "Error al obtener los favoritos",
    "add_star": "Error al añadir favorito",
    "delete_star": "Error al eliminar favorito",
}


@dataclass
class SyncContext:
    """Dependencias compartidas por los reconciliadores."""

    store: LocalStore
    remote: RemoteClient
    auth: AuthGateway
    notifier: Notifier
    login: LoginState
    settings: UserSettings
    counter: ProgressCounter
    retry: RenewalRetry
    max_merge_rounds: int = 3


class Reconciler:
    """Base con acceso remoto y manejo de fallos."""

    def __init__(self, ctx: SyncContext) -> None:
        self.ctx = ctx

    @property
    def store(self) -> LocalStore:
        return self.ctx.store

    @property
    def remote(self) -> RemoteClient:
        return self.ctx.remote

    def is_online(self) -> bool:
        """Hay sesión y un token que enviar."""
        return self.ctx.login.is_logged and bool(self.ctx.auth.read_credential())

    async def call_remote(self, operation: str, request: Request) -> RemoteResult:
        return await self.ctx.retry.call(operation, request)

    async def _confirm_remote(self, operation: str, request: Request) -> bool:
        """Enviar el cambio si hay sesión; sin sesión siempre se acepta."""
        if not self.is_online():
            return True
        result = await self.call_remote(operation, request)
        if isinstance(result, Ok):
            return True
        self.handle_failure(operation, result)
        return False

    def handle_failure(self, operation: str, result: RemoteResult) -> None:
        """Aplicar la consecuencia de un resultado no exitoso."""
        if isinstance(result, MissingCredential):
            if not self.ctx.login.refreshing:
                logger.info("%s: token inexistente, cerrando sesión", operation)
                self.ctx.login.state = CredentialState.LOGGED_OUT
            return

        logger.warning("%s falló: %s", operation, describe(result))
        self.ctx.notifier.notify(FAILED, f"{MESSAGES[operation]} ({describe(result)})")

    def report(self, operation: str, exc: Exception) -> None:
        """Registrar y avisar de una excepción capturada."""
        logger.exception("Error en %s", operation)
        self.ctx.notifier.notify(FAILED, f"{MESSAGES[operation]} ({exc})")
