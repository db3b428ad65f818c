"""Contrato de autenticación consumido por la sincronización."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Protocol

logger = logging.getLogger(__name__)


class AuthGateway(Protocol):
    """Lectura del token actual y renovación asíncrona."""

    def read_credential(self) -> str | None: ...

    async def renew(self) -> None: ...


class StaticTokenGateway:
    """Token en memoria; la renovación se delega en un callback opcional."""

    def __init__(
        self,
        token: str | None = None,
        refresher: Callable[[], Awaitable[str | None]] | None = None,
    ) -> None:
        self.token = token
        self.refresher = refresher

    def read_credential(self) -> str | None:
        return self.token

    async def renew(self) -> None:
        """Pedir un token nuevo; sin refresher el token se mantiene."""
        if self.refresher is None:
            logger.warning("Renovación solicitada sin refresher configurado")
            return
        self.token = await self.refresher()

    def clear(self) -> None:
        self.token = None
