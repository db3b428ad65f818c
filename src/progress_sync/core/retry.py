"""Reintento acotado ante token caducado."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Awaitable, Callable

from .result import Expired, MissingCredential, RemoteResult, RetryExhausted, classify
from .session import CredentialState, LoginState

if TYPE_CHECKING:
    from ..api.client import ApiResponse
    from ..auth import AuthGateway

logger = logging.getLogger(__name__)

Request = Callable[[str], Awaitable["ApiResponse"]]


@dataclass
class RetryState:
    """Intentos realizados por una operación lógica."""

    operation: str
    max_renewals: int
    attempts: int = 0
    renewals: int = 0

    @property
    def exhausted(self) -> bool:
        return self.renewals >= self.max_renewals


class Renewal:
    """Renovación de credencial compartida entre operaciones."""

    def __init__(self, auth: AuthGateway, login: LoginState) -> None:
        self.auth = auth
        self.login = login
        self.count = 0
        self._task: asyncio.Task[None] | None = None

    async def _run(self) -> None:
        self.login.state = CredentialState.REFRESHING
        self.count += 1
        try:
            await self.auth.renew()
        finally:
            if self.auth.read_credential():
                self.login.state = CredentialState.LOGGED_IN
            else:
                self.login.state = CredentialState.LOGGED_OUT

    async def __call__(self) -> None:
        """Renovar, o esperar la renovación que ya está en curso."""
        if self._task is None or self._task.done():
            self._task = asyncio.ensure_future(self._run())
        else:
            logger.debug("Renovación en curso, esperando")
        await self._task


class RenewalRetry:
    """Emite una petición y la repite tras renovar si el token caducó."""

    def __init__(self, auth: AuthGateway, renewal: Renewal, max_renewals: int = 2) -> None:
        self.auth = auth
        self.renewal = renewal
        self.max_renewals = max_renewals

    async def call(self, operation: str, request: Request) -> RemoteResult:
        """Ejecutar request(token) hasta obtener algo distinto de Expired."""
        state = RetryState(operation=operation, max_renewals=self.max_renewals)

        while True:
            token = self.auth.read_credential()
            if not token:
                return MissingCredential()

            state.attempts += 1
            result = classify(await request(token))
            if not isinstance(result, Expired):
                return result

            if state.exhausted:
                logger.warning(
                    "%s: token caducado tras %d renovaciones, abandonando",
                    operation,
                    state.renewals,
                )
                return RetryExhausted(operation=operation, renewals=state.renewals)

            logger.info("%s: token caducado, renovando (intento %d)", operation, state.attempts)
            state.renewals += 1
            await self.renewal()
