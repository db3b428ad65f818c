"""Punto de entrada de la sincronización de progreso y favoritos."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..config import Config, get_config
from ..notify import NotificationLog
from .base import SyncContext
from .models import DEFAULT_FOLDER, WILDCARD, ProgressCounter, ProgressRecord, StarRecord
from .progress import MergeReport, MergeStatus, ProgressSync
from .retry import Renewal, RenewalRetry
from .session import CredentialState, LoginState, UserProfile, UserSettings
from .stars import StarSync

if TYPE_CHECKING:
    from ..api.client import RemoteClient
    from ..auth import AuthGateway
    from ..notify import Notifier
    from ..store.base import LocalStore

logger = logging.getLogger(__name__)


class SyncCoordinator:
    """Coordina el almacén local, el servidor y la credencial.

    Todas las operaciones públicas capturan sus propios errores: las
    mutaciones devuelven False, las lecturas una lista vacía, y el usuario
    recibe un aviso a través del notifier.
    """

    def __init__(
        self,
        store: LocalStore,
        remote: RemoteClient,
        auth: AuthGateway,
        notifier: Notifier | None = None,
        settings: UserSettings | None = None,
        profile: UserProfile | None = None,
        config: Config | None = None,
    ) -> None:
        """Inicializar con las dependencias inyectadas."""
        self.config = config or get_config()
        self.store = store
        self.remote = remote
        self.auth = auth
        self.notifier = notifier if notifier is not None else NotificationLog()
        self.settings = settings or UserSettings()
        self.profile = profile or UserProfile()
        self.login_state = LoginState()
        self.refresh_login_state()

        self.renewal = Renewal(auth, self.login_state)
        ctx = SyncContext(
            store=store,
            remote=remote,
            auth=auth,
            notifier=self.notifier,
            login=self.login_state,
            settings=self.settings,
            counter=self.profile.progress,
            retry=RenewalRetry(auth, self.renewal, self.config.max_renewals),
            max_merge_rounds=self.config.max_merge_rounds,
        )
        self.progress = ProgressSync(ctx)
        self.stars = StarSync(ctx)

    @property
    def counter(self) -> ProgressCounter:
        return self.profile.progress

    @property
    def is_logged(self) -> bool:
        return self.login_state.is_logged

    # Sesión

    def refresh_login_state(self) -> bool:
        """Derivar el estado de login de la presencia de credencial."""
        if self.login_state.refreshing:
            return True
        if self.auth.read_credential():
            self.login_state.state = CredentialState.LOGGED_IN
        else:
            self.login_state.state = CredentialState.LOGGED_OUT
        return self.login_state.is_logged

    def logout(self) -> None:
        """Cerrar sesión: a partir de aquí todo es solo local."""
        self.login_state.state = CredentialState.LOGGED_OUT
        self.profile.reset()
        logger.info("Sesión cerrada")

    # Progreso

    async def fetch_and_merge(self, max_rounds: int | None = None) -> MergeReport:
        return await self.progress.fetch_and_merge(max_rounds)

    async def add(self, pid: str, course: int, subject: int, type_: int) -> bool:
        return await self.progress.add(pid, course, subject, type_)

    async def add_batch(self, pids: list[str]) -> bool:
        return await self.progress.add_batch(pids)

    async def delete(self, pid: str) -> bool:
        return await self.progress.delete(pid)

    async def has_progress(self, pid: str) -> bool:
        return await self.progress.has_progress(pid)

    async def get_all(self) -> list[ProgressRecord]:
        return await self.progress.get_all()

    async def get_by_subject(
        self, course: int, subject: int = WILDCARD, type_: int = WILDCARD
    ) -> list[ProgressRecord]:
        return await self.progress.get_by_subject(course, subject, type_)

    async def update_counter(self, general_count: int, profession_count: int) -> ProgressCounter:
        return await self.progress.update_counter(general_count, profession_count)

    # Favoritos

    async def fetch_stars(self) -> bool:
        return await self.stars.fetch_stars()

    async def is_starred(self, pid: str, folder: str | None = None) -> bool:
        return await self.stars.is_starred(pid, folder)

    async def add_star(
        self, pid: str, course: int, subject: int, type_: int, folder: str = DEFAULT_FOLDER
    ) -> bool:
        return await self.stars.add_star(pid, course, subject, type_, folder)

    async def remove_star(self, pid: str, folder: str = DEFAULT_FOLDER) -> bool:
        return await self.stars.remove_star(pid, folder)

    async def get_folder(self, folder: str = DEFAULT_FOLDER) -> list[StarRecord]:
        return await self.stars.get_folder(folder)

    async def get_folder_by_subject(
        self,
        course: int,
        subject: int = WILDCARD,
        type_: int = WILDCARD,
        folder: str = DEFAULT_FOLDER,
    ) -> list[StarRecord]:
        return await self.stars.get_folder_by_subject(course, subject, type_, folder)

    # Todo junto

    async def sync_all(self) -> MergeReport:
        """Fusionar progreso, traer favoritos y recontar."""
        report = await self.fetch_and_merge()
        if report.status is not MergeStatus.SKIPPED and self.is_logged:
            await self.fetch_stars()
        try:
            self.counter.current = await self.store.count()
        except Exception:
            logger.exception("Error contando el progreso local")
        logger.info(
            "Sincronización: %s en %d rondas, %d subidos",
            report.status.value,
            report.rounds,
            len(report.pushed),
        )
        return report

    async def close(self) -> None:
        """Cerrar el cliente remoto."""
        await self.remote.close()
