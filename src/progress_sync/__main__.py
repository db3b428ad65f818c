"""Punto de entrada principal: sincronizar una vez y salir."""

import asyncio
import sys

from .config import Config, get_config


async def run(config: Config) -> int:
    """Ejecutar una sincronización completa."""
    from .api.client import RemoteClient
    from .auth import StaticTokenGateway
    from .core import MergeStatus, SyncCoordinator, UserSettings
    from .notify import NotificationLog
    from .store import JsonLocalStore

    notifier = NotificationLog()
    coordinator = SyncCoordinator(
        store=JsonLocalStore(config.store_dir),
        remote=RemoteClient(config.api_url, config.request_timeout),
        auth=StaticTokenGateway(config.token),
        notifier=notifier,
        settings=UserSettings.load(config.settings_file),
        config=config,
    )

    try:
        report = await coordinator.sync_all()
    finally:
        await coordinator.close()

    counter = coordinator.counter
    print(f"{config.app_name}: {report.status.value} ({counter.current} ejercicios)")
    for notification in notifier.messages:
        print(f"  [{notification.level}] {notification.message}")

    return 0 if report.status in (MergeStatus.CONVERGED, MergeStatus.SKIPPED) else 1


def main() -> int:
    """Ejecutar aplicación."""
    from .logging_config import setup_logging

    config = get_config()
    config.ensure_dirs()
    setup_logging(config)
    return asyncio.run(run(config))


if __name__ == "__main__":
    sys.exit(main())
