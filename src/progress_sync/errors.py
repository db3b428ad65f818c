"""Excepciones base del paquete."""


class SyncError(Exception):
    """Error en una operación de sincronización."""

    pass
