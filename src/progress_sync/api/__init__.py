"""Cliente de la API remota."""

from .client import ApiResponse, RemoteClient, TransportError

__all__ = [
    "ApiResponse",
    "RemoteClient",
    "TransportError",
]
