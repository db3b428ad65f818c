"""Clasificación de respuestas del servidor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from ..api.client import ApiResponse

EXPIRED_TOKEN = "expiry_token"
MISSING_TOKEN = "token_not_exist"


@dataclass(frozen=True)
class Ok:
    """Respuesta con code == 200."""

    payload: Any = None


@dataclass(frozen=True)
class Expired:
    """El token ha caducado; se puede renovar y reintentar."""


@dataclass(frozen=True)
class MissingCredential:
    """No hay token o el servidor no lo reconoce."""


@dataclass(frozen=True)
class OtherFailure:
    """Cualquier otro fallo devuelto por el servidor."""

    code: int
    detail: str = ""


@dataclass(frozen=True)
class RetryExhausted:
    """Se agotaron las renovaciones permitidas para una operación."""

    operation: str
    renewals: int


RemoteResult = Union[Ok, Expired, MissingCredential, OtherFailure, RetryExhausted]


def failure_type(data: Any) -> str | None:
    """Extraer data.type de una respuesta fallida."""
    if isinstance(data, dict):
        kind = data.get("type")
        return str(kind) if kind is not None else None
    return None


def classify(response: ApiResponse) -> RemoteResult:
    """Convertir una respuesta {code, data} en un resultado cerrado."""
    if response.code == 200:
        return Ok(payload=response.data)

    kind = failure_type(response.data)
    if kind == EXPIRED_TOKEN:
        return Expired()
    if kind == MISSING_TOKEN:
        return MissingCredential()

    detail = kind
    if isinstance(response.data, dict) and response.data.get("message"):
        detail = str(response.data["message"])
    return OtherFailure(code=response.code, detail=detail or "respuesta desconocida")


def describe(result: RemoteResult) -> str:
    """Texto legible de un resultado no exitoso."""
    if isinstance(result, OtherFailure):
        return f"código {result.code}: {result.detail}"
    if isinstance(result, RetryExhausted):
        return f"sesión caducada tras {result.renewals} renovaciones"
    if isinstance(result, MissingCredential):
        return "sesión no iniciada"
    if isinstance(result, Expired):
        return "sesión caducada"
    return "ok"
