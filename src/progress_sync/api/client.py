"""Cliente HTTP para la API de progreso y favoritos."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from ..config import get_config
from ..errors import SyncError

logger = logging.getLogger(__name__)

PROGRESS_PATH = "/user/progress"
STAR_PATH = "/user/star"
DELETE = "delete"


class TransportError(SyncError):
    """Fallo de red o de protocolo al hablar con el servidor."""

    pass


@dataclass
class ApiResponse:
    """Respuesta uniforme del servidor: {code, data}."""

    code: int
    data: Any = None

    @property
    def ok(self) -> bool:
        return self.code == 200


class RemoteClient:
    """Cliente para los recursos /user/progress y /user/star."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Inicializar cliente."""
        config = get_config()
        self.base_url = (base_url or config.api_url).rstrip("/")
        self.timeout = timeout or config.request_timeout
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
        )

    @staticmethod
    def _headers(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    @staticmethod
    def _parse(response: httpx.Response) -> ApiResponse:
        try:
            body = response.json()
        except ValueError:
            logger.warning("Respuesta no JSON (%s) de %s", response.status_code, response.url)
            return ApiResponse(code=response.status_code, data={"type": "invalid_response"})

        if not isinstance(body, dict) or "code" not in body:
            return ApiResponse(code=response.status_code, data={"type": "invalid_response"})

        try:
            code = int(body["code"])
        except (TypeError, ValueError):
            code = response.status_code
        return ApiResponse(code=code, data=body.get("data"))

    async def get(self, path: str, token: str) -> ApiResponse:
        """GET autenticado."""
        try:
            response = await self.client.get(path, headers=self._headers(token))
        except httpx.HTTPError as e:
            raise TransportError(f"GET {path}: {e}") from e
        return self._parse(response)

    async def post(self, path: str, payload: dict[str, Any], token: str) -> ApiResponse:
        """POST autenticado con cuerpo JSON."""
        try:
            response = await self.client.post(
                path,
                json=payload,
                headers=self._headers(token),
            )
        except httpx.HTTPError as e:
            raise TransportError(f"POST {path}: {e}") from e
        return self._parse(response)

    # Progreso

    async def fetch_progress(self, token: str) -> ApiResponse:
        return await self.get(PROGRESS_PATH, token)

    async def add_progress(self, pids: list[str], token: str) -> ApiResponse:
        return await self.post(PROGRESS_PATH, {"pid": list(pids)}, token)

    async def delete_progress(self, pids: list[str], token: str) -> ApiResponse:
        return await self.post(PROGRESS_PATH, {"pid": list(pids), "type": DELETE}, token)

    # Favoritos

    async def fetch_stars(self, token: str) -> ApiResponse:
        return await self.get(STAR_PATH, token)

    async def add_stars(self, pids: list[str], token: str) -> ApiResponse:
        return await self.post(STAR_PATH, {"pid": list(pids)}, token)

    async def delete_stars(self, pids: list[str], token: str) -> ApiResponse:
        return await self.post(STAR_PATH, {"type": DELETE, "pid": list(pids)}, token)

    async def close(self) -> None:
        """Cerrar cliente HTTP."""
        await self.client.aclose()
