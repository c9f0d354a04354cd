"""
Cliente del API de lectura de perfiles del hub.

El pull se autentica como un cliente normal del API (token Bearer),
no con firma HMAC: se confia en el hub configurado.
"""
from typing import Any, Dict, List, Optional

import httpx
from loguru import logger

from profile_sync.core.config import settings
from profile_sync.shared.exceptions.sync import HubRequestException


class HubClient:
    """
    Lee `GET <hub_url>/profiles?per_page=<n>&type=<t>` en una sola llamada.
    """

    def __init__(
        self,
        hub_url: str,
        api_token: str = "",
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.hub_url = hub_url.rstrip("/")
        self.api_token = api_token
        self.timeout = timeout or settings.HUB_TIMEOUT_SECONDS
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    async def fetch_profiles(self, per_page: int, type_filter: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Descarga el listado de perfiles.

        Args:
            per_page: Tamano de pagina (se pide todo en una llamada)
            type_filter: Company role por el que filtrar

        Returns:
            List[Dict[str, Any]]: Perfiles tal como los entrega el hub

        Raises:
            HubRequestException: Error de red, status no 2xx o respuesta sin `data`
        """
        params: Dict[str, Any] = {"per_page": per_page}
        if type_filter:
            params["type"] = type_filter
        url = f"{self.hub_url}/profiles"

        logger.info(f"Consultando hub: {url} params={params}")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(url, params=params, headers=self._headers())
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"El hub respondio {e.response.status_code} en {url}")
            raise HubRequestException(
                f"Hub responded with HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Error consultando el hub {url}: {e!r}")
            raise HubRequestException(f"Failed to fetch profiles from hub: {e}") from e
        except ValueError as e:
            raise HubRequestException("Hub response is not valid JSON") from e

        profiles = data.get("data") if isinstance(data, dict) else None
        if not isinstance(profiles, list):
            raise HubRequestException("Hub response has no 'data' list")
        return profiles
