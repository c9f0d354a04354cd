"""
Cliente HTTP para entregar webhooks salientes.
"""
from typing import Dict, Optional

import httpx
from loguru import logger

from profile_sync.core.config import settings
from profile_sync.domain.entities.sync import DeliveryResult


class WebhookClient:
    """
    Envia un POST por entrega. Nunca lanza: cualquier fallo de red o status
    no 2xx se registra y se devuelve como DeliveryResult fallido.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout or settings.WEBHOOK_TIMEOUT_SECONDS
        self.transport = transport

    async def post(
        self,
        url: str,
        body: bytes,
        headers: Dict[str, str],
        delivery_id: str,
        signed: bool = False,
    ) -> DeliveryResult:
        """
        Entrega el body tal cual (son los bytes firmados).

        Args:
            url: Endpoint destino
            body: JSON serializado
            headers: Cabeceras (Content-Type, firma, id de entrega)
            delivery_id: Identificador de esta entrega
            signed: Si la entrega lleva firma
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(url, content=body, headers=headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Webhook {delivery_id} a {url} respondio {e.response.status_code}")
            return DeliveryResult(
                url=url,
                delivery_id=delivery_id,
                success=False,
                status_code=e.response.status_code,
                error=f"HTTP {e.response.status_code}",
                signed=signed,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Error al enviar webhook {delivery_id} a {url}: {e!r}")
            return DeliveryResult(
                url=url,
                delivery_id=delivery_id,
                success=False,
                error=str(e) or e.__class__.__name__,
                signed=signed,
            )

        logger.info(f"Webhook {delivery_id} entregado a {url} ({response.status_code})")
        return DeliveryResult(
            url=url,
            delivery_id=delivery_id,
            success=True,
            status_code=response.status_code,
            signed=signed,
        )
