"""
Repositorio para gestionar configuraciones del sistema.
"""
from typing import Any, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from loguru import logger

from profile_sync.infrastructure.database.models import SystemSettingsModel

# Claves cuyo valor no se escribe en los logs
_SECRET_KEYS = frozenset({"webhook_secret", "hub_api_token", "webhook_subscriptions"})


class SystemSettingsRepository:
    """
    Gestiona la tabla system_settings.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_value(self, key: str, default: Any = None) -> Any:
        """
        Obtiene el valor de una configuración por su clave.
        """
        query = select(SystemSettingsModel).where(SystemSettingsModel.key == key)
        result = await self.db.execute(query)
        setting = result.scalar_one_or_none()
        if setting is None or setting.value is None:
            return default
        return setting.value

    async def set_value(self, key: str, value: Any, description: Optional[str] = None) -> bool:
        """
        Crea o actualiza una configuración.
        """
        existing = await self.db.get(SystemSettingsModel, key)

        if existing:
            existing.value = value
            if description:
                existing.description = description
        else:
            new_setting = SystemSettingsModel(key=key, value=value, description=description)
            self.db.add(new_setting)

        await self.db.flush()
        shown = "***" if key in _SECRET_KEYS else value
        logger.info(f"Configuración '{key}' actualizada a: {shown}")
        return True
