"""
Crea las tablas de perfiles y configuracion sin pasar por Alembic.

Util para entornos de desarrollo con SQLite.
"""
import asyncio
from loguru import logger

from profile_sync.infrastructure.database.session import init_db, close_db


async def main():
    logger.info("Inicializando base de datos...")

    try:
        await init_db()
        logger.success("Base de datos inicializada correctamente")
    except Exception as e:
        logger.error(f"Error al inicializar base de datos: {e}")
        raise
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
