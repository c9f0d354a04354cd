"""
Servidor de desarrollo con recarga automatica.
"""
import uvicorn
from profile_sync.core.config import settings


if __name__ == "__main__":
    uvicorn.run(
        "profile_sync.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True,
        log_level=settings.LOG_LEVEL.lower()
    )
