"""
Router principal de la API v1.
Agrupa todos los endpoints de la version 1.
"""
from fastapi import APIRouter

from profile_sync.api.v1.endpoints import auth, profiles, sync, webhook_receiver, webhooks


# Router principal de la API v1
api_router = APIRouter(prefix="/v1")

# Incluir routers de endpoints especificos
api_router.include_router(auth.router)
api_router.include_router(webhook_receiver.router)
api_router.include_router(webhooks.router)
api_router.include_router(profiles.router)
api_router.include_router(sync.router)
