"""
Excepciones personalizadas de la aplicacion.
"""
from .base import AppException
from .domain import (
    DomainException,
    EntityNotFoundException,
    WebhookNotFoundException,
    ValidationException,
    UserCreationException,
)
from .auth import AuthException, InvalidCredentialsException, TokenExpiredException, UnauthorizedException
from .sync import (
    ConfigurationException,
    WebhookAuthException,
    WebhookNotConfiguredException,
    MissingSignatureException,
    InvalidSignatureException,
    WebhookPayloadException,
    AuthoritativeSiteException,
    SyncWriteException,
    HubRequestException,
)

__all__ = [
    "AppException",
    "DomainException",
    "EntityNotFoundException",
    "WebhookNotFoundException",
    "ValidationException",
    "UserCreationException",
    "AuthException",
    "InvalidCredentialsException",
    "TokenExpiredException",
    "UnauthorizedException",
    "ConfigurationException",
    "WebhookAuthException",
    "WebhookNotConfiguredException",
    "MissingSignatureException",
    "InvalidSignatureException",
    "WebhookPayloadException",
    "AuthoritativeSiteException",
    "SyncWriteException",
    "HubRequestException",
]
