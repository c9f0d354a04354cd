"""
Firma HMAC-SHA256 de payloads de webhooks.

La firma se calcula sobre los bytes exactos del body; quien firma debe
enviar esos mismos bytes y quien verifica debe usar el body crudo.
"""
from __future__ import annotations

import hashlib
import hmac
import json
import secrets
from typing import Any, Dict, Optional, Union

SIGNATURE_HEADER = "X-FRS-Signature"
DELIVERY_HEADER = "X-FRS-Delivery"

BodyLike = Union[bytes, str]


def serialize_payload(payload: Dict[str, Any]) -> bytes:
    """JSON compacto en UTF-8: la forma en que el body viaja y se firma."""
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def compute_signature(secret: str, body: BodyLike) -> str:
    """Hex digest HMAC-SHA256 de `body` con `secret`."""
    if isinstance(body, str):
        body = body.encode("utf-8")
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


def verify_signature(secret: str, body: BodyLike, signature: Optional[str]) -> bool:
    """Comparacion en tiempo constante contra la firma recibida."""
    if not secret or not signature or not signature.isascii():
        return False
    expected = compute_signature(secret, body)
    return hmac.compare_digest(expected, signature.strip().lower())


def generate_secret(length: int = 32) -> str:
    """Secreto alfanumerico aleatorio para firmar webhooks."""
    alphabet = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
    return "".join(secrets.choice(alphabet) for _ in range(length))
