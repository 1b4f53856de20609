from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

import jwt
from fastapi import Request

from order_admin.core.config import settings
from order_admin.models.order_models import as_number

logger = logging.getLogger(__name__)

AUTH_REQUIRED_MESSAGE = "Authentication required. Please login."
SESSION_EXPIRED_MESSAGE = "Your session has expired. Please login again."

Claims = Dict[str, Any]


def decode_token(token: str) -> Optional[Claims]:
    """
    Lit les claims du JWT sans vérifier la signature : le service commandes
    la vérifie à chaque appel (401 sinon).
    """
    try:
        claims = jwt.decode(token, options={"verify_signature": False, "verify_exp": False})
    except jwt.PyJWTError as e:
        logger.warning("JWT illisible: %s", e)
        return None
    return claims if isinstance(claims, dict) else None


@dataclass
class CredentialContext:
    """
    Contexte d'authentification explicite, injecté dans le view model et le
    gateway (aucune lecture globale du token).
    """

    token: Optional[str] = None
    decoder: Callable[[str], Optional[Claims]] = decode_token
    clock: Callable[[], float] = field(default=time.time)

    def current_token(self) -> Optional[str]:
        return self.token or None

    def decode(self, token: Optional[str]) -> Optional[Claims]:
        if not token:
            return None
        return self.decoder(token)

    def is_valid(self, token: Optional[str]) -> bool:
        """Invalide si absent, illisible, sans `exp` numérique, ou `exp` <= maintenant."""
        claims = self.decode(token)
        if not claims:
            return False
        exp = as_number(claims.get("exp"))
        if exp is None:
            return False
        return exp > self.clock()

    def describe(self, token: Optional[str]) -> Optional[Dict[str, Any]]:
        """Résumé des claims pour les logs (jamais le token lui-même)."""
        claims = self.decode(token)
        if not claims:
            return None
        exp = as_number(claims.get("exp"))
        return {
            "is_admin": claims.get("isAdmin"),
            "role": claims.get("role"),
            "exp": _exp_iso(exp),
            "expires_in_minutes": int((exp - self.clock()) // 60) if exp is not None else None,
        }


def _exp_iso(exp: Optional[float]) -> Any:
    """ISO-8601 si `exp` tient dans un datetime, sinon la valeur brute."""
    if exp is None:
        return None
    try:
        return datetime.fromtimestamp(exp, tz=timezone.utc).isoformat()
    except (OverflowError, OSError, ValueError):
        return exp


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() != "bearer" or not credentials.strip():
        return None
    return credentials.strip()


def credentials_from_request(request: Request) -> CredentialContext:
    """Dependency FastAPI : header Authorization Bearer, sinon cookie du token admin."""
    token = _bearer_token(request.headers.get("authorization"))
    if token is None:
        token = request.cookies.get(settings.ADMIN_TOKEN_COOKIE) or None
    return CredentialContext(token=token)
