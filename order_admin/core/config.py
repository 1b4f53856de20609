# order_admin/core/config.py (Order Admin)

from __future__ import annotations

import os
from dotenv import load_dotenv

load_dotenv()


def _get_bool(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


def _get_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


class Settings:
    """
    Configuration unique de l'app (stateless).
    - Orders API: URL de base du service commandes + timeout (0 = aucun).
    - Auth: URL de login pour les redirections, cookie du token admin.
    - Affichage: fuseau horaire des dates.
    - Logs: JSON par défaut.
    """

    def __init__(self) -> None:
        # ---------- Métadonnées ----------
        self.ENV = os.getenv("ENV", "dev")
        self.APP_NAME = os.getenv("APP_NAME", "order-admin")
        self.APP_TITLE = os.getenv("APP_TITLE", "Order Admin")
        self.APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
        self.APP_DESCRIPTION = os.getenv("APP_DESCRIPTION", "Back-office de gestion des commandes")

        # ---------- Orders API ----------
        self.ORDERS_API_BASE_URL = os.getenv("ORDERS_API_BASE_URL", "http://localhost:5004").rstrip("/")
        self.ORDERS_API_TIMEOUT = _get_float("ORDERS_API_TIMEOUT", 0.0)

        # ---------- Auth ----------
        self.LOGIN_URL = os.getenv("LOGIN_URL", "/admin/login")
        self.ADMIN_TOKEN_COOKIE = os.getenv("ADMIN_TOKEN_COOKIE", "adminToken")

        # ---------- Affichage ----------
        self.DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "UTC")

        # ---------- Logging ----------
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
        self.LOG_FORMAT = os.getenv("LOG_FORMAT", "json")

        # ---------- CORS ----------
        self.CORS_ALLOW_ORIGINS = [
            o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
        ]
        self.CORS_ALLOW_CREDENTIALS = _get_bool("CORS_ALLOW_CREDENTIALS", True)
        self.CORS_ALLOW_METHODS = os.getenv("CORS_ALLOW_METHODS", "*")
        self.CORS_ALLOW_HEADERS = os.getenv("CORS_ALLOW_HEADERS", "*")

    @property
    def orders_api_timeout(self) -> float | None:
        """Timeout httpx : None quand ORDERS_API_TIMEOUT vaut 0."""
        return self.ORDERS_API_TIMEOUT or None


settings = Settings()
