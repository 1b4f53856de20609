"""
HTTP client for the admin endpoints of the orders service.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional
from urllib.parse import quote

import httpx
from prometheus_client import Counter

from order_admin.models.order_models import Order, OrderStatus
from order_admin.security.credentials import AUTH_REQUIRED_MESSAGE, CredentialContext

logger = logging.getLogger(__name__)

DEFAULT_AUTH_FAILED_MESSAGE = "Authentication failed. Please login again."

GATEWAY_CALLS = Counter(
    "order_gateway_calls_total", "Appels au service commandes", ["operation", "outcome"]
)


class OrderGatewayError(Exception):
    """Base exception for orders service errors"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AuthError(OrderGatewayError):
    """Token absent, expired or rejected (HTTP 401)"""
    pass


class RequestError(OrderGatewayError):
    """Non-2xx response other than 401"""

    def __init__(self, message: str, status_code: int):
        self.status_code = status_code
        super().__init__(message)


class TransportError(OrderGatewayError):
    """Network failure or unreadable response"""
    pass


def _error_message(response: httpx.Response) -> Optional[str]:
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return None


class OrderGateway:
    """Client for the list / update-status operations. No retries."""

    def __init__(self, client: httpx.AsyncClient, credentials: CredentialContext, base_url: str):
        self.client = client
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")

    def _headers(self) -> dict:
        token = self.credentials.current_token()
        if not token:
            raise AuthError(AUTH_REQUIRED_MESSAGE)
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        }

    async def _send(self, operation: str, method: str, path: str, **kwargs) -> httpx.Response:
        headers = self._headers()
        url = f"{self.base_url}{path}"
        try:
            response = await self.client.request(method, url, headers=headers, **kwargs)
        except httpx.RequestError as e:
            GATEWAY_CALLS.labels(operation, "transport_error").inc()
            logger.error("orders service unreachable", extra={"operation": operation, "url": url, "error": str(e)})
            raise TransportError(f"Orders service unavailable: {e}") from e

        logger.info("orders service response", extra={"operation": operation, "status": response.status_code})

        if response.status_code == 401:
            GATEWAY_CALLS.labels(operation, "auth_error").inc()
            raise AuthError(_error_message(response) or DEFAULT_AUTH_FAILED_MESSAGE)

        if not response.is_success:
            GATEWAY_CALLS.labels(operation, "request_error").inc()
            detail = _error_message(response)
            message = f"HTTP error! status: {response.status_code}."
            if detail:
                message = f"{message} {detail}"
            raise RequestError(message, status_code=response.status_code)

        GATEWAY_CALLS.labels(operation, "success").inc()
        return response

    async def list_orders(self) -> List[Order]:
        """
        Get the full order collection

        Returns:
            Parsed orders (empty list when the backend returns none)

        Raises:
            AuthError: 401 or no token
            RequestError: other non-2xx status
            TransportError: network failure or unreadable body
        """
        response = await self._send("list", "GET", "/api/admin/orders")
        try:
            data: Any = response.json()
        except ValueError as e:
            raise TransportError(f"Invalid orders payload: {e}") from e

        if data is None:
            return []
        if not isinstance(data, list):
            raise TransportError("Invalid orders payload: expected a list")
        return [Order.model_validate(o) for o in data if isinstance(o, dict)]

    async def update_status(self, order_id: str, new_status: OrderStatus) -> None:
        """
        Request a status transition for one order. The caller refreshes state.

        Raises:
            AuthError, RequestError, TransportError: as list_orders
        """
        status_value = OrderStatus(new_status).value
        await self._send(
            "update_status",
            "PUT",
            f"/api/admin/orders/{quote(str(order_id), safe='')}/status",
            json={"status": status_value},
        )
        logger.info("order status update accepted", extra={"order_id": order_id, "new_status": status_value})
