# order_admin/services/order_view_model.py
from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from order_admin.infra.contracts import Navigator, Notifier
from order_admin.models.order_models import Order, OrderStatus
from order_admin.security.credentials import (
    AUTH_REQUIRED_MESSAGE,
    SESSION_EXPIRED_MESSAGE,
    CredentialContext,
)
from order_admin.services.order_gateway import (
    AuthError,
    OrderGateway,
    RequestError,
    TransportError,
)

logger = logging.getLogger(__name__)


class ViewState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERRORED = "errored"
    UNAUTHENTICATED = "unauthenticated"


class OrderViewModel:
    """
    État de l'écran de gestion des commandes.
    - La collection distante est la seule source de vérité : chaque mutation
      réussie est suivie d'un rechargement complet, jamais d'un patch local.
    - Seul le dernier chargement lancé peut appliquer son résultat.
    """

    def __init__(
        self,
        gateway: OrderGateway,
        credentials: CredentialContext,
        navigator: Navigator,
        notifier: Notifier,
    ):
        self.gateway = gateway
        self.credentials = credentials
        self.navigator = navigator
        self.notifier = notifier

        self.state = ViewState.IDLE
        self.orders: List[Order] = []
        self.error: Optional[str] = None
        self.selected: Optional[Order] = None

        self._fetch_seq = 0
        self._closed = False

    # ==========================================================
    # === Cycle de vie =========================================
    # ==========================================================

    @property
    def closed(self) -> bool:
        return self._closed

    async def activate(self) -> None:
        """Montage de l'écran : garde d'authentification puis chargement."""
        self.state = ViewState.LOADING
        if not self.check_credentials():
            return
        await self.fetch_orders()

    def check_credentials(self) -> bool:
        token = self.credentials.current_token()
        if not token:
            self._unauthenticated(AUTH_REQUIRED_MESSAGE)
            return False
        if not self.credentials.is_valid(token):
            self._unauthenticated(SESSION_EXPIRED_MESSAGE)
            return False
        return True

    def close(self) -> None:
        """Démontage : toute réponse tardive sera ignorée."""
        self._closed = True

    def _unauthenticated(self, message: str) -> None:
        if self._closed:
            return
        self.state = ViewState.UNAUTHENTICATED
        logger.warning("[orders.auth] redirect to login: %s", message)
        self.navigator.redirect_to_login(message)

    # ==========================================================
    # === Lecture ==============================================
    # ==========================================================

    async def fetch_orders(self) -> None:
        if self._closed:
            return

        token = self.credentials.current_token()
        if not token:
            self._unauthenticated(AUTH_REQUIRED_MESSAGE)
            return

        self._fetch_seq += 1
        seq = self._fetch_seq
        self.state = ViewState.LOADING
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("fetching orders", extra={"claims": self.credentials.describe(token)})

        try:
            orders = await self.gateway.list_orders()
        except AuthError as e:
            if self._is_current(seq):
                self._unauthenticated(e.message)
            return
        except (RequestError, TransportError) as e:
            if self._is_current(seq):
                self.state = ViewState.ERRORED
                self.error = e.message
                logger.error("[orders.list] fetch failed: %s", e.message)
            return

        if not self._is_current(seq):
            logger.debug("stale orders response discarded", extra={"seq": seq})
            return

        self.orders = list(orders)
        self.error = None
        self.state = ViewState.READY
        self._rebind_selection()
        logger.info("[orders.list] %s orders loaded", len(self.orders))

    async def retry(self) -> None:
        await self.fetch_orders()

    def _is_current(self, seq: int) -> bool:
        return not self._closed and seq == self._fetch_seq

    def _rebind_selection(self) -> None:
        if self.selected is None:
            return
        self.selected = self.find_order(self.selected.id)

    def find_order(self, order_id: Optional[str]) -> Optional[Order]:
        if order_id is None:
            return None
        return next((o for o in self.orders if o.id == order_id), None)

    # ==========================================================
    # === Mise à jour du statut ================================
    # ==========================================================

    async def change_status(self, order_id: str, new_status: OrderStatus | str) -> bool:
        """
        Demande une transition de statut puis recharge toute la collection.
        En cas d'échec la liste affichée reste inchangée et l'utilisateur est
        notifié.
        """
        status = OrderStatus(new_status)
        if self._closed or not self.check_credentials():
            return False

        try:
            await self.gateway.update_status(order_id, status)
        except AuthError as e:
            self._unauthenticated(e.message)
            return False
        except (RequestError, TransportError) as e:
            logger.error(
                "order status update failed",
                extra={"order_id": order_id, "new_status": status.value, "error": e.message},
            )
            if not self._closed:
                self.notifier.alert(f"Failed to update order status: {e.message}")
            return False

        logger.info("order status updated", extra={"order_id": order_id, "to": status.value})
        await self.fetch_orders()
        return True

    # ==========================================================
    # === Sélection ============================================
    # ==========================================================

    def select_order(self, order: Order) -> None:
        if not any(o is order for o in self.orders):
            raise ValueError(f"Order {order.id} is not in the current collection")
        self.selected = order

    def clear_selection(self) -> None:
        self.selected = None
