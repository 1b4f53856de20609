from __future__ import annotations

import logging
from typing import AsyncIterator
from urllib.parse import urlencode

import httpx
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse, RedirectResponse, Response

from order_admin.core.config import settings
from order_admin.infra.contracts import ScreenSignals
from order_admin.schemas.order_schemas import OrderScreen, OrderStatusUpdate
from order_admin.security.credentials import CredentialContext, credentials_from_request
from order_admin.services.order_gateway import OrderGateway
from order_admin.services.order_view_model import OrderViewModel, ViewState
from order_admin.views.order_detail import render_order_detail
from order_admin.views.order_list import render_order_list


router = APIRouter(prefix="/admin/orders", tags=["orders"])
logger = logging.getLogger(__name__)


# ---------- Dependency injection ----------
def get_screen_signals() -> ScreenSignals:
    """Signaux de l'écran (redirection, alertes), partagés pour la requête."""
    return ScreenSignals()


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Client httpx partagé, ouvert par le lifespan de l'app."""
    return request.app.state.http_client


async def get_view_model(
    client: httpx.AsyncClient = Depends(get_http_client),
    credentials: CredentialContext = Depends(credentials_from_request),
    signals: ScreenSignals = Depends(get_screen_signals),
) -> AsyncIterator[OrderViewModel]:
    """Construit un OrderViewModel par requête (gateway + signaux d'écran)."""
    gateway = OrderGateway(client, credentials, settings.ORDERS_API_BASE_URL)
    vm = OrderViewModel(gateway, credentials, navigator=signals, notifier=signals)
    try:
        yield vm
    finally:
        vm.close()


# ---------- Projection ----------
def build_screen(vm: OrderViewModel, signals: ScreenSignals) -> OrderScreen:
    screen = OrderScreen(state=vm.state.value, notifications=list(signals.alerts))
    if vm.state is ViewState.ERRORED:
        screen.error = vm.error
        screen.retry_url = router.prefix
    elif vm.state is ViewState.READY:
        screen.orders = render_order_list(vm.orders)
        if vm.selected is not None:
            screen.detail = render_order_detail(vm.selected)
    return screen


def respond(vm: OrderViewModel, signals: ScreenSignals, status_code: int = status.HTTP_200_OK) -> Response:
    if signals.redirected:
        query = urlencode({"message": signals.redirect_message})
        return RedirectResponse(f"{settings.LOGIN_URL}?{query}", status_code=status.HTTP_303_SEE_OTHER)
    return JSONResponse(build_screen(vm, signals).model_dump(mode="json"), status_code=status_code)


# ---------- Endpoints ----------

@router.get("", response_model=OrderScreen)
async def order_screen(
    vm: OrderViewModel = Depends(get_view_model),
    signals: ScreenSignals = Depends(get_screen_signals),
):
    """Écran liste des commandes (ou panneau d'erreur avec retry)."""
    await vm.activate()
    return respond(vm, signals)


@router.get("/{order_id}", response_model=OrderScreen)
async def order_detail_screen(
    order_id: str,
    vm: OrderViewModel = Depends(get_view_model),
    signals: ScreenSignals = Depends(get_screen_signals),
):
    """Écran liste + détail de la commande sélectionnée (sans appel supplémentaire)."""
    await vm.activate()
    if vm.state is ViewState.READY:
        order = vm.find_order(order_id)
        if order is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Order {order_id} not found")
        vm.select_order(order)
    return respond(vm, signals)


@router.put("/{order_id}/status", response_model=OrderScreen)
async def update_order_status(
    order_id: str,
    status_update: OrderStatusUpdate,
    vm: OrderViewModel = Depends(get_view_model),
    signals: ScreenSignals = Depends(get_screen_signals),
):
    """
    Change le statut puis renvoie la liste rechargée.
    502 si le service refuse : l'écran d'échec ne porte que la notification
    (état `idle`, sans liste), le client garde la liste qu'il affichait.
    """
    logger.info("status change requested", extra={"order_id": order_id, "new_status": status_update.status.value})
    updated = await vm.change_status(order_id, status_update.status)
    return respond(vm, signals, status.HTTP_200_OK if updated else status.HTTP_502_BAD_GATEWAY)
