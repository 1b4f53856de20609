from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from order_admin.models.order_models import OrderStatus


class OrderStatusUpdate(BaseModel):
    status: OrderStatus = Field(..., description="Nouveau statut de la commande")


# ---------- Liste ----------

class StatusOption(BaseModel):
    value: OrderStatus
    label: str
    selected: bool = False


class StatusSelector(BaseModel):
    value: OrderStatus
    options: List[StatusOption]


class OrderRow(BaseModel):
    order_id: Optional[str] = None
    short_id: str
    customer: str
    items: List[str]
    total: str
    status: StatusSelector
    date: str


class OrderList(BaseModel):
    columns: List[str]
    rows: List[OrderRow] = []
    empty_message: Optional[str] = None


# ---------- Détail ----------

class DetailField(BaseModel):
    label: str
    value: str


class DetailItemRow(BaseModel):
    item: str
    quantity: str
    price: str
    subtotal: str


class DetailSection(BaseModel):
    title: str
    fields: List[DetailField] = []


class ItemsSection(BaseModel):
    title: str
    columns: List[str]
    rows: List[DetailItemRow] = []
    empty_message: Optional[str] = None


class OrderDetail(BaseModel):
    title: str = "Order Details"
    order: DetailSection
    customer: DetailSection
    delivery: DetailSection
    items: ItemsSection
    payment: DetailSection


# ---------- Écran ----------

class OrderScreen(BaseModel):
    state: str
    title: str = "Order Management"
    error: Optional[str] = None
    retry_url: Optional[str] = None
    orders: Optional[OrderList] = None
    detail: Optional[OrderDetail] = None
    notifications: List[str] = []
