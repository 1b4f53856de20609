from __future__ import annotations

import math
from enum import Enum
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def resolve(cls, value: Any) -> "OrderStatus":
        """Statut connu, sinon PENDING (absent, vide ou inconnu)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.PENDING


# ---------- Règles de résolution des champs ----------

def as_number(value: Any) -> Optional[float]:
    """int/float fini (hors bool), sinon None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def as_text(value: Any) -> Optional[str]:
    """None, "", 0 et False sont absents ; tout autre scalaire passe par str()."""
    if value is None or value is False or value == "" or as_number(value) == 0:
        return None
    if isinstance(value, (dict, list)):
        return None
    return str(value)


class _Projection(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class Customer(_Projection):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("name", "email", "phone", mode="before")
    @classmethod
    def _resolve_text(cls, v):
        return as_text(v)


class DeliveryAddress(_Projection):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = Field(default=None, alias="zipCode")

    @field_validator("street", "city", "state", "zip_code", mode="before")
    @classmethod
    def _resolve_text(cls, v):
        return as_text(v)


class OrderItem(_Projection):
    name: str = "Unknown Item"
    quantity: Optional[float] = None
    price: Optional[float] = None
    # quantité non numérique mais présente ("2"), affichée telle quelle
    quantity_text: Optional[str] = Field(default=None, exclude=True)

    @classmethod
    def from_payload(cls, payload: dict) -> "OrderItem":
        name = as_text(payload.get("name")) or as_text(payload.get("productName"))
        return cls(
            name=name or "Unknown Item",
            quantity=as_number(payload.get("quantity")),
            quantity_text=as_text(payload.get("quantity")),
            price=as_number(payload.get("price")),
        )

    @property
    def display_quantity(self) -> str:
        if not self.quantity:
            return self.quantity_text or "1"
        qty = self.quantity
        return str(int(qty)) if float(qty).is_integer() else str(qty)

    @property
    def subtotal(self) -> Optional[float]:
        if self.price is None or self.quantity is None:
            return None
        return self.price * self.quantity


class Order(_Projection):
    """
    Commande telle que renvoyée par le service commandes.
    Les champs mal typés sont résolus, jamais rejetés.
    """

    id: Optional[str] = Field(default=None, validation_alias=AliasChoices("_id", "id"))
    status: OrderStatus = OrderStatus.PENDING
    total: Optional[float] = None
    created_at: Any = Field(default=None, alias="createdAt")
    items: List[OrderItem] = Field(default_factory=list)
    customer: Optional[Customer] = Field(default=None, alias="userId")
    delivery_address: Optional[DeliveryAddress] = Field(default=None, alias="deliveryAddress")
    payment_method: Optional[str] = Field(default=None, alias="paymentMethod")
    payment_status: Optional[str] = Field(default=None, alias="paymentStatus")

    @field_validator("id", mode="before")
    @classmethod
    def _resolve_id(cls, v):
        return None if v is None or v == "" else str(v)

    @field_validator("status", mode="before")
    @classmethod
    def _resolve_status(cls, v):
        return OrderStatus.resolve(v)

    @field_validator("total", mode="before")
    @classmethod
    def _resolve_total(cls, v):
        return as_number(v)

    @field_validator("items", mode="before")
    @classmethod
    def _resolve_items(cls, v):
        if not isinstance(v, list):
            return []
        return [
            it if isinstance(it, OrderItem) else OrderItem.from_payload(it)
            for it in v
            if isinstance(it, (dict, OrderItem))
        ]

    @field_validator("customer", "delivery_address", mode="before")
    @classmethod
    def _resolve_nested(cls, v):
        return v if isinstance(v, (dict, BaseModel)) else None

    @field_validator("payment_method", "payment_status", mode="before")
    @classmethod
    def _resolve_text(cls, v):
        return as_text(v)

    @property
    def customer_name(self) -> str:
        return (self.customer.name if self.customer else None) or "Guest"
