from __future__ import annotations

from typing import Optional

from order_admin.models.order_models import Order
from order_admin.schemas.order_schemas import (
    DetailField,
    DetailItemRow,
    DetailSection,
    ItemsSection,
    OrderDetail,
)
from order_admin.views.formatting import NOT_AVAILABLE, format_date, format_money
from order_admin.views.order_list import NO_ITEMS

ITEM_COLUMNS = ["Item", "Quantity", "Price", "Subtotal"]


def _field(label: str, value: Optional[str]) -> DetailField:
    return DetailField(label=label, value=value or NOT_AVAILABLE)


def render_order_detail(order: Order) -> OrderDetail:
    """Vue détail en lecture seule, cinq sections, "N/A" pour tout champ absent."""
    customer = order.customer
    address = order.delivery_address

    rows = [
        DetailItemRow(
            item=it.name,
            quantity=it.display_quantity,
            price=format_money(it.price),
            subtotal=format_money(it.subtotal),
        )
        for it in order.items
    ]

    return OrderDetail(
        order=DetailSection(
            title="Order Information",
            fields=[
                _field("Order ID", order.id),
                _field("Date", format_date(order.created_at)),
                _field("Status", order.status.value),
                _field("Total", format_money(order.total)),
            ],
        ),
        customer=DetailSection(
            title="Customer Information",
            fields=[
                _field("Name", order.customer_name),
                _field("Email", customer.email if customer else None),
                _field("Phone", customer.phone if customer else None),
            ],
        ),
        delivery=DetailSection(
            title="Delivery Information",
            fields=[
                _field("Address", address.street if address else None),
                _field("City", address.city if address else None),
                _field("State", address.state if address else None),
                _field("Zip Code", address.zip_code if address else None),
            ],
        ),
        items=ItemsSection(
            title="Order Items",
            columns=ITEM_COLUMNS,
            rows=rows,
            empty_message=None if rows else NO_ITEMS,
        ),
        payment=DetailSection(
            title="Payment Information",
            fields=[
                _field("Payment Method", order.payment_method),
                _field("Payment Status", order.payment_status),
            ],
        ),
    )
