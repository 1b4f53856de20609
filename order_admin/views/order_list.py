from __future__ import annotations

from typing import Iterable, List

from order_admin.models.order_models import Order, OrderStatus
from order_admin.schemas.order_schemas import OrderList, OrderRow, StatusOption, StatusSelector
from order_admin.views.formatting import NOT_AVAILABLE, format_date, format_money

COLUMNS = ["Order ID", "Customer", "Items", "Total", "Status", "Date", "Actions"]
NO_ORDERS = "No orders available"
NO_ITEMS = "No items"


def status_selector(status: OrderStatus) -> StatusSelector:
    return StatusSelector(
        value=status,
        options=[
            StatusOption(value=s, label=s.label, selected=s is status)
            for s in OrderStatus
        ],
    )


def render_order_row(order: Order) -> OrderRow:
    items = [f"{it.display_quantity} x {it.name}" for it in order.items]
    return OrderRow(
        order_id=order.id,
        short_id=order.id[-6:] if order.id else NOT_AVAILABLE,
        customer=order.customer_name,
        items=items or [NO_ITEMS],
        total=format_money(order.total),
        status=status_selector(order.status),
        date=format_date(order.created_at),
    )


def render_order_rows(orders: Iterable[Order]) -> List[OrderRow]:
    return [render_order_row(o) for o in orders]


def render_order_list(orders: Iterable[Order]) -> OrderList:
    rows = render_order_rows(orders)
    return OrderList(
        columns=COLUMNS,
        rows=rows,
        empty_message=None if rows else NO_ORDERS,
    )
