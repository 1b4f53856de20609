import math

import pytest

from order_admin.models.order_models import Order, OrderItem, OrderStatus, as_number, as_text
from conftest import pizza_order


# ----- OrderStatus -----
@pytest.mark.parametrize("raw", [None, "", "shipped", 3, "PENDING"])
def test_status_falls_back_to_pending(raw):
    assert OrderStatus.resolve(raw) is OrderStatus.PENDING


def test_status_known_values_and_labels():
    assert [s.value for s in OrderStatus] == ["pending", "processing", "delivered", "cancelled"]
    assert [s.label for s in OrderStatus] == ["Pending", "Processing", "Delivered", "Cancelled"]


def test_order_missing_status_is_pending():
    order = Order.model_validate({"_id": "x1"})
    assert order.status is OrderStatus.PENDING


# ----- field resolution -----
@pytest.mark.parametrize("raw, expected", [(42.5, 42.5), (0, 0), (7, 7), ("42.5", None), (True, None), (None, None), (math.nan, None)])
def test_as_number(raw, expected):
    assert as_number(raw) == expected


@pytest.mark.parametrize("raw, expected", [("a", "a"), ("", None), (None, None), (0, None), (False, None), (12345, "12345"), ({"x": 1}, None)])
def test_as_text(raw, expected):
    assert as_text(raw) == expected


def test_order_parses_backend_payload():
    order = Order.model_validate({
        "_id": "665f1c2e9b1e8a0012abcdef",
        "status": "delivered",
        "total": 19.99,
        "createdAt": "2024-03-05T12:00:00.000Z",
        "items": [{"productName": "Soup", "quantity": 1, "price": 4.5}, "garbage"],
        "userId": {"name": "Ada", "email": "ada@example.com", "phone": ""},
        "deliveryAddress": {"street": "1 Main St", "city": "Paris", "zipCode": 75001},
        "paymentMethod": "card",
        "paymentStatus": "paid",
    })

    assert order.id == "665f1c2e9b1e8a0012abcdef"
    assert order.status is OrderStatus.DELIVERED
    assert order.total == 19.99
    assert order.created_at == "2024-03-05T12:00:00.000Z"
    assert [it.name for it in order.items] == ["Soup"]
    assert order.customer.name == "Ada"
    assert order.customer.phone is None
    assert order.delivery_address.zip_code == "75001"
    assert order.delivery_address.state is None
    assert order.payment_method == "card"


def test_order_accepts_plain_id_key():
    assert Order.model_validate({"id": 17}).id == "17"


def test_order_non_numeric_total_is_absent():
    assert Order.model_validate(pizza_order(total="42.50")).total is None


def test_order_items_not_a_list():
    assert Order.model_validate(pizza_order(items="Pizza")).items == []
    assert Order.model_validate(pizza_order(items=None)).items == []


def test_unpopulated_customer_reference_is_absent():
    order = Order.model_validate(pizza_order(userId="665f1c2e9b1e8a0012abcdef"))
    assert order.customer is None
    assert order.customer_name == "Guest"


# ----- OrderItem -----
def test_item_name_resolution_order():
    assert OrderItem.from_payload({"name": "A", "productName": "B"}).name == "A"
    assert OrderItem.from_payload({"name": "", "productName": "B"}).name == "B"
    assert OrderItem.from_payload({}).name == "Unknown Item"


def test_item_defaults():
    item = OrderItem.from_payload({})
    assert item.display_quantity == "1"
    assert item.price is None
    assert item.subtotal is None


def test_item_zero_quantity_displays_one():
    assert OrderItem.from_payload({"quantity": 0}).display_quantity == "1"


def test_item_textual_quantity_is_displayed_but_not_multiplied():
    item = OrderItem.from_payload({"quantity": "2", "price": 10})
    assert item.display_quantity == "2"
    assert item.quantity is None
    assert item.subtotal is None


def test_item_subtotal_requires_both_numbers():
    assert OrderItem.from_payload({"price": 10, "quantity": 2}).subtotal == 20
    assert OrderItem.from_payload({"price": 10}).subtotal is None
    assert OrderItem.from_payload({"price": "10", "quantity": 2}).subtotal is None
