import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

os.environ["TESTING"] = "1"
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("DISPLAY_TIMEZONE", "UTC")

import json
import re

import httpx
import jwt
import pytest

from order_admin.infra.contracts import ScreenSignals
from order_admin.security.credentials import CredentialContext
from order_admin.services.order_gateway import OrderGateway
from order_admin.services.order_view_model import OrderViewModel

NOW = 1_760_000_000
BASE_URL = "http://orders.test"
_SECRET = "order-admin-test-secret-0123456789abcdef"
_STATUS_PATH = re.compile(r"^/api/admin/orders/(?P<order_id>[^/]+)/status$")


def make_token(exp=NOW + 3600, **claims):
    payload = {"isAdmin": True, "role": "admin", "exp": exp, **claims}
    return jwt.encode(payload, _SECRET, algorithm="HS256")


def pizza_order(**overrides):
    order = {
        "_id": "abc123456789",
        "status": "pending",
        "total": 42.5,
        "items": [{"name": "Pizza", "quantity": 2, "price": 10}],
    }
    order.update(overrides)
    return order


def _json_response(status_code, body):
    return httpx.Response(
        status_code,
        content=json.dumps(body).encode(),
        headers={"Content-Type": "application/json"},
    )


class FakeOrdersBackend:
    """Service commandes simulé, branché sur httpx.MockTransport."""

    def __init__(self):
        self.orders = []
        self.requests = []
        self.list_response = None
        self.update_response = None
        self.fail_with = None

    @property
    def list_calls(self):
        return [r for r in self.requests if r.method == "GET"]

    @property
    def update_calls(self):
        return [r for r in self.requests if r.method == "PUT"]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with

        if request.method == "GET" and request.url.path == "/api/admin/orders":
            if self.list_response is not None:
                return _json_response(*self.list_response)
            return httpx.Response(200, json=self.orders)

        match = _STATUS_PATH.match(request.url.path)
        if request.method == "PUT" and match:
            if self.update_response is not None:
                return _json_response(*self.update_response)
            new_status = json.loads(request.content)["status"]
            for order in self.orders:
                if order.get("_id") == match.group("order_id"):
                    order["status"] = new_status
            return httpx.Response(200)

        return httpx.Response(404, json={"message": "Not found"})


@pytest.fixture
def backend():
    return FakeOrdersBackend()


@pytest.fixture
def http_client(backend):
    return httpx.AsyncClient(transport=httpx.MockTransport(backend.handler))


@pytest.fixture
def credentials():
    return CredentialContext(token=make_token(), clock=lambda: NOW)


@pytest.fixture
def gateway(http_client, credentials):
    return OrderGateway(http_client, credentials, BASE_URL)


@pytest.fixture
def signals():
    return ScreenSignals()


@pytest.fixture
def view_model(gateway, credentials, signals):
    return OrderViewModel(gateway, credentials, navigator=signals, notifier=signals)
