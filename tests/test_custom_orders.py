import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
import services.custom_orders_service as custom_orders_service
from microservices.orders_microservice import custom_order_document
from routes.dependencies import require_admin
from server import app
from tests.conftest import PROFILES, FakeCollection


@pytest.fixture
def custom_orders(monkeypatch):
    collection = FakeCollection()
    monkeypatch.setattr(custom_orders_service, "custom_orders_collection", collection)
    return collection


def test_document_defaults_to_guest():
    order = custom_order_document(" Beaded Sandals ", "size 40", "Clothing", "10000-20000", [], None)
    assert order["productName"] == "Beaded Sandals"
    assert order["category"] == "clothing"
    assert order["userName"] == "Guest"
    assert order["userId"] is None
    assert order["status"] == "pending"


def test_document_links_signed_in_user():
    order = custom_order_document("Sandals", "", "", "", ["data:image/png;base64,AA"], PROFILES["customer-1"])
    assert order["userId"] == "customer-1"
    assert order["userName"] == "Amina"
    assert order["userEmail"] == "amina@example.com"
    assert order["images"] == ["data:image/png;base64,AA"]


def test_document_needs_product_name():
    with pytest.raises(HTTPException) as error:
        custom_order_document("  ", "anything", "", "", [], None)
    assert error.value.status_code == 400


async def test_list_by_status_and_update(custom_orders):
    first = await custom_orders_service.add_custom_order(
        custom_order_document("Sandals", "", "", "", [], None))
    await custom_orders_service.add_custom_order(
        custom_order_document("Basket", "", "", "", [], PROFILES["customer-1"]))
    assert len(await custom_orders_service.get_custom_orders()) == 2
    await custom_orders_service.update_custom_order_status(first, "processing")
    processing = await custom_orders_service.get_custom_orders("processing")
    assert [order["productName"] for order in processing] == ["Sandals"]
    assert processing[0]["id"] == first
    mine = await custom_orders_service.get_custom_orders_by_user("customer-1")
    assert [order["productName"] for order in mine] == ["Basket"]


async def test_update_unknown_order(custom_orders):
    with pytest.raises(HTTPException) as error:
        await custom_orders_service.update_custom_order_status("not-an-id", "completed")
    assert error.value.status_code == 404
    with pytest.raises(HTTPException):
        await custom_orders_service.update_custom_order_status("65a000000000000000000000", "completed")


def test_guest_submits_request(custom_orders):
    client = TestClient(app)
    response = client.post("/custom-orders/submit", data={
        "productName": "Beaded Sandals", "description": "size 40",
        "category": "clothing", "priceRange": "10000-20000"})
    assert response.status_code == 200
    assert response.json()["message"] == "Your request has been submitted!"
    stored = custom_orders.documents[0]
    assert stored["userName"] == "Guest"
    assert stored["status"] == "pending"
    assert stored["images"] == []


def test_admin_list_rejects_unknown_status(custom_orders):
    app.dependency_overrides[require_admin] = lambda: PROFILES["admin-1"]
    try:
        client = TestClient(app)
        assert client.get("/custom-orders/list", params={"status": "lost"}).status_code == 400
        assert client.get("/custom-orders/list", params={"status": "pending"}).json()["orders"] == []
    finally:
        app.dependency_overrides.clear()


def test_list_needs_admin(custom_orders):
    assert TestClient(app).get("/custom-orders/list").status_code == 401
