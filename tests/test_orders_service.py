from urllib.parse import unquote
import pytest
from fastapi import HTTPException
import services.orders_service as orders_service
from microservices.storage_microservice import CART_KEY
from schemas.orders_schemas import CustomerInfoSchema
from services.cart_service import CartState


STORED = {
    "p1": {"id": "p1", "name": "Mug", "price": 5000, "vendorId": "v1", "vendorName": "Duka", "stock": 4},
    "p2": {"id": "p2", "name": "Pen", "price": 500, "vendorId": "v1", "vendorName": "Duka", "stock": 9},
}


@pytest.fixture
def customer():
    return CustomerInfoSchema(name="Amina", phone="0712345678", email="amina@example.com", address="Arusha")


@pytest.fixture
def messages():
    return []


@pytest.fixture
def cart(store, channel, messages):
    return CartState(store, channel, notify=messages.append)


@pytest.fixture
def placed(monkeypatch):
    orders = []

    async def fake_product(product_id):
        if product_id not in STORED:
            raise HTTPException(status_code=404, detail="No product found for the given id")
        return dict(STORED[product_id])

    async def fake_add_order(order):
        orders.append(order)
        return f"order-{len(orders)}"

    monkeypatch.setattr(orders_service, "get_cart_product", fake_product)
    monkeypatch.setattr(orders_service, "add_order", fake_add_order)
    return orders


async def test_checkout_charges_stored_price(cart, customer, placed, messages):
    await cart.add_item({"id": "p1", "name": "Mug", "price": 1}, 2)
    order_ids = await orders_service.place_orders(customer, cart)
    assert order_ids == ["order-1"]
    assert placed[0]["price"] == 5000
    assert placed[0]["total"] == 10000
    assert placed[0]["vendorId"] == "v1"
    assert cart.items == []
    assert messages[-1] == "Order placed successfully!"


async def test_checkout_rejects_missing_product(cart, customer, placed):
    await cart.add_item({"id": "gone", "name": "Old Lamp", "price": 10})
    with pytest.raises(HTTPException) as error:
        await orders_service.place_orders(customer, cart)
    assert error.value.status_code == 400
    assert "Old Lamp" in error.value.detail
    assert placed == []
    assert len(cart.items) == 1


async def test_failed_insert_discards_earlier_orders(cart, customer, store, monkeypatch, messages):
    discarded = []

    async def fake_product(product_id):
        return dict(STORED[product_id])

    async def flaky_add_order(order):
        if order["productId"] == "p2":
            raise ConnectionError("database down")
        return "order-1"

    async def fake_delete(order_id):
        discarded.append(order_id)
        return True

    monkeypatch.setattr(orders_service, "get_cart_product", fake_product)
    monkeypatch.setattr(orders_service, "add_order", flaky_add_order)
    monkeypatch.setattr(orders_service, "delete_order", fake_delete)
    await cart.add_item({"id": "p1", "price": 5000})
    await cart.add_item({"id": "p2", "price": 500})
    with pytest.raises(HTTPException) as error:
        await orders_service.place_orders(customer, cart)
    assert error.value.status_code == 503
    assert discarded == ["order-1"]
    assert [item["id"] for item in cart.items] == ["p1", "p2"]
    assert store.get_item(CART_KEY) is not None
    assert messages[-1] == "Failed to place order"


async def test_whatsapp_total_uses_stored_price(cart, customer, placed, monkeypatch):
    async def fake_phone(vendor_id):
        return "255712000000"

    monkeypatch.setattr(orders_service, "vendor_phone", fake_phone)
    await cart.add_item({"id": "p1", "price": 1}, 2)
    result = await orders_service.whatsapp_checkout(customer, cart)
    assert result["whatsapp_url"].startswith("https://wa.me/255712000000?text=")
    assert "TOTAL AMOUNT: 10,000 TSh" in unquote(result["whatsapp_url"])
    assert result["order_ids"] == ["order-1"]
