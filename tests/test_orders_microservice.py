from datetime import datetime
from urllib.parse import unquote
import pytest
from fastapi import HTTPException
from microservices.orders_microservice import format_phone_number, order_documents, tracking_steps, validate_customer_info, whatsapp_link, whatsapp_message
from schemas.orders_schemas import CustomerInfoSchema


@pytest.fixture
def customer():
    return CustomerInfoSchema(name="Amina", phone="0712345678", email=" amina@example.com ",
                              address="Dar es Salaam", details="Call first")


ITEMS = [
    {"id": "p1", "name": "Mug", "price": 5000, "quantity": 2, "vendorId": "v1", "vendorName": "Duka"},
    {"id": "p2", "name": "Pen", "price": 500, "quantity": 1},
]


@pytest.mark.parametrize("phone, expected", [
    ("0712 345 678", "255712345678"),
    ("712345678", "255712345678"),
    ("+255 712 345 678", "255712345678"),
    ("", "255787000000"),
    ("n/a", "255787000000"),
])
def test_format_phone_number(phone, expected):
    assert format_phone_number(phone) == expected


def test_missing_customer_info_rejected():
    with pytest.raises(HTTPException) as error:
        validate_customer_info(CustomerInfoSchema(name="Amina", phone="0712345678"))
    assert error.value.status_code == 400


def test_complete_customer_info_accepted(customer):
    validate_customer_info(customer)


def test_one_order_per_item(customer):
    orders = order_documents(customer, ITEMS)
    assert [order["productId"] for order in orders] == ["p1", "p2"]
    assert orders[0]["total"] == 10000
    assert orders[0]["customerEmail"] == "amina@example.com"
    assert orders[1]["vendorId"] == "demo-vendor"
    assert orders[1]["vendorName"] == "Demo Vendor"


def test_whatsapp_message(customer):
    message = whatsapp_message(customer, ITEMS, 10500, now=datetime(2024, 5, 1, 9, 30))
    assert "Date: 01/05/2024" in message
    assert "Details: Call first" in message
    assert "1. Mug" in message
    assert "   Subtotal: 10,000 TSh" in message
    assert "*TOTAL AMOUNT: 10,500 TSh*" in message


def test_whatsapp_link_encodes_message():
    link = whatsapp_link("255712345678", "Hi there\nOrder")
    assert link.startswith("https://wa.me/255712345678?text=")
    assert unquote(link.split("text=", 1)[1]) == "Hi there\nOrder"


def test_tracking_steps():
    tracking = tracking_steps({"status": "shipped", "createdAt": "t0", "shippedAt": "t2"})
    assert tracking["currentStep"] == 2
    assert [step["completed"] for step in tracking["steps"]] == [True, True, True, False]
    assert tracking["steps"][0]["time"] == "t0"


def test_unknown_status_has_no_completed_steps():
    tracking = tracking_steps({"status": "cancelled"})
    assert tracking["currentStep"] == -1
    assert not any(step["completed"] for step in tracking["steps"])
