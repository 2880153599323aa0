import re
from datetime import datetime
from typing import Dict, List, Optional
from urllib.parse import quote
from fastapi import HTTPException
from config import DEFAULT_VENDOR_PHONE


TRACKING_STEPS = (
    ("pending", "Order Placed", "createdAt"),
    ("processing", "Processing", "processingAt"),
    ("shipped", "Shipped", "shippedAt"),
    ("delivered", "Delivered", "deliveredAt"),
)
STATUS_TIMESTAMPS = {"processing": "processingAt",
                     "shipped": "shippedAt", "delivered": "deliveredAt"}
CUSTOM_ORDER_STATUSES = ("pending", "processing", "completed", "cancelled")


def validate_customer_info(customer):
    if not (customer.name.strip() and customer.phone.strip()
            and customer.email.strip() and customer.address.strip()):
        raise HTTPException(
            status_code=400, detail="Please fill in all required customer information first")


def format_phone_number(phone: str) -> str:
    # local numbers to the 255 country code, digits only
    if not phone:
        return DEFAULT_VENDOR_PHONE
    digits = re.sub(r"\D", "", phone)
    if not digits:
        return DEFAULT_VENDOR_PHONE
    if digits.startswith("0"):
        return f"255{digits[1:]}"
    if not digits.startswith("255") and len(digits) == 9:
        return f"255{digits}"
    return digits


def _money(value) -> str:
    value = float(value or 0)
    if value.is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def whatsapp_message(customer, items: List[Dict], total: float, now: datetime = None) -> str:
    now = now or datetime.now()
    lines = [
        "*NEW ORDER REQUEST*",
        "",
        "*Order Summary*",
        f"Date: {now.strftime('%d/%m/%Y')}",
        f"Time: {now.strftime('%H:%M:%S')}",
        "",
        "*Customer Information*",
        f"Name: {customer.name}",
        f"Phone: {customer.phone}",
        f"Email: {customer.email}",
        f"Address: {customer.address}",
    ]
    if customer.details:
        lines += [f"Details: {customer.details}", ""]
    lines.append("*Items Ordered*")
    for index, item in enumerate(items, start=1):
        price = float(item.get("price") or 0)
        quantity = item.get("quantity", 0)
        lines += [
            f"{index}. {item.get('name', '')}",
            f"   Qty: {quantity}",
            f"   Price: {_money(price)} TSh",
            f"   Subtotal: {_money(price * quantity)} TSh",
            "",
        ]
    lines += [f"*TOTAL AMOUNT: {_money(total)} TSh*", "", "Please confirm this order."]
    return "\n".join(lines)


def items_total(items: List[Dict]) -> float:
    return sum(float(item.get("price") or 0) * item.get("quantity", 0) for item in items)


def whatsapp_link(phone: str, message: str) -> str:
    return f"https://wa.me/{phone}?text={quote(message)}"


def order_documents(customer, items: List[Dict]) -> List[Dict]:
    # one order per line item
    orders = []
    for item in items:
        price = float(item.get("price") or 0)
        orders.append({
            "productId": item.get("id"),
            "productName": item.get("name", ""),
            "quantity": item.get("quantity", 1),
            "price": price,
            "total": price * item.get("quantity", 1),
            "customerName": customer.name,
            "customerPhone": customer.phone,
            "customerEmail": customer.email.strip(),
            "customerAddress": customer.address,
            "customerDetails": customer.details or "",
            "vendorId": item.get("vendorId") or "demo-vendor",
            "vendorName": item.get("vendorName") or "Demo Vendor",
        })
    return orders


def tracking_steps(order: Dict) -> Dict:
    status = order.get("status") or "pending"
    steps = [{"status": step, "label": label, "time": order.get(field)}
             for step, label, field in TRACKING_STEPS]
    statuses = [step for step, _, _ in TRACKING_STEPS]
    current_index = statuses.index(status) if status in statuses else -1
    for index, step in enumerate(steps):
        step["completed"] = index <= current_index
    return {"status": status, "currentStep": current_index, "steps": steps}


def custom_order_document(product_name: str, description: str, category: str,
                          price_range: str, images: List[str], user: Optional[Dict]) -> Dict:
    # a request for a product the marketplace does not list yet
    if not product_name.strip():
        raise HTTPException(status_code=400, detail="Product name is required")
    user = user or {}
    return {
        "productName": product_name.strip(),
        "description": description.strip(),
        "category": category.strip().lower(),
        "priceRange": price_range.strip(),
        "images": images,
        "userId": user.get("uid"),
        "userName": user.get("name") or "Guest",
        "userEmail": user.get("email"),
        "status": "pending",
    }
