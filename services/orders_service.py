import logging
import re
from datetime import datetime, timezone
from fastapi import HTTPException
from microservices.orders_microservice import STATUS_TIMESTAMPS, format_phone_number, items_total, order_documents, tracking_steps, validate_customer_info, whatsapp_link, whatsapp_message
from mongomanager import orders_collection, product_collection, serialize, to_object_id
from services.products_service import get_cart_product, update_product_stock
from services.vendors_service import get_vendor_by_id


logger = logging.getLogger(__name__)


async def add_order(order_data: dict):
    now = datetime.now(timezone.utc)
    order = {**order_data, "status": "pending", "createdAt": now, "updatedAt": now}
    result = await orders_collection.insert_one(order)
    logger.info("Order added with ID: %s", result.inserted_id)
    return str(result.inserted_id)


async def priced_items(items):
    # stored name, price and vendor with the quantity from the cart
    priced = []
    for item in items:
        try:
            product = await get_cart_product(item.get("id", ""))
        except HTTPException:
            raise HTTPException(
                status_code=400, detail=f"{item.get('name') or 'A product'} is no longer available") from None
        priced.append({**item, **product, "quantity": item.get("quantity", 1)})
    return priced


async def checkout_items(customer, cart):
    validate_customer_info(customer)
    if not cart.items:
        raise HTTPException(status_code=400, detail="Your cart is empty")
    return await priced_items(cart.items)


async def discard_orders(order_ids):
    for order_id in order_ids:
        try:
            await delete_order(order_id)
        except Exception as e:
            logger.error("Error discarding order %s: %s", order_id, e)


async def store_orders(customer, items, cart):
    # one order per line item, all or nothing, then the cart is emptied
    order_ids = []
    try:
        for order in order_documents(customer, items):
            order_ids.append(await add_order(order))
    except Exception as e:
        logger.error("Error placing order: %s", e)
        await discard_orders(order_ids)
        cart.notify("Failed to place order")
        raise HTTPException(status_code=503, detail="Failed to place order")
    await cart.clear(message="")
    cart.notify("Order placed successfully!")
    return order_ids


async def place_orders(customer, cart):
    items = await checkout_items(customer, cart)
    return await store_orders(customer, items, cart)


async def whatsapp_checkout(customer, cart):
    items = await checkout_items(customer, cart)
    phone = await vendor_phone(items[0].get("vendorId"))
    # message is built before the cart is cleared
    message = whatsapp_message(customer, items, items_total(items))
    link = whatsapp_link(phone, message)
    order_ids = await store_orders(customer, items, cart)
    return {"order_ids": order_ids, "whatsapp_url": link}


async def vendor_phone(vendor_id):
    if not vendor_id:
        return format_phone_number("")
    try:
        vendor = await get_vendor_by_id(vendor_id)
    except Exception as e:
        logger.error("Error fetching vendor phone: %s", e)
        vendor = None
    return format_phone_number((vendor or {}).get("phone", ""))


async def get_orders_by_customer(email: str):
    pattern = f"^{re.escape(email.strip())}$"
    orders = await orders_collection.find(
        {"customerEmail": {"$regex": pattern, "$options": "i"}}).sort("createdAt", -1).to_list(None)
    return [serialize(order) for order in orders]


async def get_orders_by_vendor(vendor_id: str):
    orders = await orders_collection.find({"vendorId": vendor_id}).sort("createdAt", -1).to_list(None)
    return [serialize(order) for order in orders]


async def get_order(order_id: str):
    object_id = to_object_id(order_id)
    order = await orders_collection.find_one({"_id": object_id}) if object_id else None
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return serialize(order)


async def update_order_status(order_id: str, new_status: str):
    order = await get_order(order_id)
    now = datetime.now(timezone.utc)
    changes = {"status": new_status, "updatedAt": now}
    if new_status in STATUS_TIMESTAMPS:
        changes[STATUS_TIMESTAMPS[new_status]] = now
    await orders_collection.update_one({"_id": to_object_id(order_id)}, {"$set": changes})
    # delivered orders leave the vendor's stock
    if new_status == "delivered" and order.get("productId") and order.get("quantity"):
        product = await product_collection.find_one({"_id": to_object_id(order["productId"])})
        if product:
            current_stock = product.get("stock") or 0
            new_stock = max(0, current_stock - order["quantity"])
            await update_product_stock(order["productId"], new_stock)
            logger.info("Product stock updated: %s -> %s", current_stock, new_stock)
    return True


async def get_order_tracking(order_id: str):
    order = await get_order(order_id)
    return tracking_steps(order)


async def delete_order(order_id: str):
    object_id = to_object_id(order_id)
    result = await orders_collection.delete_one({"_id": object_id}) if object_id else None
    return bool(result and result.deleted_count)
