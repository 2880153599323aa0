import logging
from datetime import datetime, timezone
from fastapi import HTTPException
from mongomanager import custom_orders_collection, serialize, to_object_id


logger = logging.getLogger(__name__)


async def add_custom_order(order_data: dict):
    now = datetime.now(timezone.utc)
    order = {**order_data, "createdAt": now, "updatedAt": now}
    result = await custom_orders_collection.insert_one(order)
    logger.info("Custom order added with ID: %s", result.inserted_id)
    return str(result.inserted_id)


async def get_custom_orders(status: str = None):
    query = {"status": status} if status else {}
    orders = await custom_orders_collection.find(query).sort("createdAt", -1).to_list(None)
    return [serialize(order) for order in orders]


async def get_custom_orders_by_user(uid: str):
    orders = await custom_orders_collection.find({"userId": uid}).sort("createdAt", -1).to_list(None)
    return [serialize(order) for order in orders]


async def update_custom_order_status(order_id: str, status: str):
    object_id = to_object_id(order_id)
    result = await custom_orders_collection.update_one(
        {"_id": object_id},
        {"$set": {"status": status, "updatedAt": datetime.now(timezone.utc)}}) if object_id else None
    if not result or not result.matched_count:
        raise HTTPException(status_code=404, detail="Custom order not found")
    return True
