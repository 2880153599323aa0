import logging
import re
from datetime import datetime, timezone
from fastapi import HTTPException
from mongomanager import product_collection, serialize, to_object_id, vendors_collection


logger = logging.getLogger(__name__)


async def add_vendor(vendor_data: dict):
    now = datetime.now(timezone.utc)
    vendor = {
        **vendor_data,
        "verified": False,
        "status": "active",
        "likes": 0,
        "likedBy": [],
        "createdAt": now,
        "updatedAt": now,
    }
    result = await vendors_collection.insert_one(vendor)
    logger.info("Vendor added with ID: %s", result.inserted_id)
    return str(result.inserted_id)


async def get_vendor_by_id(vendor_id: str):
    object_id = to_object_id(vendor_id)
    if object_id is None:
        return None
    vendor = await vendors_collection.find_one({"_id": object_id})
    return serialize(vendor)


async def get_vendor_by_uid(uid: str):
    vendor = await vendors_collection.find_one({"uid": uid})
    return serialize(vendor)


async def get_vendor_by_email(email: str):
    # case insensitive exact match
    pattern = f"^{re.escape(email.strip())}$"
    vendor = await vendors_collection.find_one({"email": {"$regex": pattern, "$options": "i"}})
    return serialize(vendor)


async def get_vendors():
    vendors = await vendors_collection.find({}).to_list(None)
    return [serialize(vendor) for vendor in vendors]


async def get_verified_vendors():
    vendors = await vendors_collection.find({"verified": True}).to_list(None)
    return [serialize(vendor) for vendor in vendors]


async def get_vendor_profile(vendor_id: str):
    vendor = await get_vendor_by_id(vendor_id)
    if not vendor:
        raise HTTPException(status_code=404, detail="Vendor not found")
    products = await product_collection.find({"vendorId": vendor_id}).sort("createdAt", -1).to_list(None)
    vendor["products"] = [serialize(product) for product in products]
    return vendor


async def _update_vendor(vendor_id: str, changes: dict):
    object_id = to_object_id(vendor_id)
    if object_id is None:
        raise HTTPException(status_code=404, detail="Vendor not found")
    result = await vendors_collection.update_one({"_id": object_id}, changes)
    if not result.matched_count:
        raise HTTPException(status_code=404, detail="Vendor not found")
    return True


async def verify_vendor(vendor_id: str):
    now = datetime.now(timezone.utc)
    await _update_vendor(vendor_id, {"$set": {"verified": True, "verifiedAt": now, "updatedAt": now}})
    logger.info("Vendor %s verified", vendor_id)
    return True


async def update_vendor_status(vendor_id: str, status: str):
    await _update_vendor(vendor_id, {"$set": {"status": status, "updatedAt": datetime.now(timezone.utc)}})
    logger.info("Vendor %s status set to %s", vendor_id, status)
    return True


async def update_vendor_likes(vendor_id: str, user_id: str, like: bool):
    # only counts a user once in either direction
    object_id = to_object_id(vendor_id)
    if object_id is None:
        raise HTTPException(status_code=404, detail="Vendor not found")
    if like:
        query = {"_id": object_id, "likedBy": {"$ne": user_id}}
        update = {"$inc": {"likes": 1}, "$addToSet": {"likedBy": user_id}}
    else:
        query = {"_id": object_id, "likedBy": user_id}
        update = {"$inc": {"likes": -1}, "$pull": {"likedBy": user_id}}
    result = await vendors_collection.update_one(query, update)
    return result.modified_count > 0
