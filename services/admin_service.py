import logging
from datetime import datetime, timezone
from mongomanager import slideshow_collection, visitor_counts_collection


logger = logging.getLogger(__name__)

SLIDESHOW_ID = "settings"
VISITOR_COUNT_ID = "totalVisitors"


async def load_slideshow():
    slideshow = await slideshow_collection.find_one({"_id": SLIDESHOW_ID})
    if slideshow is None:
        # initialize with default values
        slideshow = {"_id": SLIDESHOW_ID, "enabled": True, "items": []}
        await slideshow_collection.update_one(
            {"_id": SLIDESHOW_ID}, {"$setOnInsert": {"enabled": True, "items": []}}, upsert=True)
        logger.info("Created new slideshow document")
    return {"enabled": slideshow.get("enabled", True), "items": slideshow.get("items", [])}


async def update_slideshow(slideshow):
    data = slideshow.model_dump()
    data["updatedAt"] = datetime.now(timezone.utc)
    await slideshow_collection.update_one({"_id": SLIDESHOW_ID}, {"$set": data}, upsert=True)
    return True


async def increment_visitor_count():
    await visitor_counts_collection.update_one(
        {"_id": VISITOR_COUNT_ID},
        {"$inc": {"count": 1}, "$set": {"lastUpdated": datetime.now(timezone.utc)}},
        upsert=True)


async def get_visitor_count():
    try:
        counter = await visitor_counts_collection.find_one({"_id": VISITOR_COUNT_ID})
    except Exception as e:
        logger.error("Error getting visitor count: %s", e)
        return 0
    return (counter or {}).get("count", 0)
