import logging
from datetime import datetime, timezone
from fastapi import HTTPException
from mongomanager import users_collection
from microservices.users_microservice import public_profile


logger = logging.getLogger(__name__)


async def get_user_data(uid: str):
    # profile of a signed in user, raises on database errors
    user = await users_collection.find_one({"uid": uid})
    return public_profile(user)


async def edit_user(uid: str, new_data):
    changes = {key: value for key, value in new_data.model_dump().items()
               if value is not None}
    if not changes:
        return False
    changes["updatedAt"] = datetime.now(timezone.utc)
    result = await users_collection.update_one({"uid": uid}, {"$set": changes})
    return result.matched_count > 0


async def toggle_favorite(uid: str, product_id: str):
    user = await users_collection.find_one({"uid": uid}, {"favorites": 1})
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    is_favorite = product_id in user.get("favorites", [])
    if is_favorite:
        update = {"$pull": {"favorites": product_id}}
    else:
        update = {"$addToSet": {"favorites": product_id}}
    await users_collection.update_one({"uid": uid}, update)
    return not is_favorite
