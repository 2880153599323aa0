import logging
from datetime import datetime, timezone
from mongomanager import messages_collection, serialize, to_object_id


logger = logging.getLogger(__name__)


async def send_message(message_data: dict):
    message = {**message_data, "read": False, "createdAt": datetime.now(timezone.utc)}
    result = await messages_collection.insert_one(message)
    logger.info("Message sent with ID: %s", result.inserted_id)
    return str(result.inserted_id)


async def get_messages_by_recipient(recipient_id: str, recipient_email: str = None):
    recipients = [{"recipientId": recipient_id}, {"recipientEmail": recipient_id}]
    if recipient_email:
        recipients.append({"recipientEmail": recipient_email})
    messages = await messages_collection.find({"$or": recipients}).sort("createdAt", -1).to_list(None)
    return [serialize(message) for message in messages]


async def mark_message_read(message_id: str):
    object_id = to_object_id(message_id)
    if object_id is None:
        return False
    result = await messages_collection.update_one({"_id": object_id}, {"$set": {"read": True}})
    return result.matched_count > 0


async def delete_message(message_id: str):
    object_id = to_object_id(message_id)
    if object_id is None:
        return False
    result = await messages_collection.delete_one({"_id": object_id})
    return result.deleted_count > 0
