from fastapi import APIRouter, Depends, HTTPException
from routes.dependencies import get_current_user
from schemas.messages_schemas import MessageIdSchema, SendMessageSchema
from services.messages_service import delete_message, get_messages_by_recipient, mark_message_read, send_message
from services.vendors_service import get_vendor_by_uid

router = APIRouter(prefix="/messages")


@router.post("/send")
async def send(data: SendMessageSchema, user=Depends(get_current_user)):
    if not data.content.strip():
        raise HTTPException(status_code=400, detail="Message is empty")
    message_id = await send_message({
        **data.model_dump(),
        "senderId": user["uid"],
        "senderName": user.get("name", ""),
    })
    return {"status": "success", "message_id": message_id}


@router.get("/inbox")
async def inbox(user=Depends(get_current_user)):
    # vendors also receive messages addressed to their shop
    messages = await get_messages_by_recipient(user["uid"], user.get("email"))
    if user.get("role") == "vendor":
        vendor = await get_vendor_by_uid(user["uid"])
        if vendor:
            messages += await get_messages_by_recipient(vendor["id"])
    return {"status": "success", "messages": messages}


@router.post("/mark-read")
async def mark_read(data: MessageIdSchema, user=Depends(get_current_user)):
    if await mark_message_read(data.message_id):
        return {"status": "success"}
    return {"status": "failure"}


@router.post("/delete")
async def remove(data: MessageIdSchema, user=Depends(get_current_user)):
    if await delete_message(data.message_id):
        return {"status": "success"}
    return {"status": "failure"}
