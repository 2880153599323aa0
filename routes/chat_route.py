from fastapi import APIRouter, Depends, HTTPException
from microservices.chat_microservice import bot_text
from routes.dependencies import get_client
from schemas.chat_schemas import ChatMessageSchema, TrainBotSchema
from services.chat_service import chat_reply, train_bot

router = APIRouter(prefix="/chat")


@router.get("/greeting")
async def greeting(client=Depends(get_client)):
    return {"sender": "bot", "text": bot_text("greeting", client.language.current)}


@router.post("/reply")
async def reply(data: ChatMessageSchema, client=Depends(get_client)):
    if not data.message.strip():
        raise HTTPException(status_code=400, detail="Message is empty")
    return await chat_reply(data.message, client.language.current, data.vendor_id)


@router.post("/train")
async def train(data: TrainBotSchema, client=Depends(get_client)):
    # message format: question || answer
    return await train_bot(data.passcode, data.message, client.language.current)
