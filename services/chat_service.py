import logging
from datetime import datetime, timezone
from config import CHATBOT_TRAINING_PASSCODE
from microservices.chat_microservice import ChatBot, bot_text, parse_training_message
from mongomanager import chatbot_collection
from services.messages_service import send_message


logger = logging.getLogger(__name__)

KNOWLEDGE_ID = "knowledge"


async def load_knowledge():
    try:
        knowledge = await chatbot_collection.find_one({"_id": KNOWLEDGE_ID})
    except Exception as e:
        logger.error("Error loading bot responses: %s", e)
        return {}
    return (knowledge or {}).get("responses", {})


async def train_bot(passcode: str, message: str, language: str = "en"):
    # returns the system message shown in the chat
    if passcode != CHATBOT_TRAINING_PASSCODE:
        return {"status": "failure", "message": bot_text("bad_passcode", language)}
    parsed = parse_training_message(message)
    if parsed is None:
        return {"status": "failure", "message": bot_text("bad_format", language)}
    question, answer = parsed
    # questions may contain dots, so the whole map is written back
    responses = await load_knowledge()
    responses[question.lower()] = answer
    try:
        await chatbot_collection.update_one(
            {"_id": KNOWLEDGE_ID},
            {"$set": {"responses": responses,
                      "language": language,
                      "lastTrained": datetime.now(timezone.utc)}},
            upsert=True)
    except Exception as e:
        logger.error("Error training bot: %s", e)
        return {"status": "failure", "message": bot_text("training_failed", language)}
    return {"status": "success", "message": bot_text("learned", language, question=question, answer=answer)}


async def forward_to_vendor(vendor_id: str, question: str, language: str = "en"):
    try:
        await send_message({
            "senderId": "chatbot",
            "senderName": "Chatbot System",
            "recipientId": vendor_id,
            "content": bot_text("unanswered", language, question=question),
            "type": "unanswered_question",
        })
    except Exception as e:
        logger.error("Error forwarding question: %s", e)
        return bot_text("forward_failed", language)
    logger.info("Question forwarded to vendor %s", vendor_id)
    return bot_text("forwarded", language)


async def chat_reply(message: str, language: str = "en", vendor_id: str = None, bot: ChatBot = None):
    if bot is None:
        bot = ChatBot(await load_knowledge(), language)
    reply = await bot.generate_reply(message)
    result = {"reply": reply, "ai_enabled": bot.ai_enabled, "system": None}
    # unanswered questions go to the vendor when no AI is there to help
    if vendor_id and not bot.ai_enabled and bot.is_default_reply(reply):
        result["system"] = await forward_to_vendor(vendor_id, message, language)
    return result
