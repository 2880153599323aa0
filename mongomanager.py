import motor.motor_asyncio
from bson import ObjectId
from bson.errors import InvalidId
from config import DB_NAME, MONGO_DB_URL


client = motor.motor_asyncio.AsyncIOMotorClient(MONGO_DB_URL)
db = client.get_database(DB_NAME)

users_collection = db.get_collection("Users")
reset_token_collection = db.get_collection("Tokens")
product_collection = db.get_collection("Products")
vendors_collection = db.get_collection("Vendors")
orders_collection = db.get_collection("Orders")
messages_collection = db.get_collection("Messages")
slideshow_collection = db.get_collection("Slideshow")
chatbot_collection = db.get_collection("Chatbot")
visitor_counts_collection = db.get_collection("VisitorCounts")
custom_orders_collection = db.get_collection("CustomOrders")
client_stores_collection = db.get_collection("ClientStores")


def to_object_id(id: str):
    # returns None for ids that are not valid ObjectIds
    try:
        return ObjectId(id)
    except (InvalidId, TypeError):
        return None


def serialize(document):
    # change _id to a str id so the document can be sent as json
    if document is None:
        return None
    document = dict(document)
    if "_id" in document:
        document["id"] = str(document.pop("_id"))
    return document
