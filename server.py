import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from config import CLIENT_STORE_TTL_DAYS, FRONTEND_ORIGINS, LOG_LEVEL
from microservices.storage_microservice import ensure_store_indexes
from mongomanager import client_stores_collection
from routes.admin_route import router as admin_router
from routes.auth_route import router as auth_router
from routes.cart_route import router as cart_router
from routes.chat_route import router as chat_router
from routes.custom_orders_route import router as custom_orders_router
from routes.language_route import router as language_router
from routes.messages_route import router as messages_router
from routes.orders_route import router as orders_router
from routes.products_route import router as products_router
from routes.session_route import router as session_router
from routes.user_route import router as user_router
from routes.vendors_route import router as vendors_router


logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await ensure_store_indexes(client_stores_collection, CLIENT_STORE_TTL_DAYS)
    except Exception as e:
        logger.error("Error creating client store indexes: %s", e)
    yield


app = FastAPI(lifespan=lifespan)


app.include_router(admin_router)
app.include_router(auth_router)
app.include_router(cart_router)
app.include_router(chat_router)
app.include_router(custom_orders_router)
app.include_router(language_router)
app.include_router(messages_router)
app.include_router(orders_router)
app.include_router(products_router)
app.include_router(session_router)
app.include_router(user_router)
app.include_router(vendors_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=FRONTEND_ORIGINS,
    allow_credentials=True,  # client_id cookie and bearer header
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def connection():
    return {"message": "Connected Successfully"}
