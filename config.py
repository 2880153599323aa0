import os
from dotenv import load_dotenv


load_dotenv()

MONGO_DB_URL = os.getenv("MONGO_DB_URL")
DB_NAME = os.getenv("DB_NAME", "SokoCamp")

JWT_SECRET_ACCESS = os.getenv("JWT_SECRET_ACCESS", "change-me-access")
JWT_SECRET_REFRESH = os.getenv("JWT_SECRET_REFRESH", "change-me-refresh")
ACCESS_TOKEN_MINUTES = int(os.getenv("ACCESS_TOKEN_MINUTES", "30"))
RESET_TOKEN_MINUTES = int(os.getenv("RESET_TOKEN_MINUTES", "60"))

EMAIL_USERNAME = os.getenv("EMAIL_USERNAME")
EMAIL_PASSWORD = os.getenv("EMAIL_PASSWORD")
PASSWORD_RESET_URL = os.getenv(
    "PASSWORD_RESET_URL", "http://localhost:5173/reset-password")

AWS_ACCESS_KEY = os.getenv("AWS_ACCESS_KEY")
AWS_SECRET_ACCESS_KEY = os.getenv("AWS_SECRET_ACCESS_KEY")
AWS_REGION = os.getenv("AWS_REGION")
AWS_S3_BUCKET_NAME = os.getenv("AWS_S3_BUCKET_NAME")

OPENAI_API_KEY = (os.getenv("OPENAI_API_KEY") or "").strip()
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
CHATBOT_TRAINING_PASSCODE = os.getenv("CHATBOT_TRAINING_PASSCODE", "1212")
SUPPORT_EMAIL = os.getenv("SUPPORT_EMAIL", "sokocamp@gmail.com")

# server side client state (cart, language) and its limits
CLIENT_STORE_TTL_DAYS = int(os.getenv("CLIENT_STORE_TTL_DAYS", "30"))
MAX_CLIENT_ORIGINS = int(os.getenv("MAX_CLIENT_ORIGINS", "1000"))
MAX_CONTEXTS_PER_ORIGIN = int(os.getenv("MAX_CONTEXTS_PER_ORIGIN", "10"))

FRONTEND_ORIGINS = [origin.strip() for origin in os.getenv(
    "FRONTEND_ORIGINS", "http://localhost:5173").split(",") if origin.strip()]

DEFAULT_VENDOR_PHONE = os.getenv("DEFAULT_VENDOR_PHONE", "255787000000")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
