from fastapi_mail import ConnectionConfig
from config import EMAIL_PASSWORD, EMAIL_USERNAME


def mail_config():
    # built on demand so the app starts without mail credentials
    return ConnectionConfig(
        MAIL_USERNAME=EMAIL_USERNAME or "",
        MAIL_PASSWORD=EMAIL_PASSWORD or "",
        MAIL_FROM=f"{EMAIL_USERNAME or 'sokocamp'}@gmail.com",
        MAIL_PORT=587,
        MAIL_SERVER="smtp.gmail.com",
        MAIL_FROM_NAME='SokoCamp',
        MAIL_STARTTLS=True,
        MAIL_SSL_TLS=False,
        VALIDATE_CERTS=True,
    )
