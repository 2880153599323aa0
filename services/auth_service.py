import logging
from datetime import datetime, timedelta, timezone
from fastapi import HTTPException
from fastapi_mail import FastMail, MessageSchema
from config import PASSWORD_RESET_URL, RESET_TOKEN_MINUTES
from microservices.auth_microservice import MIN_PASSWORD_LENGTH, decode_refresh_token, generate_access_token, generate_refresh_token, generate_reset_token, validate_registration
from microservices.users_microservice import compare_passwords, createCookie, find_user_by_email, generate_uid, hash_password, public_profile
from mongomanager import reset_token_collection, users_collection
from schemas.auth_schemas import mail_config


logger = logging.getLogger(__name__)


async def signup_user(data, role: str = "customer", extra=None):
    validate_registration(data)
    email = data.email.strip().lower()
    existing_user = await find_user_by_email(email)
    if existing_user:
        raise HTTPException(status_code=400, detail="Email already registered")
    now = datetime.now(timezone.utc)
    user = {
        **(extra or {}),
        "uid": generate_uid(),
        "email": email,
        "name": data.name.strip(),
        "phone": data.phone,
        "address": data.address,
        "role": role,
        "favorites": [],
        "password": hash_password(data.password),
        "createdAt": now,
        "updatedAt": now,
    }
    await users_collection.insert_one(user)
    logger.info("Registered %s account %s", role, user["uid"])
    return public_profile(user)


async def signin_user(data, response):
    found_user = await find_user_by_email(data.email)
    if found_user is None:
        raise HTTPException(status_code=401, detail="Login failed. Please check your credentials.")
    compare_passwords(data.password, found_user["password"])
    refresh_token = generate_refresh_token(
        found_user["uid"], found_user["email"], data.remember)
    createCookie(data.remember, response, refresh_token)
    access_token = generate_access_token(found_user["uid"], found_user["email"])
    identity = {"uid": found_user["uid"], "email": found_user["email"]}
    return {"message": f"Logged in as {found_user['name']}", "access_token": access_token, "user": identity}


def refresh_access_token(request):
    refresh_token = request.cookies.get("refresh_token")
    if not refresh_token:
        return None
    identity = decode_refresh_token(refresh_token)
    if identity is None:
        return None
    return generate_access_token(identity["uid"], identity["email"])


async def send_password_reset(bg_task, email: str):
    user = await find_user_by_email(email)
    if not user:
        # same answer either way, no account probing
        logger.info("Password reset requested for unknown email")
        return True
    token = generate_reset_token()
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=RESET_TOKEN_MINUTES)
    await reset_token_collection.update_one(
        {"email": user["email"]},
        {"$set": {"email": user["email"], "token": token, "expiresAfter": expires_at}},
        upsert=True  # create new doc if not exists
    )
    message = MessageSchema(
        subject="Reset your SokoCamp password",
        recipients=[user["email"]],
        body=f"Use this link to reset your password: {PASSWORD_RESET_URL}?token={token}\n"
             f"The link expires in {RESET_TOKEN_MINUTES} minutes.",
        subtype="plain"
    )
    fm = FastMail(mail_config())
    bg_task.add_task(fm.send_message, message)
    return True


async def reset_password(data):
    if data.password != data.confirm_password:
        raise HTTPException(status_code=400, detail="Passwords do not match")
    if len(data.password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=400, detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    token_data = await reset_token_collection.find_one({"token": data.token})
    if token_data is None:
        return {"status": "failure", "message": "Reset link expired or invalid."}
    expires_at = token_data["expiresAfter"]
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    if expires_at < datetime.now(timezone.utc):
        await reset_token_collection.delete_one({"_id": token_data["_id"]})
        return {"status": "failure", "message": "Reset link expired or invalid."}
    await users_collection.update_one(
        {"email": token_data["email"]},
        {"$set": {"password": hash_password(data.password), "updatedAt": datetime.now(timezone.utc)}})
    await reset_token_collection.delete_one({"_id": token_data["_id"]})
    return {"status": "success", "message": "Password updated."}
