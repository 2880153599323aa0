import secrets
from datetime import datetime, timedelta, timezone
import jwt
from email_validator import validate_email as email_verification, EmailNotValidError
from fastapi import HTTPException
from config import ACCESS_TOKEN_MINUTES, JWT_SECRET_ACCESS, JWT_SECRET_REFRESH


MIN_PASSWORD_LENGTH = 6


def validate_registration(data):
    # rejects bad input before anything touches the database
    if not data.name.strip() or not data.email.strip() or not data.password:
        raise HTTPException(status_code=400, detail="Please fill in all required fields")
    if data.password != data.confirm_password:
        raise HTTPException(status_code=400, detail="Passwords do not match")
    if len(data.password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=400, detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    try:
        email_verification(data.email, check_deliverability=False)
    except EmailNotValidError as e:
        raise HTTPException(status_code=400, detail=str(e))


def generate_refresh_token(uid: str, email: str, remember_me: bool):
    # Calculate expiration time
    expire = datetime.now(timezone.utc) + timedelta(
        days=15) if remember_me else datetime.now(timezone.utc) + timedelta(hours=4)
    to_encode = {"sub": uid, "email": email, "exp": int(expire.timestamp())}
    return jwt.encode(to_encode, JWT_SECRET_REFRESH, algorithm="HS256")


def generate_access_token(uid: str, email: str):
    expire = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_MINUTES)
    to_encode = {"sub": uid, "email": email, "exp": expire}
    return jwt.encode(to_encode, JWT_SECRET_ACCESS, algorithm="HS256")


def decode_access_token(token: str):
    # returns the identity inside a valid token, None otherwise
    try:
        payload = jwt.decode(token, JWT_SECRET_ACCESS, algorithms=["HS256"])
    except jwt.PyJWTError:
        return None
    return {"uid": payload["sub"], "email": payload.get("email")}


def decode_refresh_token(token: str):
    try:
        payload = jwt.decode(token, JWT_SECRET_REFRESH, algorithms=["HS256"])
    except jwt.PyJWTError:
        return None
    return {"uid": payload["sub"], "email": payload.get("email")}


def generate_reset_token():
    return secrets.token_urlsafe(32)
