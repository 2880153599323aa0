import uuid
import bcrypt
from fastapi import HTTPException
from mongomanager import users_collection


async def find_user_by_email(email: str):
    # emails are stored lower case
    user = await users_collection.find_one({'email': email.strip().lower()})
    if user:
        user["_id"] = str(user["_id"])
    return user


def hash_password(password: str) -> str:
    encrypt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password.encode('utf-8'), encrypt)
    return hashed.decode('utf-8')


def compare_passwords(password: str, hashed: str):
    if bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8')):
        return True
    raise HTTPException(status_code=401, detail="Login failed. Please check your credentials.")


def generate_uid():
    return uuid.uuid4().hex


def public_profile(user):
    # never send the password hash out
    if user is None:
        return None
    profile = {key: value for key, value in user.items() if key != "password"}
    if "_id" in profile:
        profile["id"] = str(profile.pop("_id"))
    return profile


def createCookie(remember, response, refresh_token):
    cookie_age = 15 * 24 * 60 * 60 if remember else 4 * \
        60 * 60  # 15 days or 4 hours in seconds
    response.set_cookie(
        key="refresh_token",
        value=refresh_token,
        httponly=True,
        secure=True,
        samesite="none",
        path="/",
        max_age=cookie_age
    )


def deleteCookie(response):
    response.delete_cookie(
        key="refresh_token",
        httponly=True,
        secure=True,
        samesite="none",
        path="/",
    )
