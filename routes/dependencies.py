import re
import uuid
from typing import Optional
from fastapi import Depends, Header, HTTPException, Request, Response
from microservices.auth_microservice import decode_access_token
from services.client_service import DEFAULT_CONTEXT, ClientRegistry, get_registry
from services.users_service import get_user_data
from services.vendors_service import get_vendor_by_uid


CLIENT_COOKIE = "client_id"
CLIENT_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")
MAX_CONTEXT_ID_LENGTH = 64


def get_client_key(request: Request, response: Response, x_context_id: Optional[str] = Header(None)):
    # one client per browser (cookie), one context per tab (header)
    client_id = request.cookies.get(CLIENT_COOKIE)
    if not client_id or not CLIENT_ID_PATTERN.match(client_id):
        client_id = uuid.uuid4().hex
        response.set_cookie(key=CLIENT_COOKIE, value=client_id, httponly=True,
                            samesite="lax", path="/", max_age=365 * 24 * 60 * 60)
    return client_id, (x_context_id or DEFAULT_CONTEXT)[:MAX_CONTEXT_ID_LENGTH]


async def get_client(key=Depends(get_client_key), registry: ClientRegistry = Depends(get_registry)):
    return await registry.get(*key)


def get_current_identity(authorization: Optional[str] = Header(None)):
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Not authenticated")
    identity = decode_access_token(authorization.split(" ", 1)[1].strip())
    if identity is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    return identity


async def get_current_user(identity=Depends(get_current_identity)):
    user = await get_user_data(identity["uid"])
    if user is None:
        raise HTTPException(status_code=401, detail="User not found")
    return user


async def require_admin(user=Depends(get_current_user)):
    if user.get("role") != "admin":
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


async def require_vendor(user=Depends(get_current_user)):
    # inactive vendors are blocked from managing their shop
    if user.get("role") != "vendor":
        raise HTTPException(status_code=403, detail="Vendor access required")
    vendor = await get_vendor_by_uid(user["uid"])
    if vendor is None:
        raise HTTPException(status_code=404, detail="Vendor not found")
    if vendor.get("status") == "inactive":
        raise HTTPException(status_code=403, detail="Your vendor account has been deactivated")
    return vendor


async def get_optional_user(authorization: Optional[str] = Header(None)):
    # guests are allowed, a bad token is not
    if not authorization:
        return None
    return await get_current_user(get_current_identity(authorization))
