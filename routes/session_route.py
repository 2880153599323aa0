from fastapi import APIRouter, Depends, Response
from microservices.users_microservice import deleteCookie
from routes.dependencies import get_client, get_client_key
from services.client_service import get_registry

router = APIRouter(prefix="/session")


@router.get("/state")
async def session_state(client=Depends(get_client)):
    return {"status": "success", "session": client.session.snapshot()}


@router.post("/logout")
async def logout(response: Response, client=Depends(get_client)):
    await client.session.logout()
    deleteCookie(response)
    return {"status": "success", "session": client.session.snapshot(), "cart": client.cart.snapshot()}


@router.post("/close-context")
async def close_context(key=Depends(get_client_key), registry=Depends(get_registry)):
    # sent when a tab unloads, the browser's saved cart and language stay
    registry.drop(*key)
    return {"status": "success"}
