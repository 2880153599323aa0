from fastapi import APIRouter, Depends, HTTPException
from microservices.translation_microservice import SUPPORTED_LANGUAGES
from routes.dependencies import get_client
from schemas.language_schemas import ChangeLanguageSchema

router = APIRouter(prefix="/language")


@router.get("/current")
async def current_language(client=Depends(get_client)):
    return {"status": "success", "language": client.language.current, "supported": list(SUPPORTED_LANGUAGES)}


@router.post("/change")
async def change_language(data: ChangeLanguageSchema, client=Depends(get_client)):
    if not await client.language.change_language(data.language):
        raise HTTPException(status_code=400, detail="Unsupported language")
    return {"status": "success", "language": client.language.current}


@router.get("/translate")
async def translate_key(key: str, client=Depends(get_client)):
    return {"key": key, "value": client.language.t(key)}


@router.get("/messages")
async def messages(client=Depends(get_client)):
    return {"language": client.language.current, "messages": client.language.messages()}
